"""Filtered depth-first listing of a directory tree with optional in-file search.

This module provides the TreeLister class, which walks a directory tree, leaves out
skipped entries, prunes subtrees that would show nothing, and reports the first line
matching a search pattern in each listed file.
"""

import os
import sys
from typing import Iterator, Optional, TextIO

from superls.entry_formatter import EntryFormatter
from superls.filtering.entry_filter import EntryFilter
from superls.filtering.filter_config import FilterConfig
from superls.grep import grep_file
from superls.traversal.directory_reader import DirectoryReader
from superls.traversal.entry import Entry
from superls.types import EntryType, PathType


class TreeLister:
    """Depth-first, parent-before-children listing of a filtered directory tree.

    Every directory is checked before it is listed: if it has no children, or every
    immediate child is skipped by the filter, nothing below it is listed. A directory's
    own line is only emitted once its subtree has produced a line, so a directory whose
    whole subtree shows nothing is invisible too. Kept children are shown in name order,
    one level of indentation deeper than their directory. Files are searched for the
    configured pattern right after their own line.

    Output is produced lazily, so lines come out in the same order as the traversal
    visits entries, and diagnostics for unreadable files are written to the error stream
    at the point where the file is reached. Directories that cannot be listed are
    treated as empty.

    Streaming properties:
    - Counters are updated as lines are produced and reset at the start of each run
    - Running twice over an unchanged tree produces identical output

    Attributes:
        config (FilterConfig): The filtering and search configuration.
        follow_symlinks (bool): Whether symlinks are classified by their targets.
        directory_count (int): Directories listed in the last run (root excluded).
        file_count (int): Files listed in the last run.
        symlink_count (int): Symlink leaves listed in the last run.
        match_count (int): Files with a pattern match in the last run.

    Example:
        >>> lister = TreeLister(FilterConfig.create(ignored_extensions=["log"]))  # doctest: +SKIP
        >>> print(lister.get_listing("root"))  # doctest: +SKIP
        🗂 root
          📄 a.txt
    """

    def __init__(
        self,
        config: FilterConfig,
        follow_symlinks: bool = False,
        formatter: Optional[EntryFormatter] = None,
        error_stream: Optional[TextIO] = None,
    ) -> None:
        """Initialize a TreeLister.

        Args:
            config: Filtering rules and optional search pattern.
            follow_symlinks: Whether to follow symbolic links. Symlink loops are
                detected and shown as leaves. Defaults to False.
            formatter: Renders output lines. Defaults to an EntryFormatter without colors.
            error_stream: Where diagnostics for unreadable files go. Defaults to
                sys.stderr at the time of writing.
        """
        self.config = config
        self.follow_symlinks = follow_symlinks
        self._reader = DirectoryReader(follow_symlinks=follow_symlinks)
        self._filter = EntryFilter(config, self._reader)
        self._formatter = formatter if formatter is not None else EntryFormatter()
        self._error_stream = error_stream
        self._reset_counts()

    def stream_lines(self, root: PathType) -> Iterator[str]:
        """Generate the listing one line at a time.

        The first line shows the root exactly as given; its children start one level
        deeper. If the root itself is empty or fully filtered, nothing is generated.

        Args:
            root: Directory to list.

        Yields:
            Output lines, without line terminators. Entry lines carry ANSI color codes
            when the formatter has a color system.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
        """
        root_path = self.validate_root(root)
        self._reset_counts()

        with self._reader.descend(root_path):
            lines = self.list_directory(root_path, 1)
            first_line = next(lines, None)
            if first_line is None:
                return
            yield self._formatter.format_line(EntryType.DIRECTORY, root_path, 0)
            yield first_line
            yield from lines

    @staticmethod
    def validate_root(root: PathType) -> str:
        """Check that a traversal root is an existing directory.

        Args:
            root: Path to check.

        Returns:
            The root as a string, unchanged.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
        """
        root_path = os.fspath(root)
        if not os.path.exists(root_path):
            raise FileNotFoundError(f"Root path does not exist: {root_path}")
        if not os.path.isdir(root_path):
            raise NotADirectoryError(f"Root path is not a directory: {root_path}")
        return root_path

    def get_listing(self, root: PathType) -> str:
        """Get the complete listing, lines joined with newlines."""
        return "\n".join(self.stream_lines(root))

    def list_directory(self, path: str, depth: int, relative_path: str = "") -> Iterator[str]:
        """Generate the lines for the children of a directory, or nothing if it is pruned.

        Args:
            path: Directory whose children are listed.
            depth: Indentation level of the children.
            relative_path: Path of the directory relative to the traversal root.

        Yields:
            Output lines for the kept children and everything below them.
        """
        if os.path.isdir(path) and self._filter.is_directory_empty_or_filtered(path, relative_path):
            return

        for entry in self._reader.read(path, relative_path):
            if self._filter.should_skip(entry):
                continue

            if entry.is_dir:
                yield from self._list_subdirectory(entry, depth)
                continue

            yield self._formatter.format_entry(entry, depth)

            if entry.is_file:
                self.file_count += 1
                if self.config.pattern is not None:
                    yield from self._grep(entry)
            else:
                self.symlink_count += 1

    def _list_subdirectory(self, entry: Entry, depth: int) -> Iterator[str]:
        # The directory line is held back until its subtree produces a line, so a
        # subtree whose kept directories all end up empty shows nothing at all
        with self._reader.descend(entry.path):
            lines = self.list_directory(entry.path, depth + 1, entry.relative_path)
            first_line = next(lines, None)
            if first_line is None:
                return
            self.directory_count += 1
            yield self._formatter.format_entry(entry, depth)
            yield first_line
            yield from lines

    def _grep(self, entry: Entry) -> Iterator[str]:
        assert self.config.pattern is not None
        try:
            match = grep_file(entry.path, self.config.pattern)
        except (OSError, UnicodeDecodeError) as e:
            error_stream = self._error_stream if self._error_stream is not None else sys.stderr
            print(f"Error reading {entry.path}: {e}", file=error_stream)
            return

        if match is not None:
            self.match_count += 1
            yield self._formatter.format_match(match)

    def _reset_counts(self) -> None:
        self.directory_count = 0
        self.file_count = 0
        self.symlink_count = 0
        self.match_count = 0
