"""Listing of the immediate children of a directory."""

import os
from contextlib import contextmanager
from typing import Iterator, List, Set

from superls.traversal.entry import Entry
from superls.traversal.file_identifier import FileIdentifier
from superls.types import EntryType

LOOP_DETECTED = "[loop detected]"


class DirectoryReader:
    """Lists one directory level at a time and classifies each child.

    Children are returned sorted by name (plain code point order), so the output of a
    traversal does not depend on the order in which the platform returns directory
    entries. A directory that cannot be read yields no entries at all; listing errors
    are never raised to the caller.

    Symbolic Link Behavior:
        By default symlinks are not followed and every symlink is a SYMLINK leaf.
        With ``follow_symlinks=True`` a link is classified by its target. Directories
        entered through :meth:`descend` are tracked by device and inode, and a link that
        resolves to one of them is reported as a SYMLINK leaf with the target
        ``"[loop detected]"`` instead of a directory, so the traversal cannot cycle.

    Attributes:
        follow_symlinks (bool): Whether symlinks are classified by their target.
    """

    def __init__(self, follow_symlinks: bool = False) -> None:
        self.follow_symlinks = follow_symlinks
        self._active_dirs: Set[FileIdentifier] = set()

    def read(self, path: str, relative_path: str = "") -> List[Entry]:
        """List the immediate children of a directory.

        Args:
            path: Directory to list. Child paths are this path joined with their names.
            relative_path: Path of the directory relative to the traversal root ("" for the root).

        Returns:
            The children sorted by name, or an empty list if the directory cannot be listed.
        """
        try:
            with os.scandir(path) as it:
                dir_entries = list(it)
        except OSError:
            return []

        entries = []
        for dir_entry in dir_entries:
            child_relative_path = f"{relative_path}/{dir_entry.name}" if relative_path else dir_entry.name
            entries.append(self._classify(dir_entry, child_relative_path))
        return sorted(entries, key=lambda entry: entry.name)

    @contextmanager
    def descend(self, path: str) -> Iterator[None]:
        """Mark a directory as being on the current descent path while the block runs."""
        file_id = FileIdentifier.for_path(path) if self.follow_symlinks else None
        if file_id is None or file_id in self._active_dirs:
            yield
            return

        self._active_dirs.add(file_id)
        try:
            yield
        finally:
            self._active_dirs.discard(file_id)

    def _classify(self, dir_entry: "os.DirEntry[str]", relative_path: str) -> Entry:
        try:
            is_symlink = dir_entry.is_symlink()
        except OSError:
            is_symlink = False

        if not is_symlink:
            try:
                is_dir = dir_entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            entry_type = EntryType.DIRECTORY if is_dir else EntryType.FILE
            return Entry(dir_entry.path, dir_entry.name, entry_type, relative_path)

        if self.follow_symlinks:
            file_id = FileIdentifier.for_path(dir_entry.path)
            if file_id is not None:
                if file_id in self._active_dirs:
                    return Entry(dir_entry.path, dir_entry.name, EntryType.SYMLINK, relative_path, LOOP_DETECTED)
                try:
                    is_dir = dir_entry.is_dir()
                except OSError:
                    is_dir = False
                entry_type = EntryType.DIRECTORY if is_dir else EntryType.FILE
                return Entry(dir_entry.path, dir_entry.name, entry_type, relative_path)

        # Not followed, or a broken link
        try:
            target = os.readlink(dir_entry.path)
        except OSError:
            target = None
        return Entry(dir_entry.path, dir_entry.name, EntryType.SYMLINK, relative_path, target)
