"""Skip decisions for directory entries."""

from typing import Optional

from superls.filtering.filter_config import FilterConfig
from superls.traversal.directory_reader import DirectoryReader
from superls.traversal.entry import Entry


class EntryFilter:
    """Decides, for a single entry, whether it is left out of the listing.

    An entry is skipped when any of these holds:

    - it is a directory whose name is an ignored directory name;
    - it is not a directory and its extension is an ignored extension;
    - an allow-list of extensions is configured, it is not a directory, and its
      extension is not in the allow-list;
    - exclusion rules are configured and match its path relative to the root.

    The deny list wins over the allow-list: an extension present in both is skipped.
    Entries without an extension are never skipped by the deny list and always
    skipped by an active allow-list.

    Attributes:
        config (FilterConfig): The filtering rules.
        reader (DirectoryReader): Listing primitive used for pruning checks.

    Example:
        >>> from superls.types import EntryType
        >>> entry_filter = EntryFilter(FilterConfig.create(desired_extensions=["txt"]))
        >>> entry_filter.should_skip(Entry("root/notes.md", "notes.md", EntryType.FILE))
        True
        >>> entry_filter.should_skip(Entry("root/docs", "docs", EntryType.DIRECTORY))
        False
    """

    def __init__(self, config: FilterConfig, reader: Optional[DirectoryReader] = None) -> None:
        self.config = config
        self.reader = reader if reader is not None else DirectoryReader()

    def is_ignored_dir(self, entry: Entry) -> bool:
        return entry.is_dir and entry.name in self.config.ignored_dirs

    def is_ignored_extension(self, entry: Entry) -> bool:
        if entry.is_dir:
            return False
        extension = entry.extension
        return extension is not None and extension in self.config.ignored_extensions

    def is_desired_extension(self, entry: Entry) -> bool:
        desired_extensions = self.config.desired_extensions
        if desired_extensions is None or entry.is_dir:
            return True
        extension = entry.extension
        return extension is not None and extension in desired_extensions

    def is_excluded_by_rules(self, entry: Entry) -> bool:
        """Check the entry's relative path against the configured exclusion rules.

        Directories are also checked with a trailing slash so that directory-only
        patterns such as ``build/`` match them.
        """
        rules = self.config.exclusion_rules
        if rules is None:
            return False
        if rules.exclude(entry.relative_path):
            return True
        return entry.is_dir and rules.exclude(entry.relative_path + "/")

    def should_skip(self, entry: Entry) -> bool:
        return (
            self.is_ignored_dir(entry)
            or self.is_ignored_extension(entry)
            or not self.is_desired_extension(entry)
            or self.is_excluded_by_rules(entry)
        )

    def is_directory_empty_or_filtered(self, path: str, relative_path: str = "") -> bool:
        """Check whether a directory would show nothing.

        Only the immediate children are inspected; the check does not recurse.

        Args:
            path: Directory to inspect.
            relative_path: Path of the directory relative to the traversal root.

        Returns:
            True if the directory has no children or every child is skipped.
        """
        return all(self.should_skip(entry) for entry in self.reader.read(path, relative_path))
