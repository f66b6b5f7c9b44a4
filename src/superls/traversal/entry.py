"""Entry representation for items found while listing a directory."""

from typing import Optional

from superls.types import EntryType


class Entry:
    """A single item of a directory listing.

    Entries are produced by :class:`~superls.traversal.directory_reader.DirectoryReader`
    for the immediate children of one directory and are not kept once that directory
    has been processed.

    Attributes:
        path (str): The parent path joined with the name, as produced by the listing.
        name (str): The base name of the item.
        entry_type (EntryType): Whether the item is a file, a directory, or a symlink leaf.
        relative_path (str): Forward-slash path relative to the traversal root.
        symlink_target (Optional[str]): Link target for symlink leaves, if readable.

    Example:
        >>> entry = Entry("root/archive.tar.gz", "archive.tar.gz", EntryType.FILE)
        >>> entry.extension
        'gz'
        >>> Entry("root/.bashrc", ".bashrc", EntryType.FILE).extension is None
        True
    """

    def __init__(
        self,
        path: str,
        name: str,
        entry_type: EntryType,
        relative_path: Optional[str] = None,
        symlink_target: Optional[str] = None,
    ) -> None:
        self.path = path
        self.name = name
        self.entry_type = entry_type
        self.relative_path = relative_path if relative_path is not None else name
        self.symlink_target = symlink_target

    @property
    def is_dir(self) -> bool:
        return self.entry_type is EntryType.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.entry_type is EntryType.FILE

    @property
    def is_symlink(self) -> bool:
        return self.entry_type is EntryType.SYMLINK

    @property
    def extension(self) -> Optional[str]:
        """The text after the last dot of the name, without the dot.

        A name without a dot, or whose only dot is its first character, has no
        extension. A trailing dot gives the empty extension.
        """
        stem, dot, extension = self.name.rpartition(".")
        if not dot or not stem:
            return None
        return extension

    def __repr__(self) -> str:
        return f"Entry(path={self.path!r}, entry_type={self.entry_type.name})"
