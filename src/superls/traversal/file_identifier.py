"""File identifier for uniquely identifying directories by device and inode."""

import os
from typing import Any, Optional


class FileIdentifier:
    """Class for uniquely identifying files and directories by their device and inode.

    Used for symlink loop detection when symlinks are followed: the identifiers of the
    directories on the current descent path are tracked, and a link resolving to one of
    them would re-enter an ancestor.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.
    """

    def __init__(self, device_id: int, inode_number: int):
        self.device_id = device_id
        self.inode_number = inode_number

    @classmethod
    def for_path(cls, path: str) -> Optional["FileIdentifier"]:
        """Build the identifier of the file a path resolves to.

        Args:
            path: Path to stat. Symlinks are followed.

        Returns:
            The identifier, or None if the path cannot be stat'ed (broken link,
            permission denied, removed meanwhile).
        """
        try:
            stat_info = os.stat(path)
        except OSError:
            return None
        return cls(stat_info.st_dev, stat_info.st_ino)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FileIdentifier):
            return False
        return self.device_id == other.device_id and self.inode_number == other.inode_number

    def __hash__(self) -> int:
        return hash((self.device_id, self.inode_number))

    def __repr__(self) -> str:
        return f"FileIdentifier(device_id={self.device_id}, inode_number={self.inode_number})"
