from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class EntryType(Enum):
    """Enumeration of entry types produced while listing a directory.

    Attributes:
        FILE: Regular file (or anything that is neither a directory nor a symlink leaf)
        DIRECTORY: Directory that the traversal may descend into
        SYMLINK: Symbolic link that is not followed
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
