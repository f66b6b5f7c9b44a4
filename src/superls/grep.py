"""Single-match search of a file's lines."""

from typing import Optional, Pattern

from superls.types import PathType


class GrepMatch:
    """The first line of a file matching a search pattern.

    Attributes:
        path (str): Path of the file, as it was passed to :func:`grep_file`.
        line_number (int): 1-based number of the matching line.
        line (str): The matching line without its line terminator.

    Example:
        >>> str(GrepMatch("root/a.txt", 2, "match1"))
        'root/a.txt:2: match1'
    """

    def __init__(self, path: str, line_number: int, line: str) -> None:
        self.path = path
        self.line_number = line_number
        self.line = line

    def __str__(self) -> str:
        return f"{self.path}:{self.line_number}: {self.line}"

    def __repr__(self) -> str:
        return f"GrepMatch(path={self.path!r}, line_number={self.line_number}, line={self.line!r})"


def grep_file(path: PathType, pattern: Pattern[str]) -> Optional[GrepMatch]:
    """Find the first line of a file that matches a pattern.

    The file is read line by line as UTF-8 and reading stops at the first line where
    the pattern matches anywhere in the line, so at most one match is reported per
    file. Lines are split on ``\\n`` only; a trailing ``\\r`` is removed before matching.

    Args:
        path: File to search.
        pattern: Compiled regular expression.

    Returns:
        The first matching line, or None if no line matches.

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If a line read before the first match is not valid UTF-8.
    """
    with open(path, "rb") as f:
        for line_number, raw_line in enumerate(f, start=1):
            line = raw_line.decode("utf-8")
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            if pattern.search(line):
                return GrepMatch(str(path), line_number, line)
    return None
