"""Signal-aware output stream for the superls CLI.

This module provides a minimal text stream that the rich console writes the listing
to. It checks for interruption signals before every write and turns a closed pipe
into a BrokenPipeError the CLI can catch.
"""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from superls.cli.interrupts import interrupts


class SafeWriter:
    """Text stream over a file descriptor that stops writing once interrupted.

    The writer implements the part of the text file interface that
    :class:`rich.console.Console` relies on (``write``, ``flush``, ``isatty``,
    ``fileno`` and ``encoding``), so it can be passed as the console's file.

    Attributes:
        file: Either a file path or file descriptor for output.
        fd: The actual file descriptor being written to.
        encoding: Always "utf-8".
    """

    encoding = "utf-8"

    def __init__(self, file: Union[int, str, os.PathLike]):
        """Initialize the safe writer.

        Args:
            file: Either a file descriptor (int) or a path to create or truncate.
        """
        self.file = file
        self._closed = False

        if isinstance(file, int):
            self.fd = file
            self._file_obj = None
        elif isinstance(file, (str, os.PathLike)):
            path = Path(file)
            self._file_obj = path.open("w")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: str) -> int:
        """Safely write data with signal checking.

        Args:
            data: String data to write.

        Returns:
            The number of characters written.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received or the pipe is broken.
            OSError: If an I/O error occurs during writing.
            ValueError: If attempting to write to a closed writer.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if interrupts.interrupted:
            raise BrokenPipeError()

        encoded = data.encode(self.encoding)
        try:
            while encoded:
                written = os.write(self.fd, encoded)
                encoded = encoded[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise
        return len(data)

    def flush(self) -> None:
        # Writes go straight to the descriptor
        pass

    def isatty(self) -> bool:
        if self._closed:
            return False
        return os.isatty(self.fd)

    def fileno(self) -> int:
        return self.fd

    def close(self) -> None:
        """Close the file if it was opened by this class.

        The writer is marked as closed even if closing fails with a broken pipe error.
        """
        if self._closed:
            return

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Close the writer, letting an exception from the with block take priority."""
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise
