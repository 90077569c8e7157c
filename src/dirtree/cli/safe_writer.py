"""Signal-aware output writer for the dirtree CLI."""

import errno
import os
import types
from pathlib import Path
from typing import IO, Optional, Type, Union

from dirtree.cli.signal_handler import signal_handler
from dirtree.types import PathType


class SafeWriter:
    """Writes rendered lines to a file descriptor or a file, stopping on interruption.

    A file descriptor (normally stdout) is written to but never closed; a path
    is opened for writing and closed when the writer is closed. Every write
    first checks whether SIGPIPE or SIGINT has been received and raises
    BrokenPipeError if so, which callers treat as "stop writing".

    Attributes:
        file: The file descriptor or path given at construction.
        fd: The file descriptor being written to.

    Example:
        >>> import tempfile, os
        >>> with tempfile.TemporaryDirectory() as tmp:
        ...     target = os.path.join(tmp, "out.txt")
        ...     with SafeWriter(target) as writer:
        ...         writer.write("project\\n")
        ...     with open(target, encoding="utf-8") as f:
        ...         f.read()
        'project\\n'
    """

    def __init__(self, file: Union[int, PathType]):
        """Initialize the writer.

        Args:
            file: A file descriptor, or a path to create or truncate.

        Raises:
            TypeError: If file is neither a file descriptor nor path-like.
        """
        self.file = file
        self._closed = False
        self._owned_file: Optional[IO[str]] = None

        if isinstance(file, int):
            self.fd = file
        elif isinstance(file, (str, os.PathLike)):
            self._owned_file = Path(file).open("w", encoding="utf-8")
            self.fd = self._owned_file.fileno()
        else:
            raise TypeError(f"SafeWriter needs a file descriptor or a path, got {type(file).__name__}")

    def write(self, data: str) -> None:
        """Write data as UTF-8.

        Raises:
            BrokenPipeError: If a signal was received or the reader went away.
            OSError: For any other I/O failure.
            ValueError: If the writer has been closed.
        """
        if self._closed:
            raise ValueError("SafeWriter is closed")

        if signal_handler.interrupted:
            raise BrokenPipeError()

        payload = data.encode("utf-8")
        try:
            # os.write may write fewer bytes than requested
            while payload:
                written = os.write(self.fd, payload)
                payload = payload[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise

    def close(self) -> None:
        """Close the underlying file if this writer opened it.

        The writer is marked closed even when the close hits a broken pipe.
        """
        if self._closed:
            return

        if self._owned_file is not None:
            try:
                self._owned_file.close()
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
        """Close the writer, letting an exception from the with block take precedence."""
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise
