"""
Byte-level source and sink used by the parser and writer.

Neither class owns the stream it wraps: closing files, pipes or
stdin/stdout is left to the caller.
"""

from typing import BinaryIO, Optional

from .errors import CsvIOError

EOF = b''


class ByteSource:
    """Reads one byte at a time, with room to push one byte back."""

    __slots__ = ('_stream', '_pushback')

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._pushback: Optional[bytes] = None

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def getc(self) -> bytes:
        """Return the next byte, or ``EOF`` when the stream is exhausted."""
        if self._pushback is not None:
            c = self._pushback
            self._pushback = None
            return c
        try:
            c = self._stream.read(1)
        except OSError as e:
            raise CsvIOError(f"read failed: {e}") from e
        if c is None:
            # non-blocking stream with nothing ready
            raise CsvIOError("read failed: no data available")
        return c

    def ungetc(self, c: bytes) -> None:
        """Push ``c`` back so the next ``getc`` returns it. EOF is ignored."""
        if c == EOF:
            return
        if self._pushback is not None:
            raise RuntimeError("only one byte of pushback is supported")
        self._pushback = c


class ByteSink:
    """Funnels every write through one place so I/O errors surface uniformly."""

    __slots__ = ('_stream',)

    def __init__(self, stream: BinaryIO):
        self._stream = stream

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def write(self, data: bytes) -> None:
        try:
            self._stream.write(data)
        except OSError as e:
            raise CsvIOError(f"write failed: {e}") from e

    def flush(self) -> None:
        try:
            self._stream.flush()
        except OSError as e:
            raise CsvIOError(f"flush failed: {e}") from e
