"""Growable byte buffer holding the field currently being scanned."""

from .errors import OUT_OF_MEMORY

INITIAL_CAPACITY = 256


class FieldBuffer:
    """
    Accumulates bytes with amortized O(1) append.

    Storage doubles when full and is kept across ``reset`` so the
    parser can reuse one buffer for every field of a row.
    """

    __slots__ = ('_data', '_len')

    def __init__(self, capacity: int = INITIAL_CAPACITY):
        try:
            self._data = bytearray(max(capacity, 1))
        except MemoryError:
            raise OUT_OF_MEMORY.with_traceback(None) from None
        self._len = 0

    def __len__(self) -> int:
        return self._len

    @property
    def capacity(self) -> int:
        return len(self._data)

    def append(self, c: bytes) -> None:
        """Append a single byte (``bytes`` of length 1, or an int)."""
        if self._len >= len(self._data):
            self._grow()
        self._data[self._len] = c[0] if isinstance(c, (bytes, bytearray)) else c
        self._len += 1

    def _grow(self) -> None:
        try:
            grown = bytearray(len(self._data) * 2)
        except MemoryError:
            raise OUT_OF_MEMORY.with_traceback(None) from None
        grown[:self._len] = self._data[:self._len]
        self._data = grown

    def reset(self) -> None:
        self._len = 0

    def contents(self) -> bytes:
        return bytes(self._data[:self._len])
