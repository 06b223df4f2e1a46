"""Row container: an ordered, growable list of owned byte-string fields."""

from typing import Iterable, Iterator, List, Optional, Union

from .errors import OUT_OF_MEMORY

INITIAL_CAPACITY = 32

FieldLike = Union[bytes, bytearray, memoryview, str]


class Row:
    """
    One CSV row.

    A row with zero fields (an empty line) is a legal value and is not
    the same as a row holding a single empty field.
    """

    __slots__ = ('_fields', '_len')

    def __init__(self):
        try:
            self._fields: List[Optional[bytes]] = [None] * INITIAL_CAPACITY
        except MemoryError:
            raise OUT_OF_MEMORY.with_traceback(None) from None
        self._len = 0

    @classmethod
    def from_fields(cls, fields: Iterable[FieldLike], encoding: str = 'utf-8') -> 'Row':
        """Build a row from bytes-like or ``str`` values (``str`` is encoded)."""
        row = cls()
        for field in fields:
            if isinstance(field, str):
                field = field.encode(encoding)
            row.append_field(field)
        return row

    @property
    def capacity(self) -> int:
        return len(self._fields)

    def append_field(self, data: FieldLike, length: Optional[int] = None) -> None:
        """
        Copy ``data[:length]`` into a new field at the end of the row.

        When ``length`` is omitted the whole of ``data`` is copied.
        """
        if isinstance(data, str):
            raise TypeError("fields are bytes; use Row.from_fields() to encode text")
        if self._len >= len(self._fields):
            self._expand()
        try:
            field = bytes(data) if length is None else bytes(data[:length])
        except MemoryError:
            raise OUT_OF_MEMORY.with_traceback(None) from None
        self._fields[self._len] = field
        self._len += 1

    def _expand(self) -> None:
        try:
            self._fields.extend([None] * len(self._fields))
        except MemoryError:
            raise OUT_OF_MEMORY.with_traceback(None) from None

    def field_count(self) -> int:
        return self._len

    def field_at(self, index: int) -> bytes:
        if not 0 <= index < self._len:
            raise IndexError(f"field index {index} out of range (field_count={self._len})")
        return self._fields[index]

    def reset(self) -> None:
        """Drop every field but keep the backing storage for reuse."""
        for i in range(self._len):
            self._fields[i] = None
        self._len = 0

    def to_list(self) -> List[bytes]:
        return self._fields[:self._len]

    def decode(self, encoding: str = 'utf-8', errors: str = 'strict') -> List[str]:
        return [f.decode(encoding, errors) for f in self._fields[:self._len]]

    def __len__(self) -> int:
        return self._len

    def __getitem__(self, index: int) -> bytes:
        if index < 0:
            index += self._len
        return self.field_at(index)

    def __iter__(self) -> Iterator[bytes]:
        for i in range(self._len):
            yield self._fields[i]

    def __eq__(self, other) -> bool:
        if isinstance(other, Row):
            return self.to_list() == other.to_list()
        if isinstance(other, (list, tuple)):
            return self.to_list() == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"Row({self.to_list()!r})"
