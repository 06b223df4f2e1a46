"""Tests for Row, FieldBuffer, the byte source and error values."""

import io

import pytest

from strictcsv import (
    OUT_OF_MEMORY,
    ByteSource,
    CsvConfigError,
    CsvError,
    CsvFormatError,
    CsvIOError,
    CsvOutOfMemoryError,
    ErrorKind,
    FieldBuffer,
    Row,
    make_error,
    release_error,
)
from strictcsv import buffer as buffer_module
from strictcsv import row as row_module


def _out_of_memory(*args):
    raise MemoryError


class _NoRoomList(list):
    def extend(self, items):
        raise MemoryError


class TestRow:
    """Row container behaviour."""

    def test_new_row_is_empty(self):
        """Test a new row has no fields."""
        row = Row()
        assert row.field_count() == 0
        assert len(row) == 0
        assert row.to_list() == []

    def test_append_keeps_order(self):
        """Test fields come back in insertion order."""
        row = Row()
        for value in (b"a", b"b", b"c"):
            row.append_field(value)
        assert [row.field_at(i) for i in range(row.field_count())] == [b"a", b"b", b"c"]

    def test_append_with_length(self):
        """Test only the first length bytes are copied."""
        row = Row()
        row.append_field(b"abcdef", 3)
        assert row.field_at(0) == b"abc"

    def test_append_copies(self):
        """Test the row owns a copy of mutable input."""
        data = bytearray(b"abc")
        row = Row()
        row.append_field(data)
        data[0] = ord("z")
        assert row.field_at(0) == b"abc"

    def test_append_rejects_text(self):
        """Test str must go through from_fields."""
        with pytest.raises(TypeError):
            Row().append_field("abc")

    def test_grows_past_initial_capacity(self):
        """Test the backing array doubles when full."""
        row = Row()
        start = row.capacity
        for i in range(start + 1):
            row.append_field(str(i).encode())
        assert row.field_count() == start + 1
        assert row.capacity == start * 2
        assert row.field_at(start) == str(start).encode()

    def test_initial_capacity(self):
        """Test the backing array starts small."""
        assert Row().capacity == row_module.INITIAL_CAPACITY == 32

    @pytest.mark.parametrize("index", [1, 5, -1])
    def test_field_at_out_of_range(self, index):
        """Test out-of-range access is a programming error."""
        row = Row.from_fields([b"only"])
        with pytest.raises(IndexError):
            row.field_at(index)

    def test_negative_subscript(self):
        """Test row[-1] works like a list."""
        assert Row.from_fields([b"a", b"b"])[-1] == b"b"

    def test_reset(self):
        """Test reset empties the row but keeps capacity."""
        row = Row()
        for i in range(40):
            row.append_field(b"x")
        capacity = row.capacity
        row.reset()
        assert row.field_count() == 0
        assert row.capacity == capacity
        row.reset()
        assert row.field_count() == 0
        row.append_field(b"again")
        assert row.to_list() == [b"again"]

    def test_from_fields_encodes(self):
        """Test text fields are encoded with the given encoding."""
        row = Row.from_fields(["é", b"raw"], encoding="latin-1")
        assert row.to_list() == [b"\xe9", b"raw"]

    def test_decode(self):
        """Test decoding fields to text."""
        assert Row.from_fields([b"a", "é"]).decode() == ["a", "é"]

    def test_equality(self):
        """Test rows compare with rows and lists."""
        assert Row.from_fields([b"a"]) == Row.from_fields(["a"])
        assert Row.from_fields([b"a"]) == [b"a"]
        assert Row() != Row.from_fields([b""])

    def test_iteration(self):
        """Test iterating over a row yields its fields."""
        assert list(Row.from_fields([b"x", b"y"])) == [b"x", b"y"]

    def test_field_copy_out_of_memory(self, monkeypatch):
        """Test a failed field copy raises OUT_OF_MEMORY and keeps the row."""
        row = Row.from_fields([b"a", b"b"])
        monkeypatch.setattr(row_module, "bytes", _out_of_memory, raising=False)

        with pytest.raises(CsvOutOfMemoryError) as excinfo:
            row.append_field(b"c")
        assert excinfo.value is OUT_OF_MEMORY
        assert row.field_count() == 2
        assert row.to_list() == [b"a", b"b"]

    def test_expand_out_of_memory(self):
        """Test a failed expansion raises OUT_OF_MEMORY and keeps the row."""
        row = Row()
        for i in range(row.capacity):
            row.append_field(str(i).encode())
        before = row.to_list()
        row._fields = _NoRoomList(row._fields)

        with pytest.raises(CsvOutOfMemoryError) as excinfo:
            row.append_field(b"overflow")
        assert excinfo.value is OUT_OF_MEMORY
        assert row.field_count() == len(before)
        assert row.capacity == len(before)
        assert row.to_list() == before


class TestFieldBuffer:
    """Growable byte buffer."""

    def test_append_and_contents(self):
        """Test appended bytes are returned in order."""
        buf = FieldBuffer()
        for c in b"hello":
            buf.append(bytes((c,)))
        assert buf.contents() == b"hello"
        assert len(buf) == 5

    def test_accepts_ints(self):
        """Test a byte value can be appended as an int."""
        buf = FieldBuffer()
        buf.append(65)
        assert buf.contents() == b"A"

    def test_doubles_when_full(self):
        """Test capacity doubles and content survives growth."""
        buf = FieldBuffer(capacity=4)
        for c in b"abcde":
            buf.append(bytes((c,)))
        assert buf.capacity == 8
        assert buf.contents() == b"abcde"

    def test_reset_keeps_storage(self):
        """Test reset empties the buffer without shrinking it."""
        buf = FieldBuffer(capacity=2)
        for c in b"abc":
            buf.append(bytes((c,)))
        capacity = buf.capacity
        buf.reset()
        assert buf.contents() == b""
        assert buf.capacity == capacity
        buf.append(b"z")
        assert buf.contents() == b"z"

    def test_contents_is_a_copy(self):
        """Test contents is not affected by later appends."""
        buf = FieldBuffer()
        buf.append(b"a")
        snapshot = buf.contents()
        buf.append(b"b")
        assert snapshot == b"a"

    def test_grow_out_of_memory(self, monkeypatch):
        """Test a failed growth raises OUT_OF_MEMORY and keeps the contents."""
        buf = FieldBuffer(capacity=1)
        buf.append(b"a")
        monkeypatch.setattr(buffer_module, "bytearray", _out_of_memory, raising=False)

        with pytest.raises(CsvOutOfMemoryError) as excinfo:
            buf.append(b"b")
        assert excinfo.value is OUT_OF_MEMORY
        assert buf.capacity == 1
        assert buf.contents() == b"a"


class TestByteSource:
    """Single byte reads with one byte of pushback."""

    def test_getc_and_eof(self):
        """Test bytes are returned one at a time then EOF."""
        source = ByteSource(io.BytesIO(b"ab"))
        assert source.getc() == b"a"
        assert source.getc() == b"b"
        assert source.getc() == b""

    def test_ungetc(self):
        """Test a pushed back byte is returned next."""
        source = ByteSource(io.BytesIO(b"ab"))
        c = source.getc()
        source.ungetc(c)
        assert source.getc() == b"a"
        assert source.getc() == b"b"

    def test_ungetc_eof_is_ignored(self):
        """Test pushing back EOF has no effect."""
        source = ByteSource(io.BytesIO(b""))
        source.ungetc(source.getc())
        assert source.getc() == b""

    def test_single_pushback_only(self):
        """Test only one byte can be pushed back."""
        source = ByteSource(io.BytesIO(b"ab"))
        source.ungetc(b"x")
        with pytest.raises(RuntimeError):
            source.ungetc(b"y")


class TestErrors:
    """Error values."""

    def test_oom_is_singleton(self):
        """Test every OOM error is the same object."""
        assert make_error(ErrorKind.OUT_OF_MEMORY, "whatever") is OUT_OF_MEMORY
        assert make_error(1, "again") is OUT_OF_MEMORY
        assert isinstance(OUT_OF_MEMORY, MemoryError)
        assert isinstance(OUT_OF_MEMORY, CsvOutOfMemoryError)

    def test_release_leaves_oom_alone(self):
        """Test releasing the OOM singleton is a no-op."""
        release_error(OUT_OF_MEMORY)
        assert OUT_OF_MEMORY.kind == ErrorKind.OUT_OF_MEMORY
        assert OUT_OF_MEMORY.message == "out of memory"

    def test_release_drops_references(self):
        """Test releasing an ordinary error clears its cause."""
        err = CsvIOError("read failed")
        err.__cause__ = OSError("boom")
        release_error(err)
        assert err.__cause__ is None

    @pytest.mark.parametrize("kind,cls", [
        (ErrorKind.INVALID_FIELD_DELIMITER, CsvConfigError),
        (ErrorKind.INVALID_QUOTE_STYLE, CsvConfigError),
        (ErrorKind.INVALID_LINEBREAK, CsvConfigError),
        (ErrorKind.IO, CsvIOError),
        (ErrorKind.INVALID_FORMAT, CsvFormatError),
    ])
    def test_make_error(self, kind, cls):
        """Test the factory picks the class matching the kind."""
        err = make_error(kind, "message")
        assert isinstance(err, cls)
        assert isinstance(err, CsvError)
        assert err.kind == kind
        assert str(err) == "message"

    def test_error_codes(self):
        """Test error codes keep their numeric values."""
        assert [int(k) for k in ErrorKind] == [1, 2, 3, 4, 5, 6]
