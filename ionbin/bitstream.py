"""A low-level parser for the values of a binary Ion stream."""

import enum
import struct
from typing import NamedTuple

from ionbin.byteinput import ByteInput
from ionbin.errors import (
    InvalidTagByteError,
    IonSyntaxError,
    UnexpectedTokenError,
    UsageError,
)

_UNBOUNDED = 2**64 - 1
_NULL_LENGTH = 0x0F
_LONG_LENGTH = 0x0E


class Bitcode(enum.Enum):
    """The kind of item the stream is positioned on."""

    NONE = "none"
    EOF = "eof"
    BVM = "bvm"
    NULL = "null"
    FALSE = "false"
    TRUE = "true"
    INT = "int"
    NEG_INT = "negint"
    FLOAT = "float"
    DECIMAL = "decimal"
    TIMESTAMP = "timestamp"
    SYMBOL = "symbol"
    STRING = "string"
    CLOB = "clob"
    BLOB = "blob"
    LIST = "list"
    SEXP = "sexp"
    STRUCT = "struct"
    FIELD_ID = "fieldid"
    ANNOTATION = "annotation"

    def __str__(self):
        return self.value


_BITCODES = (
    Bitcode.NULL,  # 0x00
    Bitcode.FALSE,  # 0x10
    Bitcode.INT,  # 0x20
    Bitcode.NEG_INT,  # 0x30
    Bitcode.FLOAT,  # 0x40
    Bitcode.DECIMAL,  # 0x50
    Bitcode.TIMESTAMP,  # 0x60
    Bitcode.SYMBOL,  # 0x70
    Bitcode.STRING,  # 0x80
    Bitcode.CLOB,  # 0x90
    Bitcode.BLOB,  # 0xA0
    Bitcode.LIST,  # 0xB0
    Bitcode.SEXP,  # 0xC0
    Bitcode.STRUCT,  # 0xD0
    Bitcode.ANNOTATION,  # 0xE0
)


def parse_tag(c):
    """Split a tag byte into its Bitcode and its four-bit length field."""
    high = (c >> 4) & 0x0F
    low = c & 0x0F
    code = _BITCODES[high] if high < len(_BITCODES) else Bitcode.NONE
    return code, low


class _State(enum.Enum):
    BEFORE_VALUE = enum.auto()
    ON_VALUE = enum.auto()
    BEFORE_FIELD_ID = enum.auto()
    ON_FIELD_ID = enum.auto()


class _Frame(NamedTuple):
    code: Bitcode
    end: int


class Bitstream:
    """Walks binary Ion one item at a time.

    After ``next`` the attributes ``code``, ``is_null`` and ``length``
    describe the current item; one of the ``read_*`` methods then consumes it,
    or the next call to ``next`` skips over it.
    """

    def __init__(self, source):
        self._input = source if isinstance(source, ByteInput) else ByteInput(source)
        self._state = _State.BEFORE_VALUE
        self._stack = []
        self.code = Bitcode.NONE
        self.is_null = False
        self.length = 0

    @property
    def pos(self):
        """The number of bytes consumed so far."""
        return self._input.pos

    @property
    def depth(self):
        """How many containers the stream is stepped in to."""
        return len(self._stack)

    def _clear(self):
        self.code = Bitcode.NONE
        self.is_null = False
        self.length = 0

    def _expect(self, api, *codes):
        if self.code not in codes:
            expected = " or ".join(str(c) for c in codes)
            raise UsageError(api, f"current item is {self.code}, not {expected}")

    def _remaining(self):
        if not self._stack:
            return _UNBOUNDED
        end = self._stack[-1].end
        if self.pos > end:
            raise IonSyntaxError(f"pos ({self.pos}) > end ({end})", self.pos)
        return end - self.pos

    def _state_after_value(self):
        if self._stack and self._stack[-1].code is Bitcode.STRUCT:
            return _State.BEFORE_FIELD_ID
        return _State.BEFORE_VALUE

    def _finish_value(self):
        self._state = self._state_after_value()
        self._clear()

    def next(self):
        """Advance to the next item and return its Bitcode."""
        if self._state in (_State.ON_VALUE, _State.ON_FIELD_ID):
            self.skip_value()

        if self._stack and self.pos == self._stack[-1].end:
            self.code = Bitcode.EOF
            return self.code

        if self._state is _State.BEFORE_FIELD_ID:
            self.code = Bitcode.FIELD_ID
            self._state = _State.ON_FIELD_ID
            return self.code

        c = self._input.read()
        if c is None:
            self.code = Bitcode.EOF
            return self.code

        code, length = parse_tag(c)

        # Ordered structs always carry their length as a separate var-uint.
        if code is Bitcode.STRUCT and length == 1:
            length, _ = self._input.read_var_uint_len(self._remaining())
            if length == 0:
                raise IonSyntaxError("ordered structs cannot be empty", self.pos - 1)

        if code is Bitcode.NONE:
            raise InvalidTagByteError(c, self.pos - 1)

        self._state = _State.ON_VALUE

        if code is Bitcode.ANNOTATION:
            if length == 0:
                if self._stack:
                    raise IonSyntaxError("invalid BVM in a container", self.pos - 1)
                self.code = Bitcode.BVM
                self.length = 3
                return self.code
            if length == _NULL_LENGTH:
                raise InvalidTagByteError(c, self.pos - 1)

        if code is Bitcode.FALSE:
            if length == 1:
                code = Bitcode.TRUE
                length = 0
            elif length not in (0, _NULL_LENGTH):
                raise InvalidTagByteError(c, self.pos - 1)

        if length == _NULL_LENGTH:
            self.code = code
            self.is_null = True
            return self.code

        start = self.pos
        rem = self._remaining()

        if length == _LONG_LENGTH:
            length, consumed = self._input.read_var_uint_len(rem)
            rem -= consumed

        if length > rem:
            raise IonSyntaxError(
                f"value overruns its container: {length} vs {rem}", start - 1
            )

        self.code = code
        self.length = length
        return self.code

    def skip_value(self):
        """Skip over the current item, if there is one."""
        if self._state in (_State.BEFORE_FIELD_ID, _State.BEFORE_VALUE):
            return
        if self._state is _State.ON_FIELD_ID:
            self._input.skip_var_uint_len(self._remaining())
            self._state = _State.BEFORE_VALUE
        else:
            if self.length > 0:
                self._input.skip(self.length)
            self._state = self._state_after_value()
        self._clear()

    def step_in(self):
        """Step in to the current list, sexp or struct."""
        if self.code is Bitcode.STRUCT:
            self._state = _State.BEFORE_FIELD_ID
        elif self.code in (Bitcode.LIST, Bitcode.SEXP):
            self._state = _State.BEFORE_VALUE
        else:
            raise UsageError("Bitstream.step_in", f"cannot step in to a {self.code}")
        self._stack.append(_Frame(self.code, self.pos + self.length))
        self._clear()

    def step_out(self):
        """Step out of the current container, skipping whatever is left in it."""
        if not self._stack:
            raise UsageError("Bitstream.step_out", "cannot step out of the top level")
        frame = self._stack.pop()
        if frame.end < self.pos:
            raise IonSyntaxError(
                f"end ({frame.end}) is before the current position ({self.pos})",
                self.pos,
            )
        remaining = frame.end - self.pos
        if remaining > 0:
            self._input.skip(remaining)
        self._finish_value()

    def read_bvm(self):
        """Read a binary version marker; return (major, minor)."""
        self._expect("Bitstream.read_bvm", Bitcode.BVM)
        major = self._input.read1()
        minor = self._input.read1()
        end = self._input.read1()
        if end != 0xEA:
            raise IonSyntaxError(
                f"invalid BVM: 0xE0 0x{major:02X} 0x{minor:02X} 0x{end:02X}",
                self.pos - 4,
            )
        self._state = _State.BEFORE_VALUE
        self._clear()
        return major, minor

    def read_field_id(self):
        """Read the symbol ID of a struct field name."""
        self._expect("Bitstream.read_field_id", Bitcode.FIELD_ID)
        field_id, _ = self._input.read_var_uint_len(self._remaining())
        self._state = _State.BEFORE_VALUE
        self.code = Bitcode.NONE
        return field_id

    def read_annotation_ids(self):
        """Read the symbol IDs of an annotation wrapper.

        The wrapped value is checked for consistency and becomes the next item.
        """
        self._expect("Bitstream.read_annotation_ids", Bitcode.ANNOTATION)

        ids_length, length_size = self._input.read_var_uint_len(self.length)
        if ids_length == 0:
            raise IonSyntaxError(
                "malformed annotation: at least one annotation must be specified",
                self.pos - length_size,
            )

        value_length = self.length - length_size - ids_length
        if value_length <= 0:
            raise IonSyntaxError("malformed annotation", self.pos - length_size)

        ids = []
        while ids_length > 0:
            symbol_id, id_size = self._input.read_var_uint_len(ids_length)
            ids.append(symbol_id)
            ids_length -= id_size

        self._validate_annotated_value(value_length)

        self._state = _State.BEFORE_VALUE
        self._clear()
        return ids

    def _validate_annotated_value(self, remaining):
        tag = self._input.peek_at(0)
        code, length = parse_tag(tag)

        if length == _NULL_LENGTH:
            # A null takes exactly its one tag byte.
            if remaining != 1:
                raise InvalidTagByteError(tag, self.pos)
            return

        if code is Bitcode.NULL:
            raise IonSyntaxError("an annotation cannot wrap a NOP Pad", self.pos)
        if code is Bitcode.ANNOTATION:
            raise IonSyntaxError(
                "an annotation cannot be the enclosed value of another annotation",
                self.pos,
            )

        remaining -= 1

        if length == _LONG_LENGTH or (code is Bitcode.STRUCT and length == 1):
            value = 0
            offset = 1
            while True:
                c = self._input.peek_at(offset)
                offset += 1
                remaining -= 1
                value = (value << 7) | (c & 0x7F)
                if c & 0x80:
                    length = value
                    break

        if length != remaining:
            raise IonSyntaxError(
                "annotation wrapper indicates the enclosed value's length to be "
                f"{remaining} but the enclosed value claims to have length {length}",
                self.pos,
            )

    def read_int(self):
        """Read an integer value."""
        self._expect("Bitstream.read_int", Bitcode.INT, Bitcode.NEG_INT)
        raw = self._input.read_n(self.length)
        value = int.from_bytes(raw, "big")
        if self.code is Bitcode.NEG_INT:
            if value == 0:
                raise IonSyntaxError(
                    "integer zero cannot be negative", self.pos - self.length
                )
            value = -value
        self._finish_value()
        return value

    def read_float(self):
        """Read a float value of zero, four or eight bytes."""
        self._expect("Bitstream.read_float", Bitcode.FLOAT)
        raw = self._input.read_n(self.length)
        if len(raw) == 0:
            value = 0.0
        elif len(raw) == 4:
            (value,) = struct.unpack(">f", raw)
        elif len(raw) == 8:
            (value,) = struct.unpack(">d", raw)
        else:
            raise IonSyntaxError("invalid float size", self.pos - self.length)
        self._finish_value()
        return value

    def read_decimal(self):
        """Read a decimal value."""
        self._expect("Bitstream.read_decimal", Bitcode.DECIMAL)
        value = self._input.read_decimal(self.length)
        self._finish_value()
        return value

    def read_symbol_id(self):
        """Read the symbol ID of a symbol value."""
        self._expect("Bitstream.read_symbol_id", Bitcode.SYMBOL)
        if self.length > 8:
            raise IonSyntaxError("symbol id too large", self.pos)
        raw = self._input.read_n(self.length)
        self._finish_value()
        return int.from_bytes(raw, "big")

    def read_string(self):
        """Read a UTF-8 string value."""
        self._expect("Bitstream.read_string", Bitcode.STRING)
        raw = self._input.read_n(self.length)
        self._finish_value()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as err:
            raise UnexpectedTokenError(
                "string value contains non-UTF-8 runes", self.pos
            ) from err

    def read_bytes(self):
        """Read the contents of a blob or clob."""
        self._expect("Bitstream.read_bytes", Bitcode.CLOB, Bitcode.BLOB)
        raw = self._input.read_n(self.length) if self.length > 0 else b""
        self._finish_value()
        return raw