"""Position-tracking byte input and the primitive binary Ion field readers."""

import io

from ionbin.decimal import Decimal
from ionbin.errors import IonIOError, IonSyntaxError, UnexpectedEOFError

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_MAX_VAR_LENGTH = 10
_CHUNK_SIZE = 4096


class ByteInput:
    """Reads bytes from a buffer or binary stream, counting the position.

    The position advances by one even when a read finds the end of the
    input, so offsets reported in errors point just past the last byte tried.
    """

    def __init__(self, source):
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        self._stream = source
        self._buffer = bytearray()
        self.pos = 0

    def _fill(self, count):
        """Buffer at least ``count`` bytes if the input holds that many."""
        while len(self._buffer) < count:
            try:
                chunk = self._stream.read(max(count - len(self._buffer), _CHUNK_SIZE))
            except OSError as err:
                raise IonIOError(err) from err
            if not chunk:
                return False
            self._buffer.extend(chunk)
        return True

    def read(self):
        """Return the next byte, or None at the end of the input."""
        available = self._fill(1)
        self.pos += 1
        if not available:
            return None
        value = self._buffer[0]
        del self._buffer[0]
        return value

    def read1(self):
        """Return the next byte, raising UnexpectedEOFError at the end."""
        value = self.read()
        if value is None:
            raise UnexpectedEOFError(self.pos)
        return value

    def read_n(self, n):
        """Return exactly ``n`` bytes, raising UnexpectedEOFError if short."""
        if n == 0:
            return b""
        self._fill(n)
        taken = min(n, len(self._buffer))
        data = bytes(self._buffer[:taken])
        del self._buffer[:taken]
        self.pos += taken
        if taken < n:
            raise UnexpectedEOFError(self.pos)
        return data

    def skip(self, n):
        """Discard up to ``n`` bytes; return how many were discarded."""
        self._fill(n)
        taken = min(n, len(self._buffer))
        del self._buffer[:taken]
        self.pos += taken
        return taken

    def peek_at(self, offset):
        """Return the byte ``offset`` places ahead without consuming it."""
        if not self._fill(offset + 1):
            raise UnexpectedEOFError(self.pos)
        return self._buffer[offset]

    def read_var_uint_len(self, limit):
        """Read a var-uint of at most ``limit`` bytes; return (value, length)."""
        limit = min(limit, _MAX_VAR_LENGTH)
        value = 0
        length = 0
        while True:
            if length >= limit:
                raise IonSyntaxError("varuint too large", self.pos)
            c = self.read1()
            value = (value << 7) | (c & 0x7F)
            length += 1
            if c & 0x80:
                return value, length

    def skip_var_uint_len(self, limit):
        """Skip a var-uint of at most ``limit`` bytes; return its length."""
        limit = min(limit, _MAX_VAR_LENGTH)
        length = 0
        while True:
            if length >= limit:
                raise IonSyntaxError("varuint too large", self.pos - length)
            c = self.read1()
            length += 1
            if c & 0x80:
                return length

    def read_var_int_len(self, limit):
        """Read a var-int of at most ``limit`` bytes.

        Returns (value, sign, length); the sign is kept separately so that a
        negative zero can be told apart.
        """
        if limit == 0:
            raise IonSyntaxError("varint too large", self.pos)
        limit = min(limit, _MAX_VAR_LENGTH)

        c = self.read1()
        sign = -1 if c & 0x40 else 1
        value = c & 0x3F
        length = 1
        if c & 0x80:
            return value * sign, sign, length

        while True:
            if length >= limit:
                raise IonSyntaxError("varint too large", self.pos - length)
            c = self.read1()
            value = (value << 7) | (c & 0x7F)
            length += 1
            if c & 0x80:
                return value * sign, sign, length

    def read_big_int(self, length):
        """Read a fixed-length sign-and-magnitude integer of ``length`` bytes."""
        if length == 0:
            return 0
        raw = bytearray(self.read_n(length))
        negative = bool(raw[0] & 0x80)
        raw[0] &= 0x7F
        value = int.from_bytes(raw, "big")
        return -value if negative else value

    def read_decimal(self, length):
        """Read a decimal: a var-int exponent then a coefficient filling the rest."""
        exponent = 0
        coefficient = 0
        neg_zero = False

        if length > 0:
            value, _, consumed = self.read_var_int_len(length)
            if value > _INT32_MAX or value < _INT32_MIN:
                raise IonSyntaxError(
                    f"decimal exponent out of range: {value}", self.pos - consumed
                )
            exponent = value
            length -= consumed

        if length > 0:
            coefficient = self.read_big_int(length)
            neg_zero = coefficient == 0

        return Decimal(coefficient, exponent, neg_zero)