"""Length prediction and encoding of the primitive fields of binary Ion."""

_SHORT_LENGTH_LIMIT = 0x0E


def _check_unsigned(value):
    if value < 0:
        raise ValueError(f"unsigned value cannot be negative: {value}")


def uint_len(value):
    """Return the number of bytes ``encode_uint`` produces for ``value``."""
    _check_unsigned(value)
    return max(1, (value.bit_length() + 7) // 8)


def encode_uint(value):
    """Encode a fixed-length unsigned integer, big-endian, at least one byte."""
    return value.to_bytes(uint_len(value), "big")


def int_len(value):
    """Return the number of bytes ``encode_int`` produces for ``value``.

    Zero takes no bytes at all. Otherwise the magnitude is stored big-endian
    and an extra byte is added when its high bit is needed for the sign.
    """
    if value == 0:
        return 0
    return abs(value).bit_length() // 8 + 1


def encode_int(value):
    """Encode a signed integer as a sign bit followed by its magnitude."""
    if value == 0:
        return b""
    magnitude = abs(value)
    raw = bytearray(magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big"))
    sign_bit = 0x80 if value < 0 else 0x00
    if raw[0] & 0x80 == 0:
        raw[0] |= sign_bit
        return bytes(raw)
    return bytes([sign_bit]) + bytes(raw)


def var_uint_len(value):
    """Return the number of bytes ``encode_var_uint`` produces for ``value``."""
    _check_unsigned(value)
    return max(1, (value.bit_length() + 6) // 7)


def encode_var_uint(value):
    """Encode a variable-length unsigned integer.

    Each byte carries seven bits of the value; the high bit marks the last byte.
    """
    _check_unsigned(value)
    groups = [0x80 | (value & 0x7F)]
    value >>= 7
    while value:
        groups.append(value & 0x7F)
        value >>= 7
    return bytes(reversed(groups))


def var_int_len(value):
    """Return the number of bytes ``encode_var_int`` produces for ``value``."""
    magnitude = abs(value) >> 6
    length = 1
    while magnitude:
        length += 1
        magnitude >>= 7
    return length


def encode_var_int(value):
    """Encode a variable-length signed integer.

    Like a var-uint, but the first byte also holds a sign bit (0x40) and so
    only six bits of the magnitude.
    """
    sign_bit = 0x40 if value < 0 else 0x00
    magnitude = abs(value)
    if magnitude >> 6 == 0:
        return bytes([0x80 | sign_bit | magnitude])

    groups = [0x80 | (magnitude & 0x7F)]
    magnitude >>= 7
    while magnitude >> 6:
        groups.append(magnitude & 0x7F)
        magnitude >>= 7
    groups.append(sign_bit | (magnitude & 0x3F))
    return bytes(reversed(groups))


def tag_len(length):
    """Return the number of bytes of a type tag for a value of ``length``."""
    if length < _SHORT_LENGTH_LIMIT:
        return 1
    return 1 + var_uint_len(length)


def encode_tag(code, length):
    """Encode a type code and value length as a tag."""
    if length < _SHORT_LENGTH_LIMIT:
        return bytes([code | length])
    return bytes([code | _SHORT_LENGTH_LIMIT]) + encode_var_uint(length)