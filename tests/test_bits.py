import pytest

from ionbin.bits import (
    encode_int,
    encode_tag,
    encode_uint,
    encode_var_int,
    encode_var_uint,
    int_len,
    tag_len,
    uint_len,
    var_int_len,
    var_uint_len,
)

MAX_INT64 = 2**63 - 1
MIN_INT64 = -(2**63)
MAX_UINT64 = 2**64 - 1


@pytest.mark.parametrize(
    "value, length, expected",
    [
        (0, 1, b"\x00"),
        (0xFF, 1, b"\xFF"),
        (0x1FF, 2, b"\x01\xFF"),
        (MAX_UINT64, 8, b"\xFF" * 8),
    ],
)
def test_uint(value, length, expected):
    assert uint_len(value) == length
    assert encode_uint(value) == expected


@pytest.mark.parametrize(
    "value, length, expected",
    [
        (0, 0, b""),
        (0x7F, 1, b"\x7F"),
        (-0x7F, 1, b"\xFF"),
        (0xFF, 2, b"\x00\xFF"),
        (-0xFF, 2, b"\x80\xFF"),
        (0x7FFF, 2, b"\x7F\xFF"),
        (-0x7FFF, 2, b"\xFF\xFF"),
        (MAX_INT64, 8, bytes([0x7F] + [0xFF] * 7)),
        (-MAX_INT64, 8, b"\xFF" * 8),
        (MIN_INT64, 9, bytes([0x80, 0x80] + [0x00] * 7)),
    ],
)
def test_int(value, length, expected):
    assert int_len(value) == length
    assert encode_int(value) == expected


def test_int_length_matches_encoding_for_big_values():
    value = 1 << 1023
    encoded = encode_int(value)
    assert len(encoded) == int_len(value) == 129
    assert encoded[0] == 0x00
    assert encoded[1] == 0x80


@pytest.mark.parametrize(
    "value, length, expected",
    [
        (0, 1, b"\x80"),
        (0x7F, 1, b"\xFF"),
        (0xFF, 2, b"\x01\xFF"),
        (0x1FF, 2, b"\x03\xFF"),
        (0x3FFF, 2, b"\x7F\xFF"),
        (0x7FFF, 3, b"\x01\x7F\xFF"),
        (0x7FFFFFFFFFFFFFFF, 9, bytes([0x7F] * 8 + [0xFF])),
        (0xFFFFFFFFFFFFFFFF, 10, bytes([0x01] + [0x7F] * 8 + [0xFF])),
    ],
)
def test_var_uint(value, length, expected):
    assert var_uint_len(value) == length
    assert encode_var_uint(value) == expected


@pytest.mark.parametrize(
    "value, length, expected",
    [
        (0, 1, b"\x80"),
        (0x3F, 1, b"\xBF"),
        (-0x3F, 1, b"\xFF"),
        (0x7F, 2, b"\x00\xFF"),
        (-0x7F, 2, b"\x40\xFF"),
        (0x1FFF, 2, b"\x3F\xFF"),
        (-0x1FFF, 2, b"\x7F\xFF"),
        (0x3FFF, 3, b"\x00\x7F\xFF"),
        (-0x3FFF, 3, b"\x40\x7F\xFF"),
        (0x3FFFFFFFFFFFFFFF, 9, bytes([0x3F] + [0x7F] * 7 + [0xFF])),
        (-0x3FFFFFFFFFFFFFFF, 9, bytes([0x7F] + [0x7F] * 7 + [0xFF])),
        (MAX_INT64, 10, bytes([0x00] + [0x7F] * 8 + [0xFF])),
        (-MAX_INT64, 10, bytes([0x40] + [0x7F] * 8 + [0xFF])),
        (MIN_INT64, 10, bytes([0x41] + [0x00] * 8 + [0x80])),
    ],
)
def test_var_int(value, length, expected):
    assert var_int_len(value) == length
    assert encode_var_int(value) == expected


@pytest.mark.parametrize(
    "code, vlen, length, expected",
    [
        (0x20, 1, 1, b"\x21"),
        (0x30, 0x0D, 1, b"\x3D"),
        (0x40, 0x0E, 2, b"\x4E\x8E"),
        (0x50, MAX_INT64, 10, bytes([0x5E] + [0x7F] * 8 + [0xFF])),
    ],
)
def test_tag(code, vlen, length, expected):
    assert tag_len(vlen) == length
    assert encode_tag(code, vlen) == expected


def test_unsigned_rejects_negative():
    with pytest.raises(ValueError):
        encode_uint(-1)
    with pytest.raises(ValueError):
        encode_var_uint(-1)