import io

import pytest

from ionbin.bits import encode_int, encode_var_int, encode_var_uint
from ionbin.byteinput import ByteInput
from ionbin.decimal import parse_decimal
from ionbin.errors import IonIOError, IonSyntaxError, UnexpectedEOFError


class _FailingStream:
    def read(self, size=-1):
        raise OSError("boom")


def test_read_returns_bytes_then_none():
    inp = ByteInput(b"\x01\x02")
    assert inp.read() == 1
    assert inp.read() == 2
    assert inp.read() is None


def test_read_counts_position_past_eof():
    inp = ByteInput(b"\x01")
    inp.read()
    assert inp.pos == 1
    inp.read()
    assert inp.pos == 2


def test_read1_raises_at_eof():
    inp = ByteInput(b"")
    with pytest.raises(UnexpectedEOFError):
        inp.read1()


def test_read_n_exact_and_zero():
    inp = ByteInput(b"hello world")
    assert inp.read_n(0) == b""
    assert inp.read_n(5) == b"hello"
    assert inp.pos == 5
    assert inp.read_n(6) == b" world"


def test_read_n_short_raises_with_offset():
    inp = ByteInput(b"abc")
    with pytest.raises(UnexpectedEOFError) as info:
        inp.read_n(10)
    assert info.value.offset == len(b"abc")


def test_skip_stops_at_end():
    inp = ByteInput(b"abcdef")
    assert inp.skip(2) == 2
    assert inp.read() == ord("c")
    assert inp.skip(100) == 3
    assert inp.read() is None


def test_peek_does_not_consume():
    inp = ByteInput(io.BytesIO(b"\x10\x20\x30"))
    assert inp.peek_at(2) == 0x30
    assert inp.peek_at(0) == 0x10
    assert inp.pos == 0
    assert inp.read_n(3) == b"\x10\x20\x30"


def test_peek_past_end_raises():
    inp = ByteInput(b"\x10")
    with pytest.raises(UnexpectedEOFError):
        inp.peek_at(1)


def test_stream_errors_are_wrapped():
    inp = ByteInput(_FailingStream())
    with pytest.raises(IonIOError):
        inp.read()


@pytest.mark.parametrize("value", [0, 0x7F, 0xFF, 0x1FF, 0x3FFF, 0x7FFF, 2**64 - 1])
def test_var_uint_round_trip(value):
    data = encode_var_uint(value)
    inp = ByteInput(data + b"\xAA")
    assert inp.read_var_uint_len(100) == (value, len(data))
    assert inp.read() == 0xAA


def test_var_uint_too_long():
    inp = ByteInput(b"\x01\x7F\xFF")
    with pytest.raises(IonSyntaxError):
        inp.read_var_uint_len(2)


def test_var_uint_eof():
    inp = ByteInput(b"\x01\x02")
    with pytest.raises(UnexpectedEOFError):
        inp.read_var_uint_len(10)


@pytest.mark.parametrize("value", [0, 0x7F, 0x1FF, 2**64 - 1])
def test_skip_var_uint(value):
    data = encode_var_uint(value)
    inp = ByteInput(data)
    assert inp.skip_var_uint_len(100) == len(data)
    assert inp.pos == len(data)


def test_skip_var_uint_too_long():
    inp = ByteInput(b"\x01\x01\x01")
    with pytest.raises(IonSyntaxError):
        inp.skip_var_uint_len(2)


@pytest.mark.parametrize(
    "value", [0, 0x3F, -0x3F, 0x7F, -0x7F, 0x1FFF, -0x1FFF, 2**63 - 1, -(2**63)]
)
def test_var_int_round_trip(value):
    data = encode_var_int(value)
    inp = ByteInput(data)
    got, sign, length = inp.read_var_int_len(100)
    assert got == value
    assert length == len(data)
    assert sign == (-1 if value < 0 else 1)


def test_var_int_negative_zero_keeps_sign():
    inp = ByteInput(b"\xC0")
    assert inp.read_var_int_len(1) == (0, -1, 1)


def test_var_int_zero_limit():
    inp = ByteInput(b"\x80")
    with pytest.raises(IonSyntaxError):
        inp.read_var_int_len(0)


def test_var_int_too_long():
    inp = ByteInput(b"\x00\x00\x80")
    with pytest.raises(IonSyntaxError):
        inp.read_var_int_len(2)


@pytest.mark.parametrize("value", [0x7F, -0x7F, 0xFF, -0xFF, 0x7FFF, -0x7FFF, 2**100, -(2**100)])
def test_big_int_round_trip(value):
    data = encode_int(value)
    assert ByteInput(data).read_big_int(len(data)) == value


@pytest.mark.parametrize(
    "data, text",
    [
        (b"\xC3\x03\xE8", "1.000"),
        (b"\xC3\x83\xE8", "-1.000"),
        (b"\x00\xE4\x01", "1d100"),
        (b"\x00\xE4\x81", "-1d100"),
        (b"\xC3", "0.000"),
    ],
)
def test_read_decimal(data, text):
    got = ByteInput(data).read_decimal(len(data))
    expected = parse_decimal(text)
    assert got == expected
    assert got.coefficient_exponent() == expected.coefficient_exponent()


def test_read_decimal_empty_is_zero():
    got = ByteInput(b"").read_decimal(0)
    assert got.coefficient_exponent() == (0, 0)
    assert not got.is_negative_zero


def test_read_decimal_exponent_out_of_range():
    data = encode_var_int(2**31) + b"\x01"
    with pytest.raises(IonSyntaxError):
        ByteInput(data).read_decimal(len(data))