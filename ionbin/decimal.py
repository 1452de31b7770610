"""Arbitrary-precision decimal values as used by Ion."""

import functools
import math
import re

from ionbin.errors import IonError

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_EXPONENT_MARK = re.compile(r"[Dd]")


class DecimalParseError(IonError, ValueError):
    """Raised when a string cannot be parsed as a decimal."""

    def __init__(self, num, msg):
        self.num = num
        self.msg = msg
        super().__init__(f"ion: ParseDecimal({num}): {msg}")


def _checked_scale(scale):
    if scale < _INT32_MIN or scale > _INT32_MAX:
        raise OverflowError("exponent out of bounds")
    return scale


def _pow10_float(exponent):
    try:
        return float(10**exponent) if exponent <= 308 else math.inf
    except OverflowError:
        return math.inf


@functools.total_ordering
class Decimal:
    """A decimal equal to ``coefficient * 10**exponent``.

    Internally the value keeps its scale, the negated exponent, so that
    precision such as ``1.000`` survives round trips.
    """

    __slots__ = ("coefficient", "scale", "is_negative_zero")

    def __init__(self, coefficient=0, exponent=0, neg_zero=False):
        self.coefficient = int(coefficient)
        self.scale = _checked_scale(-int(exponent))
        self.is_negative_zero = bool(neg_zero)

    @classmethod
    def _from_scale(cls, coefficient, scale):
        return cls(coefficient, -_checked_scale(scale))

    @classmethod
    def from_int(cls, n):
        """Create a decimal equal to the integer ``n``."""
        return cls(n, 0, False)

    def coefficient_exponent(self):
        """Return the pair (coefficient, exponent)."""
        return self.coefficient, -self.scale

    def abs(self):
        return Decimal._from_scale(abs(self.coefficient), self.scale)

    def neg(self):
        return Decimal._from_scale(-self.coefficient, self.scale)

    def add(self, other):
        a, b = _rescale(self, other)
        return Decimal._from_scale(a.coefficient + b.coefficient, a.scale)

    def sub(self, other):
        a, b = _rescale(self, other)
        return Decimal._from_scale(a.coefficient - b.coefficient, a.scale)

    def mul(self, other):
        scale = _checked_scale(self.scale + other.scale)
        return Decimal._from_scale(self.coefficient * other.coefficient, scale)

    def shift_left(self, shift):
        """Return ``self * 10**shift``."""
        return Decimal._from_scale(self.coefficient, _checked_scale(self.scale - shift))

    def shift_right(self, shift):
        """Return ``self / 10**shift``."""
        return Decimal._from_scale(self.coefficient, _checked_scale(self.scale + shift))

    def sign(self):
        return (self.coefficient > 0) - (self.coefficient < 0)

    def cmp(self, other):
        """Compare two decimals, ignoring precision: -1, 0 or +1."""
        a, b = _rescale(self, other)
        return (a.coefficient > b.coefficient) - (a.coefficient < b.coefficient)

    def upscale(self, scale):
        """Return the same value with a larger scale (and coefficient)."""
        diff = scale - self.scale
        if diff < 0:
            raise ValueError("can't upscale to a smaller scale")
        return Decimal._from_scale(self.coefficient * 10**diff, scale)

    def _upscaled_for_int(self):
        if self.scale < 0:
            if self.scale < -20:
                raise OverflowError(f"value out of range: {self}")
            return self.upscale(0)
        return self

    def truncate_to_int(self):
        """Return the value as a 64-bit integer, dropping any fraction."""
        ud = self._upscaled_for_int()
        digits = str(ud.coefficient)
        cut = len(digits) - ud.scale
        if cut <= 0:
            return 0
        head = digits[:cut]
        if not _INTEGER.fullmatch(head):
            raise ValueError(f"cannot truncate {self} to an integer")
        value = int(head)
        if value < _INT64_MIN or value > _INT64_MAX:
            raise OverflowError(f"value out of range: {self}")
        return value

    def round_to_int(self):
        """Return the value rounded half away from zero to an integer."""
        ud = self._upscaled_for_int()
        value = float(ud.coefficient) / _pow10_float(ud.scale)
        whole = math.trunc(value)
        if abs(value - whole) >= 0.5:
            whole += 1 if value > 0 else -1
        return int(whole)

    def truncate(self, precision):
        """Truncate (without rounding) to ``precision`` significant digits."""
        if precision <= 0:
            raise ValueError("precision must be positive")
        digits = str(self.coefficient)
        if digits.startswith("-"):
            precision += 1
        diff = len(digits) - precision
        if diff <= 0:
            return self
        scale = self.scale - diff
        if scale < _INT32_MIN:
            raise OverflowError("exponent out of range")
        return Decimal._from_scale(int(digits[:precision]), scale)

    def to_json(self):
        """Render the value as a plain JSON number."""
        abs_n = str(abs(self.coefficient))
        exponent = -self.scale
        if exponent == 0:
            text = abs_n
        elif exponent > 0:
            text = abs_n + "0" * exponent
        else:
            places = -exponent
            if places >= len(abs_n):
                text = "0." + "0" * (places - len(abs_n)) + abs_n
            else:
                text = abs_n[: len(abs_n) - places] + "." + abs_n[len(abs_n) - places :]
            text = text.rstrip("0")
            if text.endswith("."):
                text = text[:-1]
        if self.coefficient < 0:
            text = "-" + text
        return text

    @classmethod
    def from_json(cls, text):
        """Parse a JSON number; ``null`` gives None."""
        if text == "null":
            return None
        converted = text.replace("E", "D", 1).replace("e", "d", 1)
        try:
            return parse_decimal(converted)
        except DecimalParseError as err:
            raise DecimalParseError(
                converted, f"error unmarshalling decimal '{converted}': {err}"
            ) from err

    def __str__(self):
        if self.scale == 0:
            if self.is_negative_zero:
                return "-0."
            return f"{self.coefficient}."
        if self.scale < 0:
            head = "-0" if self.is_negative_zero else str(self.coefficient)
            return f"{head}d{-self.scale}"

        digits = "-0" if self.is_negative_zero else str(self.coefficient)
        idx = len(digits) - self.scale
        prefix = 2 if digits.startswith("-") else 1
        if idx >= prefix:
            return digits[:idx] + "." + digits[idx:]
        parts = [digits[:prefix]]
        if len(digits) > prefix:
            parts.append("." + digits[prefix:])
        parts.append(f"d{idx - prefix}")
        return "".join(parts)

    def __repr__(self):
        return f"Decimal('{self}')"

    def __eq__(self, other):
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) == 0

    def __lt__(self, other):
        if not isinstance(other, Decimal):
            return NotImplemented
        return self.cmp(other) < 0

    def __hash__(self):
        n, scale = self.coefficient, self.scale
        if n == 0:
            return hash((0, 0))
        while n % 10 == 0:
            n //= 10
            scale -= 1
        return hash((n, scale))

    def __add__(self, other):
        return self.add(other) if isinstance(other, Decimal) else NotImplemented

    def __sub__(self, other):
        return self.sub(other) if isinstance(other, Decimal) else NotImplemented

    def __mul__(self, other):
        return self.mul(other) if isinstance(other, Decimal) else NotImplemented

    def __neg__(self):
        return self.neg()

    def __abs__(self):
        return self.abs()


def _rescale(a, b):
    if a.scale < b.scale:
        return a.upscale(b.scale), b
    if a.scale > b.scale:
        return a, b.upscale(a.scale)
    return a, b


def _parse_int32(text):
    if not _INTEGER.fullmatch(text):
        raise ValueError(f'strconv.ParseInt: parsing "{text}": invalid syntax')
    value = int(text)
    if value < _INT32_MIN or value > _INT32_MAX:
        raise ValueError(f'strconv.ParseInt: parsing "{text}": value out of range')
    return value


def parse_decimal(text):
    """Parse Ion decimal text such as ``1.23``, ``-0d-1`` or ``12D4``."""
    if not text:
        raise DecimalParseError(text, "empty string")

    original = text
    exponent = 0
    mark = _EXPONENT_MARK.search(text)
    if mark:
        exp_text = text[mark.start() + 1 :]
        if not exp_text:
            raise DecimalParseError(text, "unexpected end of input after d")
        try:
            exponent = _parse_int32(exp_text)
        except ValueError as err:
            raise DecimalParseError(text, str(err)) from err
        text = text[: mark.start()]

    head, dot, tail = text.partition(".")
    if dot:
        exponent -= len(tail)
        text = head + tail

    if not _INTEGER.fullmatch(text):
        raise DecimalParseError(text, "cannot parse coefficient")
    if exponent < _INT32_MIN or exponent > _INT32_MAX:
        raise DecimalParseError(original, "exponent out of range")

    n = int(text)
    neg_zero = n == 0 and text.startswith("-")
    return Decimal(n, exponent, neg_zero)