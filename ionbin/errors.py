"""Exception types raised while reading or writing Ion data."""


def _quote_rune(char):
    """Quote a single character the way a rune literal is written."""
    escapes = {
        "\a": "\\a",
        "\b": "\\b",
        "\f": "\\f",
        "\n": "\\n",
        "\r": "\\r",
        "\t": "\\t",
        "\v": "\\v",
        "\\": "\\\\",
        "'": "\\'",
    }
    if char in escapes:
        return f"'{escapes[char]}'"
    if char.isprintable():
        return f"'{char}'"
    code = ord(char)
    if code < 0x80:
        return f"'\\x{code:02x}'"
    if code < 0x10000:
        return f"'\\u{code:04x}'"
    return f"'\\U{code:08x}'"


class IonError(Exception):
    """Base class of every error raised by this package."""


class UsageError(IonError):
    """A reader or writer was used in an inappropriate way."""

    def __init__(self, api, msg):
        self.api = api
        self.msg = msg
        super().__init__(f"ion: usage error in {api}: {msg}")


class IonIOError(IonError):
    """The underlying stream failed while reading or writing."""

    def __init__(self, err):
        self.err = err
        super().__init__(f"ion: i/o error: {err}")


class IonSyntaxError(IonError):
    """The input is invalid and no more specific error applies."""

    def __init__(self, msg, offset):
        self.msg = msg
        self.offset = offset
        super().__init__(f"ion: syntax error: {msg} (offset {offset})")


class UnexpectedEOFError(IonError):
    """The input ended in the middle of a value."""

    def __init__(self, offset):
        self.offset = offset
        super().__init__(f"ion: unexpected end of input (offset {offset})")


class UnsupportedVersionError(IonError):
    """A binary version marker names a version that is not understood."""

    def __init__(self, major, minor, offset):
        self.major = major
        self.minor = minor
        self.offset = offset
        super().__init__(f"ion: unsupported version {major}.{minor} (offset {offset})")


class InvalidTagByteError(IonError):
    """A binary reader met a tag byte that is not valid."""

    def __init__(self, byte, offset):
        self.byte = byte
        self.offset = offset
        super().__init__(f"ion: invalid tag byte 0x{byte:02X} (offset {offset})")


class UnexpectedRuneError(IonError):
    """A text reader met a character it did not expect."""

    def __init__(self, rune, offset):
        if isinstance(rune, int):
            rune = chr(rune)
        self.rune = rune
        self.offset = offset
        super().__init__(f"ion: unexpected rune {_quote_rune(rune)} (offset {offset})")


class UnexpectedTokenError(IonError):
    """A text reader met a token it did not expect."""

    def __init__(self, token, offset):
        self.token = token
        self.offset = offset
        super().__init__(f"ion: unexpected token '{token}' (offset {offset})")