class BencodeError(Exception):
    """Base class for every failure raised while decoding or encoding."""

    default_message = "bencode error"

    def __init__(self, message: str = "", position: int | None = None):
        self.message = message or self.default_message
        self.position = position
        if position is not None:
            super().__init__(f"{self.message} at position {position}")
        else:
            super().__init__(self.message)


class UnexpectedEndOfInput(BencodeError):
    default_message = "unexpected end of input"


class BufferTooShort(BencodeError):
    default_message = "not enough bytes left in buffer"


class InvalidText(BencodeError):
    default_message = "bytes are not valid UTF-8"


class BencodeSyntaxError(BencodeError):
    default_message = "syntax error"


class ExpectedInteger(BencodeError):
    default_message = "expected integer"


class ExpectedI(ExpectedInteger):
    default_message = "expected 'i'"


class LeadingZero(ExpectedInteger):
    default_message = "integer has a leading zero"


class IntegerOutOfRange(ExpectedInteger):
    default_message = "integer does not fit in 64 bits"


class UnexpectedCharacter(BencodeError):
    default_message = "unexpected character"


class ExpectedColon(BencodeError):
    default_message = "expected ':'"


class ExpectedMap(BencodeError):
    default_message = "expected 'd'"


class ExpectedMapEnd(BencodeError):
    default_message = "expected 'e' at end of dictionary"


class ExpectedList(BencodeError):
    default_message = "expected 'l'"


class ExpectedListEnd(BencodeError):
    default_message = "expected 'e' at end of list"


class TrailingCharacters(BencodeError):
    default_message = "trailing characters"


class NestingTooDeep(BencodeError):
    default_message = "nesting too deep"


class UnsupportedKind(BencodeError):
    """A primitive kind this codec does not implement (bool, float, ...)."""

    def __init__(self, kind: str, position: int | None = None):
        self.kind = kind
        super().__init__(f"{kind} is not supported by bencode", position)


class Custom(BencodeError):
    """Raised by application shapes for their own construction failures."""
