import logging
from typing import Any

from .access import MapAccess, SeqAccess
from .errors import (
    BencodeError,
    BencodeSyntaxError,
    ExpectedColon,
    ExpectedI,
    ExpectedInteger,
    ExpectedList,
    ExpectedListEnd,
    ExpectedMap,
    ExpectedMapEnd,
    IntegerOutOfRange,
    LeadingZero,
    NestingTooDeep,
    TrailingCharacters,
    UnexpectedCharacter,
    UnsupportedKind,
)
from .read import SliceReader, TextReader
from .shapes import target_for
from .visitor import Visitor

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 128
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

I, L, D, E = b"ilde"
MINUS, COLON, ZERO, NINE = b"-:09"


def is_digit(c: int) -> bool:
    return ZERO <= c <= NINE


class Decoder:
    def __init__(
        self,
        reader: SliceReader,
        max_depth: int = DEFAULT_MAX_DEPTH,
        strict: bool = False,
    ):
        self.reader = reader
        self.max_depth = max_depth
        self.strict = strict
        self.depth = 0

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview, **kwargs) -> "Decoder":
        return cls(SliceReader(data), **kwargs)

    @classmethod
    def from_text(cls, text: str, **kwargs) -> "Decoder":
        return cls(TextReader(text), **kwargs)

    @property
    def position(self) -> int:
        return self.reader.current

    def peek(self) -> int:
        return self.reader.peek()

    def next(self) -> int:
        return self.reader.next()

    def read_bytes(self, n: int) -> memoryview:
        return self.reader.read_bytes(n)

    def read_str(self, n: int) -> str:
        return self.reader.read_str(n)

    def end(self) -> None:
        """Check that the whole input has been consumed."""
        if not self.reader.is_at_end():
            raise TrailingCharacters(
                f"{len(self.reader) - self.position} bytes left after value",
                position=self.position,
            )

    def deserialize(self, target: Any) -> Any:
        return target_for(target).deserialize(self)

    # Primitive parsers

    def parse_signed(self) -> int:
        start = self.position
        if self.next() != I:
            raise ExpectedI(position=start)

        c = self.next()
        negative = c == MINUS
        if negative:
            c = self.next()
        if not is_digit(c):
            raise ExpectedInteger(position=self.position - 1)

        first = c
        n = c - ZERO
        while (c := self.next()) != E:
            if not is_digit(c):
                raise UnexpectedCharacter(
                    f"unexpected {chr(c)!r} in integer", position=self.position - 1
                )
            n = n * 10 + (c - ZERO)
            if n > INT64_MAX + 1:
                raise IntegerOutOfRange(position=start)

        # i0e is the only valid encoding of zero when strict.
        if self.strict and first == ZERO and (negative or self.position - start > 3):
            raise LeadingZero(position=start)

        n = -n if negative else n
        if not INT64_MIN <= n <= INT64_MAX:
            raise IntegerOutOfRange(position=start)

        return n

    def parse_length(self) -> int:
        start = self.position
        c = self.next()
        if not is_digit(c):
            raise ExpectedInteger(position=start)

        first = c
        length = c - ZERO
        while (c := self.next()) != COLON:
            if not is_digit(c):
                raise ExpectedColon(position=self.position - 1)
            length = length * 10 + (c - ZERO)

        if self.strict and first == ZERO and self.position - start > 2:
            raise LeadingZero(position=start)

        return length

    def parse_string(self) -> str:
        return self.read_str(self.parse_length())

    def parse_bytes(self) -> memoryview:
        return self.read_bytes(self.parse_length())

    # Visitor dispatch

    def deserialize_any(self, visitor: Visitor) -> Any:
        c = self.peek()
        if c == D:
            return self.deserialize_map(visitor)
        if is_digit(c):
            return self.deserialize_str(visitor)
        raise BencodeSyntaxError(
            f"cannot infer a value starting with {chr(c)!r}", position=self.position
        )

    def deserialize_int(self, visitor: Visitor) -> Any:
        return visitor.visit_int(self.parse_signed())

    def deserialize_str(self, visitor: Visitor) -> Any:
        return visitor.visit_str(self.parse_string())

    def deserialize_identifier(self, visitor: Visitor) -> Any:
        return self.deserialize_str(visitor)

    def deserialize_bytes(self, visitor: Visitor) -> Any:
        return visitor.visit_bytes(self.parse_bytes())

    def deserialize_map(self, visitor: Visitor) -> Any:
        if self.next() != D:
            raise ExpectedMap(position=self.position - 1)

        access = MapAccess(self)
        self.enter()
        try:
            value = visitor.visit_map(access)
        finally:
            access.release()
            self.depth -= 1

        if self.next() != E:
            raise ExpectedMapEnd(position=self.position - 1)
        return value

    def deserialize_struct(
        self, name: str, fields: list[str], visitor: Visitor
    ) -> Any:
        return self.deserialize_map(visitor)

    def deserialize_seq(self, visitor: Visitor) -> Any:
        if self.next() != L:
            raise ExpectedList(position=self.position - 1)

        access = SeqAccess(self)
        self.enter()
        try:
            value = visitor.visit_seq(access)
        finally:
            access.release()
            self.depth -= 1

        if self.next() != E:
            raise ExpectedListEnd(position=self.position - 1)
        return value

    def deserialize_ignored_any(self, visitor: Visitor) -> Any:
        self.skip_value()
        return visitor.visit_ignored()

    def skip_value(self) -> None:
        """Consume one well-formed value of any kind without building it."""
        c = self.peek()
        if c == I:
            self.parse_signed()
        elif is_digit(c):
            self.parse_bytes()
        elif c in (L, D):
            self.next()
            self.enter()
            try:
                while self.peek() != E:
                    if c == D:
                        self.parse_bytes()
                    self.skip_value()
            finally:
                self.depth -= 1
            self.next()
        else:
            raise BencodeSyntaxError(
                f"unexpected {chr(c)!r} at start of value", position=self.position
            )

    def enter(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            self.depth -= 1
            raise NestingTooDeep(
                f"more than {self.max_depth} nested containers", position=self.position
            )

    def unsupported(self, kind: str) -> UnsupportedKind:
        return UnsupportedKind(kind, position=self.position)

    def deserialize_bool(self, visitor: Visitor) -> Any:
        raise self.unsupported("bool")

    def deserialize_float(self, visitor: Visitor) -> Any:
        raise self.unsupported("float")

    def deserialize_char(self, visitor: Visitor) -> Any:
        raise self.unsupported("char")

    def deserialize_option(self, visitor: Visitor) -> Any:
        raise self.unsupported("option")

    def deserialize_unit(self, visitor: Visitor) -> Any:
        raise self.unsupported("unit")

    def deserialize_enum(self, visitor: Visitor) -> Any:
        raise self.unsupported("enum")

    def deserialize_byte_buf(self, visitor: Visitor) -> Any:
        raise self.unsupported("byte_buf")

    def deserialize_tuple(self, visitor: Visitor) -> Any:
        raise self.unsupported("tuple")


def _decode(decoder: Decoder, target: Any) -> Any:
    try:
        value = decoder.deserialize(target)
        decoder.end()
    except BencodeError as e:
        logger.debug(f"Decoding failed: {type(e).__name__}: {e}")
        raise
    return value


def decode_from_bytes(
    data: bytes | bytearray | memoryview,
    target: Any,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    strict: bool = False,
) -> Any:
    """Decode exactly one value of shape ``target`` from ``data``.

    ``target`` is a ``Deserialize`` implementation or an annotation that
    ``shapes.target_for`` understands (``int``, ``list[str]``, a dataclass...).
    """
    logger.debug(f"Decoding {len(data)} bytes into {target!r}")
    return _decode(Decoder.from_bytes(data, max_depth=max_depth, strict=strict), target)


def decode_from_text(
    text: str,
    target: Any,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    strict: bool = False,
) -> Any:
    logger.debug(f"Decoding {len(text)} characters into {target!r}")
    return _decode(Decoder.from_text(text, max_depth=max_depth, strict=strict), target)
