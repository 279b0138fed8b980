import dataclasses
import enum
import logging
from typing import Any

from .decoder import DEFAULT_MAX_DEPTH, INT64_MAX, INT64_MIN
from .errors import (
    BencodeError,
    Custom,
    IntegerOutOfRange,
    InvalidText,
    NestingTooDeep,
    UnsupportedKind,
)
from .shapes import record_fields

logger = logging.getLogger(__name__)


class Encoder:
    """Accumulates the bencoding of the values handed to ``serialize``.

    Dictionary entries are written in the order they are presented, unless
    ``sort_keys`` is set, in which case they are sorted by raw key bytes.
    """

    def __init__(self, sort_keys: bool = False, max_depth: int = DEFAULT_MAX_DEPTH):
        self.output = bytearray()
        self.sort_keys = sort_keys
        self.max_depth = max_depth
        self.depth = 0

    def serialize(self, obj: Any) -> None:
        match obj:
            case _ if hasattr(type(obj), "serialize"):
                obj.serialize(self)

            case enum.Enum():
                self.serialize_enum(obj)

            case bool():
                self.serialize_bool(obj)

            case int():
                self.serialize_int(obj)

            case str():
                self.serialize_str(obj)

            case bytes() | bytearray() | memoryview():
                self.serialize_bytes(obj)

            case list():
                seq = self.serialize_seq(len(obj))
                for item in obj:
                    seq.serialize_element(item)
                seq.end()

            case dict():
                m = self.serialize_map(len(obj))
                for k, v in obj.items():
                    m.serialize_entry(k, v)
                m.end()

            case _ if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
                fields = record_fields(type(obj))
                s = self.serialize_struct(type(obj).__name__, len(fields))
                for wire, attr in fields:
                    s.serialize_field(wire, getattr(obj, attr))
                s.end()

            case float():
                self.serialize_float(obj)

            case None:
                self.serialize_none()

            case tuple():
                self.serialize_tuple(obj)

            case _:
                raise UnsupportedKind(type(obj).__name__)

    def serialize_int(self, i: int) -> None:
        if not INT64_MIN <= i <= INT64_MAX:
            raise IntegerOutOfRange(f"{i} does not fit in 64 bits")
        self.output += f"i{i}e".encode()

    def serialize_str(self, s: str) -> None:
        self.serialize_bytes(s.encode("utf-8"))

    def serialize_bytes(self, b: bytes | bytearray | memoryview) -> None:
        b = memoryview(b).cast("B")
        self.output += str(len(b)).encode() + b":"
        self.output += b

    def serialize_seq(self, length: int | None = None) -> "SeqSerializer":
        self.enter()
        self.output += b"l"
        return SeqSerializer(self)

    def serialize_map(self, length: int | None = None) -> "MapSerializer":
        self.enter()
        self.output += b"d"
        return MapSerializer(self)

    def serialize_struct(self, name: str, length: int) -> "MapSerializer":
        return self.serialize_map(length)

    def enter(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            self.depth -= 1
            raise NestingTooDeep(f"more than {self.max_depth} nested containers")

    def leave(self) -> None:
        self.output += b"e"
        self.depth -= 1

    def serialize_bool(self, v: bool) -> None:
        raise UnsupportedKind("bool")

    def serialize_float(self, v: float) -> None:
        raise UnsupportedKind("float")

    def serialize_char(self, v: str) -> None:
        raise UnsupportedKind("char")

    def serialize_none(self) -> None:
        raise UnsupportedKind("option")

    def serialize_unit(self) -> None:
        raise UnsupportedKind("unit")

    def serialize_enum(self, v: enum.Enum) -> None:
        raise UnsupportedKind("enum")

    def serialize_tuple(self, v: tuple) -> None:
        raise UnsupportedKind("tuple")


class SeqSerializer:
    def __init__(self, encoder: Encoder):
        self.encoder = encoder

    def serialize_element(self, value: Any) -> None:
        self.encoder.serialize(value)

    def end(self) -> None:
        self.encoder.leave()


class MapSerializer:
    def __init__(self, encoder: Encoder):
        self.encoder = encoder
        # (raw key, encoded entry) pairs, only kept when sorting
        self.entries: list[tuple[bytes, bytes]] = []
        self.seen: set[bytes] = set()

    def serialize_key(self, key: Any) -> bytes:
        match key:
            case str():
                raw = key.encode("utf-8")
            case bytes() | bytearray() | memoryview():
                raw = bytes(key)
            case _:
                raise UnsupportedKind(f"{type(key).__name__} dictionary key")
        if raw in self.seen:
            raise Custom(f"duplicate key {raw!r}")
        self.seen.add(raw)

        self.encoder.serialize_bytes(raw)
        return raw

    def serialize_entry(self, key: Any, value: Any) -> None:
        output = self.encoder.output
        start = len(output)

        raw = self.serialize_key(key)
        self.encoder.serialize(value)

        if self.encoder.sort_keys:
            self.entries.append((raw, bytes(output[start:])))
            del output[start:]

    def serialize_field(self, name: str, value: Any) -> None:
        self.serialize_entry(name, value)

    def end(self) -> None:
        for _, entry in sorted(self.entries, key=lambda e: e[0]):
            self.encoder.output += entry
        self.encoder.leave()


def encode_to_bytes(
    value: Any, *, sort_keys: bool = False, max_depth: int = DEFAULT_MAX_DEPTH
) -> bytes:
    encoder = Encoder(sort_keys=sort_keys, max_depth=max_depth)
    try:
        encoder.serialize(value)
    except BencodeError as e:
        logger.debug(f"Encoding failed: {type(e).__name__}: {e}")
        raise

    logger.debug(f"Encoded {type(value).__name__} into {len(encoder.output)} bytes")
    return bytes(encoder.output)


def encode_to_text(
    value: Any, *, sort_keys: bool = False, max_depth: int = DEFAULT_MAX_DEPTH
) -> str:
    data = encode_to_bytes(value, sort_keys=sort_keys, max_depth=max_depth)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidText(position=e.start) from e
