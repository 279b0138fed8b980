"""Decode targets for ordinary Python annotations.

``target_for`` maps ``int``, ``str``, ``bytes``, ``memoryview``,
``list[T]``, ``dict[str, T]``, ``dict[bytes, T]`` and dataclasses onto
``Deserialize`` implementations, so callers can write::

    decode_from_text("l1:a1:be", list[str])

Anything already implementing ``deserialize(decoder)`` is used as is.
Annotations for kinds bencode has no encoding for (``bool``, ``float``,
``Optional``, ``Enum``, ``tuple``...) resolve to a target that makes the
decoder raise ``UnsupportedKind``.
"""

import dataclasses
import enum
import types
import typing
from typing import Any

from .access import END
from .errors import Custom
from .visitor import Visitor


def record_fields(cls: type) -> list[tuple[str, str]]:
    """(wire key, attribute name) pairs of a dataclass, in declaration order.

    The wire key defaults to the attribute name and can be overridden with
    ``field(metadata={"bencode": "piece length"})``.
    """
    return [
        (f.metadata.get("bencode", f.name), f.name)
        for f in dataclasses.fields(cls)
        if f.init
    ]


class Int(Visitor):
    expecting = "an integer"

    def deserialize(self, decoder):
        return decoder.deserialize_int(self)

    def visit_int(self, value: int) -> int:
        return value


class Str(Visitor):
    expecting = "a string"

    def deserialize(self, decoder):
        return decoder.deserialize_str(self)

    def visit_str(self, value: str) -> str:
        return value


class Identifier(Str):
    expecting = "a field name"

    def deserialize(self, decoder):
        return decoder.deserialize_identifier(self)


class Bytes(Visitor):
    expecting = "a byte string"

    def deserialize(self, decoder):
        return decoder.deserialize_bytes(self)

    def visit_bytes(self, value: memoryview) -> bytes:
        return bytes(value)


class BorrowedBytes(Bytes):
    """Byte string as a view into the decoded buffer, without copying."""

    def visit_bytes(self, value: memoryview) -> memoryview:
        return value


class IgnoredAny(Visitor):
    def deserialize(self, decoder):
        return decoder.deserialize_ignored_any(self)


class AnyValue(Visitor):
    """Whatever the wire says: strings and dictionaries of them."""

    expecting = "a string or a dictionary"

    def deserialize(self, decoder):
        return decoder.deserialize_any(self)

    def visit_str(self, value: str) -> str:
        return value

    def visit_map(self, access) -> dict[str, Any]:
        return dict(access.entries(Identifier(), self))


class ListOf(Visitor):
    def __init__(self, element):
        self.element = element
        self.expecting = "a list"

    def deserialize(self, decoder):
        return decoder.deserialize_seq(self)

    def visit_seq(self, access) -> list:
        return list(access.elements(self.element))


class DictOf(Visitor):
    def __init__(self, key, value):
        self.key = key
        self.value = value
        self.expecting = "a dictionary"

    def deserialize(self, decoder):
        return decoder.deserialize_map(self)

    def visit_map(self, access) -> dict:
        return dict(access.entries(self.key, self.value))


class Record(Visitor):
    """A dataclass, decoded from a dictionary keyed by its field names."""

    def __init__(self, cls: type):
        self.cls = cls
        self.expecting = f"a dictionary for {cls.__name__}"
        self._fields = None

    @property
    def fields(self) -> dict[str, tuple[str, Any]]:
        # Resolved lazily so that self-referencing records terminate.
        if self._fields is None:
            hints = typing.get_type_hints(self.cls)
            self._fields = {
                wire: (attr, target_for(hints[attr]))
                for wire, attr in record_fields(self.cls)
            }
        return self._fields

    def deserialize(self, decoder):
        return decoder.deserialize_struct(self.cls.__name__, list(self.fields), self)

    def visit_map(self, access):
        fields = self.fields
        values = {}

        while (key := access.next_key(Identifier())) is not END:
            if key not in fields:
                access.next_value(IgnoredAny())
                continue

            attr, target = fields[key]
            if attr in values:
                raise Custom(f"duplicate field `{key}`")
            values[attr] = access.next_value(target)

        for wire, (attr, _) in fields.items():
            if attr not in values:
                raise Custom(f"missing field `{wire}`")

        return self.cls(**values)


class Unsupported:
    """Target for a kind the codec does not implement."""

    def __init__(self, kind: str):
        self.kind = kind

    def deserialize(self, decoder):
        return getattr(decoder, f"deserialize_{self.kind}")(Visitor())


def target_for(tp: Any):
    if hasattr(tp, "deserialize"):
        return tp

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    match tp:
        case _ if tp is bool:
            return Unsupported("bool")
        case _ if tp is int:
            return Int()
        case _ if tp is str:
            return Str()
        case _ if tp is bytes:
            return Bytes()
        case _ if tp is memoryview:
            return BorrowedBytes()
        case _ if tp is bytearray:
            return Unsupported("byte_buf")
        case _ if tp is float:
            return Unsupported("float")
        case _ if tp is None or tp is types.NoneType:
            return Unsupported("unit")
        case _ if tp is Any:
            return AnyValue()
        case _ if tp is tuple or origin is tuple:
            return Unsupported("tuple")
        case _ if origin is list:
            return ListOf(target_for(args[0]))
        case _ if origin is dict:
            if args[0] not in (str, bytes):
                raise TypeError(f"dictionary keys must be str or bytes, not {args[0]!r}")
            return DictOf(target_for(args[0]), target_for(args[1]))
        case _ if origin in (typing.Union, types.UnionType):
            if types.NoneType in args:
                return Unsupported("option")
            raise TypeError(f"cannot decode into a union: {tp!r}")
        case type() if issubclass(tp, enum.Enum):
            return Unsupported("enum")
        case type() if dataclasses.is_dataclass(tp):
            return Record(tp)

    raise TypeError(f"cannot decode into {tp!r}")
