from typing import TYPE_CHECKING, Any, Protocol

from .errors import Custom

if TYPE_CHECKING:
    from .access import MapAccess, SeqAccess
    from .decoder import Decoder
    from .encoder import Encoder


class Deserialize(Protocol):
    """Something the decoder can build a value for.

    A class can satisfy this with a ``classmethod``, a parametrised shape
    with a plain method. Either way it picks one of the
    ``Decoder.deserialize_*`` entry points and hands it a ``Visitor``.
    """

    def deserialize(self, decoder: "Decoder") -> Any: ...


class Serialize(Protocol):
    """Something the encoder can walk without knowing its layout."""

    def serialize(self, encoder: "Encoder") -> None: ...


class Visitor:
    """Receives whatever the decoder found on the wire.

    Every ``visit_*`` method fails by default; subclasses override the
    ones matching the shapes they accept.
    """

    expecting = "a bencode value"

    def visit_int(self, value: int) -> Any:
        raise self.invalid_type("integer")

    def visit_str(self, value: str) -> Any:
        raise self.invalid_type("string")

    def visit_bytes(self, value: memoryview) -> Any:
        raise self.invalid_type("byte string")

    def visit_map(self, access: "MapAccess") -> Any:
        raise self.invalid_type("dictionary")

    def visit_seq(self, access: "SeqAccess") -> Any:
        raise self.invalid_type("list")

    def visit_ignored(self) -> Any:
        return None

    def invalid_type(self, found: str) -> Custom:
        return Custom(f"invalid type: {found}, expected {self.expecting}")
