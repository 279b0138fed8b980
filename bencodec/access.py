from typing import TYPE_CHECKING, Any, Iterator

from .visitor import Deserialize

if TYPE_CHECKING:
    from .decoder import Decoder

E = ord("e")

# Returned by next_key and next_element once the closing 'e' is next.
END = object()


class _ContainerAccess:
    """Bound to one open ``d``/``l`` container of a decoder.

    The access is released by the decoder once the visitor returns; using it
    afterwards is a programming error.
    """

    def __init__(self, decoder: "Decoder"):
        self._decoder: "Decoder | None" = decoder

    @property
    def decoder(self) -> "Decoder":
        if self._decoder is None:
            raise RuntimeError("container access used after its container closed")
        return self._decoder

    def release(self) -> None:
        self._decoder = None

    def at_end(self) -> bool:
        return self.decoder.peek() == E


class MapAccess(_ContainerAccess):
    def next_key(self, target: Deserialize) -> Any:
        """Decode the next key, or return END once the closing 'e' is next."""
        if self.at_end():
            return END
        return target.deserialize(self.decoder)

    def next_value(self, target: Deserialize) -> Any:
        # Key and value are simply adjacent, there is no separator to consume.
        return target.deserialize(self.decoder)

    def entries(
        self, key_target: Deserialize, value_target: Deserialize
    ) -> Iterator[tuple[Any, Any]]:
        while not self.at_end():
            key = key_target.deserialize(self.decoder)
            yield key, self.next_value(value_target)


class SeqAccess(_ContainerAccess):
    def next_element(self, target: Deserialize) -> Any:
        """Decode the next element, or return END once the closing 'e' is next."""
        if self.at_end():
            return END
        return target.deserialize(self.decoder)

    def elements(self, target: Deserialize) -> Iterator[Any]:
        while not self.at_end():
            yield target.deserialize(self.decoder)
