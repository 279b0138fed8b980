from .errors import BufferTooShort, InvalidText, UnexpectedEndOfInput


class SliceReader:
    """Cursor over an immutable byte buffer.

    ``read_bytes`` hands out ``memoryview`` slices of the original buffer
    without copying. A view is only valid while the buffer it was taken
    from is alive and unchanged; copy it with ``bytes(view)`` to keep it
    longer.
    """

    def __init__(self, source: bytes | bytearray | memoryview):
        self.source = memoryview(source).cast("B")
        self.current = 0

    def __len__(self) -> int:
        return len(self.source)

    def peek(self) -> int:
        if self.current >= len(self.source):
            raise UnexpectedEndOfInput(position=self.current)
        return self.source[self.current]

    def next(self) -> int:
        c = self.peek()
        self.current += 1
        return c

    def read_bytes(self, n: int) -> memoryview:
        end = self.current + n
        if end > len(self.source):
            raise BufferTooShort(
                f"need {n} bytes, {len(self.source) - self.current} left",
                position=self.current,
            )

        view = self.source[self.current : end]
        self.current = end
        return view

    def read_str(self, n: int) -> str:
        start = self.current
        view = self.read_bytes(n)
        try:
            return str(view, "utf-8")
        except UnicodeDecodeError as e:
            raise InvalidText(position=start + e.start) from e

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)


class TextReader(SliceReader):
    """Reader over the UTF-8 encoding of a ``str``."""

    def __init__(self, text: str):
        super().__init__(text.encode("utf-8"))
