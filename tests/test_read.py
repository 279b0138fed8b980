import pytest

from bencodec.errors import BufferTooShort, InvalidText, UnexpectedEndOfInput
from bencodec.read import SliceReader, TextReader


class TestSliceReader:
    """Test suite for the byte buffer cursor."""

    def test_peek_does_not_advance(self):
        """Test that peek returns the current byte and keeps the cursor."""
        reader = SliceReader(b"ab")
        assert reader.peek() == ord("a")
        assert reader.peek() == ord("a")
        assert reader.current == 0

    def test_next_advances(self):
        """Test that next returns bytes in order."""
        reader = SliceReader(b"ab")
        assert reader.next() == ord("a")
        assert reader.next() == ord("b")
        assert reader.is_at_end()

    def test_peek_past_end(self):
        """Test that peeking an exhausted buffer fails."""
        reader = SliceReader(b"")
        with pytest.raises(UnexpectedEndOfInput):
            reader.peek()

    def test_next_past_end(self):
        """Test that next on an exhausted buffer fails and keeps the cursor."""
        reader = SliceReader(b"a")
        reader.next()
        with pytest.raises(UnexpectedEndOfInput) as exc_info:
            reader.next()
        assert exc_info.value.position == 1
        assert reader.current == 1

    def test_read_bytes_is_a_view(self):
        """Test that read_bytes returns a view into the original buffer."""
        buffer = bytearray(b"spam")
        reader = SliceReader(buffer)
        view = reader.read_bytes(4)
        assert view == b"spam"

        buffer[0] = ord("S")
        assert view == b"Spam"
        assert reader.current == 4

    def test_read_bytes_too_short(self):
        """Test that a read longer than the remaining bytes fails."""
        reader = SliceReader(b"ab")
        with pytest.raises(BufferTooShort):
            reader.read_bytes(3)
        assert reader.current == 0

    def test_read_zero_bytes(self):
        """Test that an empty read succeeds at the end of the buffer."""
        reader = SliceReader(b"")
        assert reader.read_bytes(0) == b""

    def test_read_str(self):
        """Test that read_str decodes UTF-8."""
        reader = SliceReader("héllo".encode())
        assert reader.read_str(6) == "héllo"

    def test_read_str_invalid_utf8(self):
        """Test that read_str rejects bytes that are not UTF-8."""
        reader = SliceReader(b"a\xffb")
        with pytest.raises(InvalidText) as exc_info:
            reader.read_str(3)
        assert exc_info.value.position == 1

    def test_read_bytes_accepts_arbitrary_bytes(self):
        """Test that read_bytes does not care about text validity."""
        reader = SliceReader(b"\xff\xfe")
        assert bytes(reader.read_bytes(2)) == b"\xff\xfe"


def test_text_reader_reads_utf8():
    """Test that a TextReader walks the UTF-8 encoding of its text."""
    reader = TextReader("é")
    assert len(reader) == 2
    assert reader.read_str(2) == "é"
