import hashlib
import logging
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from bencodec.decoder import Decoder, decode_from_bytes
from bencodec.encoder import encode_to_bytes
from bencodec.shapes import DictOf, Str

lt = pytest.importorskip("libtorrent")

from .utils import create_payload, create_torrent_file  # noqa: E402

logger = logging.getLogger(__name__)

TRACKER_URL = "http://localhost:8080/announce"


@dataclass
class Info:
    name: str
    length: int
    piece_length: int = field(metadata={"bencode": "piece length"})
    pieces: bytes


@dataclass
class Metainfo:
    announce: str
    info: Info


class InfoSpan:
    """Decode target recording where the info dictionary sits in the input."""

    def deserialize(self, decoder):
        start = decoder.position
        decoder.skip_value()
        return decoder.reader.source[start : decoder.position]


@pytest.fixture
def torrent_file(tmp_path):
    payload_file = create_payload(str(tmp_path), 40 * 1024)
    return create_torrent_file(payload_file, TRACKER_URL)


class TestLibtorrentInterop:
    """Check bencodec against libtorrent's own bencoding."""

    def test_decode_torrent_file(self, torrent_file):
        """Test decoding a real .torrent into records."""
        metainfo = decode_from_bytes(Path(torrent_file).read_bytes(), Metainfo)
        info = lt.torrent_info(torrent_file)

        assert metainfo.announce == TRACKER_URL
        assert metainfo.info.name == info.name()
        assert metainfo.info.length == info.total_size()
        assert metainfo.info.piece_length == info.piece_length()
        assert len(metainfo.info.pieces) == 20 * info.num_pieces()

    def test_info_hash(self, torrent_file):
        """Test that the raw info dictionary hashes to libtorrent's info hash."""
        data = Path(torrent_file).read_bytes()
        decoder = Decoder.from_bytes(data)

        spans = decoder.deserialize(DictOf(Str(), InfoSpan()))
        decoder.end()

        info_hash = hashlib.sha1(spans["info"]).hexdigest()
        logger.debug(f"Info hash: {info_hash}")
        assert info_hash == str(lt.torrent_info(torrent_file).info_hash())

    def test_libtorrent_decodes_our_output(self):
        """Test that libtorrent decodes sorted output back to the same value."""
        encoded = encode_to_bytes({b"b": [1, b"x"], b"a": -7}, sort_keys=True)
        assert encoded == b"d1:ai-7e1:bli1e1:xee"
        assert lt.bdecode(encoded) == {b"a": -7, b"b": [1, b"x"]}
