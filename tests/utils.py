import logging
from pathlib import Path

import libtorrent as lt

logger = logging.getLogger(__name__)


def create_payload(workspace: str, size: int = 64 * 1024) -> str:
    """Create a payload file in the workspace"""
    payload_file = Path(workspace) / "payload.dat"
    payload_file.write_bytes(b"A" * size)
    return str(payload_file)


def create_torrent_file(payload_file: str, tracker: str) -> str:
    """Create a single-file torrent for the payload, next to it"""
    payload_path = Path(payload_file)

    fs = lt.file_storage()
    lt.add_files(fs, str(payload_path))

    t = lt.create_torrent(fs)
    t.add_tracker(tracker)
    t.set_creator("bencodec-tests")

    lt.set_piece_hashes(t, str(payload_path.parent))
    torrent_data = lt.bencode(t.generate())

    torrent_path = payload_path.with_suffix(".torrent")
    torrent_path.write_bytes(torrent_data)

    logger.debug(f"Torrent file: {torrent_path} ({len(torrent_data)} bytes)")
    return str(torrent_path)
