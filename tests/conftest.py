"""
Pytest fixtures that build small synthetic MP4 files in memory.
"""

import struct

import pytest

# ftyp payload: major 'isom', minor 512, compatible 'iso2' 'mp41'
FTYP_PAYLOAD = bytes.fromhex("69736F6D 00000200 69736F32 6D703431")

# mvhd v0 payload: timescale 1000, duration 100, rate 1.0, volume 1.0
MVHD_PAYLOAD = bytes.fromhex("00000000 00000000 00000000 000003E8 00000064 00010000 0100")


def box(box_type: bytes, payload: bytes = b"") -> bytes:
    return struct.pack(">I", 8 + len(payload)) + box_type + payload


@pytest.fixture
def make_box():
    """Factory fixture: ``make_box(b'free', b'...')`` returns a full box."""
    return box


@pytest.fixture
def mvhd_payload():
    # pad out to the 100-byte size of a real version 0 header
    return MVHD_PAYLOAD + bytes(100 - len(MVHD_PAYLOAD))


@pytest.fixture
def sample_mp4(mvhd_payload):
    """ftyp, free, moov(mvhd, trak), mdat."""
    moov = box(b"moov", box(b"mvhd", mvhd_payload) + box(b"trak", b"\x00" * 12))
    return box(b"ftyp", FTYP_PAYLOAD) + box(b"free") + moov + box(b"mdat", b"\xde\xad\xbe\xef")


@pytest.fixture
def sample_path(tmp_path, sample_mp4):
    path = tmp_path / "sample.mp4"
    path.write_bytes(sample_mp4)
    return path
