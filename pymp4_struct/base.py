# pymp4_struct/base.py

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from .errors import MalformedBoxError
from .source import RandomAccessSource

BOX_HEADER_SIZE = 8
MAX_BOX_SIZE = 0xFFFFFFFF

_HEADER = struct.Struct('>I4s')


def decode_header(source: RandomAccessSource, offset: int) -> tuple[int, bytes]:
    """
    Reads the 8-byte header at ``offset`` and returns ``(size, type_tag)``.

    The tag is returned verbatim. Sizes 0 (box runs to the end of its
    container) and 1 (64-bit size follows) are not interpreted and, like
    any size below the header length, raise ``MalformedBoxError``.
    """
    size, box_type = _HEADER.unpack(source.read_at(offset, BOX_HEADER_SIZE))
    if size == 0:
        raise MalformedBoxError(offset, size, "to-end-of-container size is not supported")
    if size == 1:
        raise MalformedBoxError(offset, size, "64-bit large size is not supported")
    if size < BOX_HEADER_SIZE:
        raise MalformedBoxError(offset, size, f"size smaller than the {BOX_HEADER_SIZE}-byte header")
    return size, box_type


def encode_header(size: int, box_type: bytes) -> bytes:
    """Builds the 8-byte header for a box of ``size`` total bytes."""
    if not BOX_HEADER_SIZE <= size <= MAX_BOX_SIZE:
        raise ValueError(f"box size {size} outside [{BOX_HEADER_SIZE}, {MAX_BOX_SIZE}]")
    if len(box_type) != 4:
        raise ValueError(f"box type must be exactly 4 bytes, got {box_type!r}")
    return _HEADER.pack(size, bytes(box_type))


@dataclass(frozen=True)
class BoxNode:
    """
    One box located in a source: its tag and byte extent.

    ``source`` is borrowed, not owned; the caller keeps it open for as long
    as payloads are read. The payload itself is only read on demand.
    """
    type: bytes
    offset: int
    size: int
    source: RandomAccessSource = field(repr=False, compare=False)

    @property
    def name(self) -> str:
        return self.type.decode('latin-1')

    @property
    def end(self) -> int:
        return self.offset + self.size

    @property
    def payload_start(self) -> int:
        return self.offset + BOX_HEADER_SIZE

    @property
    def payload_size(self) -> int:
        return self.size - BOX_HEADER_SIZE

    def read_payload(self) -> bytes:
        """Reads the bytes following the header."""
        if self.size < BOX_HEADER_SIZE:
            raise MalformedBoxError(self.offset, self.size, "box is smaller than its header")
        return self.source.read_at(self.payload_start, self.payload_size)

    def build_header(self) -> bytes:
        return encode_header(self.size, self.type)
