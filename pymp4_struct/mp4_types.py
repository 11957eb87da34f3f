# pymp4_struct/mp4_types.py

from __future__ import annotations

import enum
import logging
import struct
from dataclasses import dataclass, field
from typing import Callable

from .base import BOX_HEADER_SIZE, BoxNode
from .errors import TruncatedPayloadError
from .fixed_point import Fixed16, Fixed32, decode_fixed16, decode_fixed32
from .parser import walk_boxes

logger = logging.getLogger(__name__)


class BoxType(enum.Enum):
    """Box tags this package knows how to decode."""
    FTYP = b'ftyp'
    MOOV = b'moov'
    MVHD = b'mvhd'
    UNKNOWN = None

    @classmethod
    def from_tag(cls, tag: bytes) -> BoxType:
        try:
            return cls(bytes(tag))
        except ValueError:
            return cls.UNKNOWN


class _TypedBox:
    """Forwards the box identity fields to the wrapped ``BoxNode``."""
    box: BoxNode

    @property
    def type(self) -> bytes:
        return self.box.type

    @property
    def name(self) -> str:
        return self.box.name

    @property
    def offset(self) -> int:
        return self.box.offset

    @property
    def size(self) -> int:
        return self.box.size


# --- FileTypeBox ---
# ('ftyp')
@dataclass
class FileTypeBox(_TypedBox):
    box: BoxNode
    major_brand: str
    minor_version: int
    compatible_brands: list[str] = field(default_factory=list)

    MIN_PAYLOAD = 8

    @classmethod
    def parse(cls, box: BoxNode) -> FileTypeBox:
        data = box.read_payload()
        if len(data) < cls.MIN_PAYLOAD:
            raise TruncatedPayloadError(box.type, cls.MIN_PAYLOAD, len(data))
        major_brand = data[0:4].decode('latin-1')
        minor_version = struct.unpack('>I', data[4:8])[0]
        # a trailing partial brand is dropped
        brands = [
            data[pos:pos + 4].decode('latin-1')
            for pos in range(8, len(data) - 3, 4)
        ]
        return cls(box, major_brand, minor_version, brands)


# --- MovieHeaderBox ---
# ('mvhd')
@dataclass
class MovieHeaderBox(_TypedBox):
    """
    Movie header, version 0 layout.

    Only the leading fields are decoded; the matrix and the fields after
    the volume are left alone.
    """
    box: BoxNode
    version: int
    flags: int
    creation_time: int
    modification_time: int
    timescale: int
    duration: int
    rate: Fixed32
    volume: Fixed16

    MIN_PAYLOAD = 26

    @classmethod
    def parse(cls, box: BoxNode) -> MovieHeaderBox:
        data = box.read_payload()
        if len(data) < cls.MIN_PAYLOAD:
            raise TruncatedPayloadError(box.type, cls.MIN_PAYLOAD, len(data))
        version_flags, creation_time, modification_time, timescale, duration = \
            struct.unpack('>5I', data[0:20])
        return cls(
            box=box,
            version=version_flags >> 24,
            flags=version_flags & 0xFFFFFF,
            creation_time=creation_time,
            modification_time=modification_time,
            timescale=timescale,
            duration=duration,
            rate=decode_fixed32(data[20:24]),
            volume=decode_fixed16(data[24:26]),
        )

    @property
    def duration_seconds(self) -> float | None:
        if self.timescale == 0:
            return None
        return self.duration / self.timescale


# --- MovieBox ---
# ('moov')
@dataclass
class MovieBox(_TypedBox):
    box: BoxNode
    mvhd: MovieHeaderBox | None = None
    children: list[BoxNode] = field(default_factory=list)

    @classmethod
    def parse(cls, box: BoxNode) -> MovieBox:
        payload_size = box.payload_size
        # an empty container is fine; 1..7 bytes cannot hold a child header
        if payload_size < 0 or 0 < payload_size < BOX_HEADER_SIZE:
            raise TruncatedPayloadError(box.type, BOX_HEADER_SIZE, max(payload_size, 0))

        movie = cls(box)
        for child in walk_boxes(box.source, box.payload_start, payload_size):
            movie.children.append(child)
            decoded = decode_box(child, known=MOVIE_CHILD_TYPES)
            if isinstance(decoded, MovieHeaderBox) and movie.mvhd is None:
                movie.mvhd = decoded
        return movie

    def find_child(self, box_type: bytes) -> BoxNode | None:
        for child in self.children:
            if child.type == box_type:
                return child
        return None


# dispatch sets per nesting level
TOP_LEVEL_TYPES = frozenset({BoxType.FTYP, BoxType.MOOV})
MOVIE_CHILD_TYPES = frozenset({BoxType.MVHD})

BOX_TYPE_MAP: dict[BoxType, Callable[[BoxNode], _TypedBox]] = {
    BoxType.FTYP: FileTypeBox.parse,
    BoxType.MOOV: MovieBox.parse,
    BoxType.MVHD: MovieHeaderBox.parse,
}


def decode_box(box: BoxNode,
               known: frozenset[BoxType] | None = None) -> FileTypeBox | MovieBox | MovieHeaderBox | None:
    """
    Decodes ``box`` by its tag; unknown tags give None.

    ``known`` limits which types are decoded at this level; anything else
    is treated as unknown.
    """
    box_type = BoxType.from_tag(box.type)
    if known is not None and box_type not in known:
        box_type = BoxType.UNKNOWN
    decoder = BOX_TYPE_MAP.get(box_type)
    if decoder is None:
        logger.debug("skipping unknown box %r at offset %d", box.name, box.offset)
        return None
    logger.debug("decoding %r at offset %d", box.name, box.offset)
    return decoder(box)
