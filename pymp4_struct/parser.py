# pymp4_struct/parser.py

import logging
from typing import Iterator, Sequence

from .base import BoxNode, decode_header
from .errors import MalformedBoxError
from .source import RandomAccessSource

logger = logging.getLogger(__name__)

# boxes whose whole payload is a sequence of child boxes
CONTAINER_BOXES = frozenset({
    b'moov', b'trak', b'edts', b'mdia', b'minf', b'dinf', b'stbl',
    b'mvex', b'moof', b'traf', b'mfra', b'udta',
})


def walk_boxes(source: RandomAccessSource, start: int = 0, length: int | None = None) -> Iterator[BoxNode]:
    """
    Yields the sibling boxes that tile ``[start, start + length)`` in disk order.

    ``length`` defaults to the rest of the source. Every call starts over, so
    the same range can be walked any number of times. A header that cannot
    be read, or a box running past the end of the range, ends the walk with
    an exception since later offsets cannot be trusted.
    """
    if length is None:
        length = source.total_length() - start
    if start < 0 or length < 0:
        raise ValueError(f"invalid range start={start} length={length}")

    end = start + length
    offset = start
    while offset < end:
        size, box_type = decode_header(source, offset)
        if offset + size > end:
            raise MalformedBoxError(
                offset, size, f"box overruns its enclosing range ending at {end}"
            )
        node = BoxNode(box_type, offset, size, source)
        logger.debug("box %r at offset %d, size %d", node.name, offset, size)
        yield node
        offset += size


def find_box(source: RandomAccessSource, path: Sequence[bytes],
             start: int = 0, length: int | None = None) -> BoxNode | None:
    """
    Follows ``path`` (e.g. ``[b'moov', b'mvhd']``) down through nested boxes.

    Every step but the last must name a container box listed in
    ``CONTAINER_BOXES``; a path that steps through anything else finds
    nothing. Returns the first match, or None.
    """
    if not path:
        return None
    head, rest = path[0], path[1:]
    for node in walk_boxes(source, start, length):
        if node.type != head:
            continue
        if not rest:
            return node
        if node.type not in CONTAINER_BOXES:
            return None
        return find_box(source, rest, node.payload_start, node.payload_size)
    return None
