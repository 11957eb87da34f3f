# pymp4_struct/mp4_file.py

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from .base import BoxNode
from .mp4_types import TOP_LEVEL_TYPES, FileTypeBox, MovieBox, decode_box
from .parser import walk_boxes
from .source import FileSource, RandomAccessSource

logger = logging.getLogger(__name__)


@dataclass
class Mp4Document:
    """
    Decoded view of an MP4 file.

    ``ftyp`` and ``moov`` are None when the file has no such box; ``boxes``
    lists every top-level box in disk order, decoded or not.
    """
    boxes: list[BoxNode] = field(default_factory=list)
    ftyp: FileTypeBox | None = None
    moov: MovieBox | None = None

    def find_box(self, box_type: bytes) -> BoxNode | None:
        """Returns the first box of ``box_type`` at top level or inside 'moov'."""
        for box in self.boxes:
            if box.type == box_type:
                return box
        if self.moov:
            return self.moov.find_child(box_type)
        return None

    def get_mdat_box(self) -> BoxNode | None:
        for box in self.boxes:
            if box.type == b'mdat':
                return box
        return None


def parse_document(source: RandomAccessSource) -> Mp4Document:
    """
    Walks the whole source and decodes the top-level boxes it knows.

    The first 'ftyp' and the first 'moov' are kept. Errors are not caught:
    a document is either fully decoded or not returned at all.
    """
    document = Mp4Document()
    for box in walk_boxes(source, 0, source.total_length()):
        document.boxes.append(box)
        decoded = decode_box(box, known=TOP_LEVEL_TYPES)
        if isinstance(decoded, FileTypeBox) and document.ftyp is None:
            document.ftyp = decoded
        elif isinstance(decoded, MovieBox) and document.moov is None:
            document.moov = decoded
    logger.debug(
        "parsed %d top-level boxes (ftyp=%s, moov=%s)",
        len(document.boxes), document.ftyp is not None, document.moov is not None,
    )
    return document


class MP4File:
    """
    Opens and parses ``filepath``.

    The file stays open so boxes can read their payloads later; call
    ``close()`` or use the object as a context manager when done.
    """

    def __init__(self, filepath: str | os.PathLike):
        self.filepath = filepath
        self.source = FileSource(filepath)
        try:
            self.document = parse_document(self.source)
        except BaseException:
            self.source.close()
            raise

    def __enter__(self) -> MP4File:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.source.close()

    def __repr__(self) -> str:
        return f"<MP4File {os.fspath(self.filepath)!r} boxes={len(self.document.boxes)}>"

    @property
    def ftyp(self) -> FileTypeBox | None:
        return self.document.ftyp

    @property
    def moov(self) -> MovieBox | None:
        return self.document.moov

    @property
    def boxes(self) -> list[BoxNode]:
        return self.document.boxes
