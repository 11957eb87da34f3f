"""Read the box structure of MP4 (ISO base media) files."""

from importlib import metadata

from .base import BOX_HEADER_SIZE, BoxNode, decode_header, encode_header
from .errors import MalformedBoxError, Mp4StructError, ShortReadError, TruncatedPayloadError
from .fixed_point import Fixed16, Fixed32, decode_fixed16, decode_fixed32, encode_fixed16, encode_fixed32
from .mp4_file import MP4File, Mp4Document, parse_document
from .mp4_types import BoxType, FileTypeBox, MovieBox, MovieHeaderBox, decode_box
from .parser import find_box, walk_boxes
from .source import BytesSource, FileSource, RandomAccessSource

try:  # pragma: no cover - best effort metadata
    __version__ = metadata.version("pymp4-struct")
except metadata.PackageNotFoundError:  # pragma: no cover - local checkout
    __version__ = "0.0.0"

__all__ = [
    "BOX_HEADER_SIZE",
    "BoxNode",
    "BoxType",
    "BytesSource",
    "FileSource",
    "FileTypeBox",
    "Fixed16",
    "Fixed32",
    "MP4File",
    "MalformedBoxError",
    "MovieBox",
    "MovieHeaderBox",
    "Mp4Document",
    "Mp4StructError",
    "RandomAccessSource",
    "ShortReadError",
    "TruncatedPayloadError",
    "decode_box",
    "decode_fixed16",
    "decode_fixed32",
    "decode_header",
    "encode_fixed16",
    "encode_fixed32",
    "encode_header",
    "find_box",
    "parse_document",
    "walk_boxes",
    "__version__",
]
