"""
Print the file type and movie header fields of an MP4 file.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .errors import Mp4StructError
from .mp4_file import Mp4Document, parse_document
from .source import FileSource

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "PYMP4_STRUCT_LOG_LEVEL"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="inspect-mp4",
        description="Print the 'ftyp' and 'moov/mvhd' fields of an MP4 file.",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to the MP4 file.",
    )
    parser.add_argument(
        "--tree",
        action="store_true",
        help="Also list every top-level box and every 'moov' child.",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"Logging level. Defaults to ${LOG_LEVEL_ENV} or WARNING.",
    )
    return parser


def format_document(document: Mp4Document, tree: bool = False) -> list[str]:
    lines = []
    ftyp = document.ftyp
    if ftyp:
        lines.append(f"ftyp.name: {ftyp.name}")
        lines.append(f"ftyp.major_brand: {ftyp.major_brand}")
        lines.append(f"ftyp.minor_version: {ftyp.minor_version}")
        lines.append(f"ftyp.compatible_brands: {ftyp.compatible_brands}")
    else:
        lines.append("ftyp: not found")

    moov = document.moov
    if moov:
        lines.append(f"moov.name: {moov.name} {moov.size}")
        mvhd = moov.mvhd
        if mvhd:
            lines.append(f"moov.mvhd.name: {mvhd.name}")
            lines.append(f"moov.mvhd.version: {mvhd.version}")
            lines.append(f"moov.mvhd.timescale: {mvhd.timescale}")
            lines.append(f"moov.mvhd.duration: {mvhd.duration}")
            lines.append(f"moov.mvhd.rate: {float(mvhd.rate):g}")
            lines.append(f"moov.mvhd.volume: {mvhd.volume}")
        else:
            lines.append("moov.mvhd: not found")
    else:
        lines.append("moov: not found")

    if tree:
        lines.append("boxes:")
        for box in document.boxes:
            lines.append(f"  {box.name} offset={box.offset} size={box.size}")
            if moov and box.offset == moov.offset:
                for child in moov.children:
                    lines.append(f"    {child.name} offset={child.offset} size={child.size}")
    return lines


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    path = args.path.expanduser()
    try:
        with FileSource(path) as source:
            document = parse_document(source)
    except (OSError, Mp4StructError) as exc:
        print(f"error: {path}: {type(exc).__name__}: {exc}", file=sys.stderr)
        logger.debug("failed to parse %s", path, exc_info=True)
        return 1

    for line in format_document(document, tree=args.tree):
        print(line)
    return 0
