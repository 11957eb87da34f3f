# pymp4_struct/source.py

import os
import threading
from typing import BinaryIO

from .errors import ShortReadError


class RandomAccessSource:
    """
    Read N bytes at absolute offset O from a byte store of known length.

    Implementations must return exactly ``length`` bytes or raise
    ``ShortReadError``. Both sources shipped here are safe for concurrent
    ``read_at`` calls at independent offsets.
    """

    def total_length(self) -> int:
        raise NotImplementedError

    def read_at(self, offset: int, length: int) -> bytes:
        raise NotImplementedError

    def _check_range(self, offset: int, length: int) -> None:
        if offset < 0 or length < 0:
            raise ValueError(f"offset and length must be non-negative, got {offset}, {length}")
        total = self.total_length()
        if offset + length > total:
            raise ShortReadError(offset, length, max(total - offset, 0))


class BytesSource(RandomAccessSource):
    """In-memory source over an immutable copy of ``data``."""

    def __init__(self, data: bytes | bytearray | memoryview):
        self._data = bytes(data)

    def __repr__(self) -> str:
        return f"<BytesSource length={len(self._data)}>"

    def total_length(self) -> int:
        return len(self._data)

    def read_at(self, offset: int, length: int) -> bytes:
        self._check_range(offset, length)
        return self._data[offset:offset + length]


class FileSource(RandomAccessSource):
    """
    File-backed source.

    Accepts a path or an already open binary file. The length is probed
    once with ``os.fstat`` when the source is created. ``OSError`` from the
    file is passed through untouched.
    """

    def __init__(self, file: str | os.PathLike | BinaryIO):
        if isinstance(file, (str, os.PathLike)):
            self._file = open(file, 'rb')
            self._owns_file = True
        else:
            self._file = file
            self._owns_file = False
        self._lock = threading.Lock()
        try:
            self._length = os.fstat(self._file.fileno()).st_size
        except OSError:
            self.close()
            raise

    def __repr__(self) -> str:
        return f"<FileSource name={getattr(self._file, 'name', None)!r} length={self._length}>"

    def __enter__(self) -> 'FileSource':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_file:
            self._file.close()

    def total_length(self) -> int:
        return self._length

    def read_at(self, offset: int, length: int) -> bytes:
        self._check_range(offset, length)
        # seek + read must not interleave between threads
        with self._lock:
            self._file.seek(offset)
            data = self._file.read(length)
        if len(data) < length:
            # file shrank after the length probe
            raise ShortReadError(offset, length, len(data))
        return data
