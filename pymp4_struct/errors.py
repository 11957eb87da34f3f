# pymp4_struct/errors.py

class Mp4StructError(Exception):
    """Base class for every format error raised by pymp4_struct."""


class ShortReadError(Mp4StructError, EOFError):
    """The source holds fewer bytes than a read asked for."""

    def __init__(self, offset: int, requested: int, available: int):
        self.offset = offset
        self.requested = requested
        self.available = available
        super().__init__(
            f"short read at offset {offset}: wanted {requested} bytes, {available} available"
        )


class TruncatedPayloadError(Mp4StructError, ValueError):
    """A box payload is shorter than its decoder needs."""

    def __init__(self, box_type: bytes, required: int, actual: int):
        self.box_type = box_type
        self.required = required
        self.actual = actual
        name = box_type.decode('latin-1')
        super().__init__(
            f"'{name}' payload too short: need {required} bytes, got {actual}"
        )


class MalformedBoxError(Mp4StructError, ValueError):
    """A box header declares a size the walker cannot advance by."""

    def __init__(self, offset: int, size: int, reason: str = ""):
        self.offset = offset
        self.size = size
        message = f"malformed box at offset {offset} (size={size})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
