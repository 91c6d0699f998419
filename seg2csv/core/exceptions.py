# seg2csv/core/exceptions.py
from __future__ import annotations


class Seg2Error(Exception):
    """Base error for all seg2csv exceptions."""


# ---- Decode errors (fatal to the whole file) ----
class DecodeError(Seg2Error):
    """Raised when a SEG2 buffer cannot be decoded.

    `filename` is attached by the decoder once the failure reaches the
    file boundary, so the message names the file that failed.
    """

    def __init__(self, message: str, *, filename: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.filename = filename

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}: {self.message}"
        return self.message


class InvalidFileMagic(DecodeError):
    """Raised when bytes 0-1 are not the file descriptor signature."""

    def __init__(self, found: int, *, filename: str | None = None) -> None:
        super().__init__(
            f"Invalid SEG2 file: file descriptor not found (magic 0x{found:04X}).",
            filename=filename,
        )
        self.found = found


class InvalidTraceDescriptorMagic(DecodeError):
    """Raised when a trace descriptor block does not start with its signature."""

    def __init__(
        self, channel: int, pointer: int, found: int, *, filename: str | None = None
    ) -> None:
        super().__init__(
            f"Invalid trace descriptor for channel {channel} at offset {pointer} "
            f"(magic 0x{found:04X}).",
            filename=filename,
        )
        self.channel = channel
        self.pointer = pointer
        self.found = found


class OutOfBounds(DecodeError):
    """Raised when a read would go past the end of the buffer."""

    def __init__(
        self, offset: int, width: int, length: int, *, filename: str | None = None
    ) -> None:
        super().__init__(
            f"Read of {width} byte(s) at offset {offset} exceeds buffer length {length}.",
            filename=filename,
        )
        self.offset = offset
        self.width = width
        self.length = length


class UnsupportedDataFormat(DecodeError):
    """Raised when a trace uses a data-format code this decoder does not handle."""

    def __init__(self, channel: int, code: int, *, filename: str | None = None) -> None:
        super().__init__(
            f"Unsupported data format code 0x{code:02X} for channel {channel}.",
            filename=filename,
        )
        self.channel = channel
        self.code = code


# ---- Model construction errors ----
class InvalidHeader(Seg2Error):
    """Raised when header / descriptor objects are built with inconsistent fields."""


# ---- Lookup errors (also behave like KeyError for dict-like APIs) ----
class ChannelNotFound(Seg2Error, KeyError):
    """Raised when a requested channel index is not present."""
