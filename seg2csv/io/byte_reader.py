# seg2csv/io/byte_reader.py
"""
Little-endian primitive reads at explicit offsets.

ByteReader is a view: it never advances a cursor and never mutates
the underlying buffer (mutable inputs are snapshotted into bytes).
Every read is bounds-checked.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass, field

import numpy as np

from seg2csv.core.exceptions import OutOfBounds


_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_I16 = struct.Struct("<h")
_I32 = struct.Struct("<i")
_U32 = struct.Struct("<I")
_F32 = struct.Struct("<f")
_F64 = struct.Struct("<d")


@dataclass(frozen=True, slots=True)
class ByteReader:
    buffer: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.buffer, (bytearray, memoryview)):
            # later writes to the caller's buffer must not show through
            object.__setattr__(self, "buffer", bytes(self.buffer))
        elif not isinstance(self.buffer, bytes):
            raise TypeError(
                f"ByteReader expects a bytes-like buffer, got {type(self.buffer).__name__}"
            )

    def __len__(self) -> int:
        return len(self.buffer)

    def check(self, offset: int, width: int) -> None:
        if offset < 0 or width < 0 or offset + width > len(self.buffer):
            raise OutOfBounds(offset, width, len(self.buffer))

    def _unpack(self, fmt: struct.Struct, offset: int):
        self.check(offset, fmt.size)
        return fmt.unpack_from(self.buffer, offset)[0]

    def u8(self, offset: int) -> int:
        return self._unpack(_U8, offset)

    def u16(self, offset: int) -> int:
        return self._unpack(_U16, offset)

    def i16(self, offset: int) -> int:
        return self._unpack(_I16, offset)

    def i32(self, offset: int) -> int:
        return self._unpack(_I32, offset)

    def u32(self, offset: int) -> int:
        return self._unpack(_U32, offset)

    def f32(self, offset: int) -> float:
        return self._unpack(_F32, offset)

    def f64(self, offset: int) -> float:
        return self._unpack(_F64, offset)

    def bytes_at(self, offset: int, size: int) -> bytes:
        self.check(offset, size)
        return self.buffer[offset:offset + size]

    def array(self, offset: int, dtype: np.dtype, count: int) -> np.ndarray:
        """Read `count` items of a little-endian `dtype`, returned in native byte order."""
        dtype = np.dtype(dtype)
        self.check(offset, dtype.itemsize * count)
        if count == 0:
            return np.empty(0, dtype=dtype.newbyteorder("="))
        raw = np.frombuffer(self.buffer, dtype=dtype, count=count, offset=offset)
        return raw.astype(dtype.newbyteorder("="), copy=True)
