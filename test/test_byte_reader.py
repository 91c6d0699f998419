# test/test_byte_reader.py
import struct

import numpy as np
import pytest

from seg2csv.core import OutOfBounds
from seg2csv.io.byte_reader import ByteReader


def test_primitive_reads_little_endian():
    buf = struct.pack("<HhiIfd", 0x3A55, -2, -70000, 0xDEADBEEF, 1.5, -0.25)
    r = ByteReader(buf)

    assert r.u16(0) == 0x3A55
    assert r.i16(2) == -2
    assert r.i32(4) == -70000
    assert r.u32(8) == 0xDEADBEEF
    assert r.f32(12) == 1.5
    assert r.f64(16) == -0.25
    assert r.u8(0) == 0x55


def test_reads_do_not_move_any_cursor():
    r = ByteReader(b"\x01\x00\x02\x00")
    assert r.u16(0) == 1
    assert r.u16(0) == 1
    assert r.u16(2) == 2


def test_int16_pattern_01_00_is_one():
    assert ByteReader(b"\x01\x00").i16(0) == 1


@pytest.mark.parametrize(
    "method, offset",
    [("u16", 3), ("i16", 3), ("i32", 1), ("u32", 1), ("f32", 2), ("f64", 0), ("u8", 4)],
)
def test_out_of_bounds_raises(method, offset):
    r = ByteReader(b"\x00" * 4)
    with pytest.raises(OutOfBounds):
        getattr(r, method)(offset)


def test_negative_offset_is_out_of_bounds():
    with pytest.raises(OutOfBounds):
        ByteReader(b"\x00" * 4).u16(-1)


def test_read_exactly_at_end_is_allowed():
    r = ByteReader(b"\x00\x00\x07\x00")
    assert r.u16(2) == 7


def test_array_reads_native_copy():
    buf = struct.pack("<3f", 1.0, 2.5, -3.0)
    arr = ByteReader(buf).array(0, np.dtype("<f4"), 3)
    assert arr.dtype == np.float32
    assert arr.tolist() == [1.0, 2.5, -3.0]
    assert arr.flags.writeable


def test_array_bounds_and_empty():
    r = ByteReader(b"\x00" * 6)
    with pytest.raises(OutOfBounds):
        r.array(0, np.dtype("<i4"), 2)
    assert r.array(6, np.dtype("<i2"), 0).size == 0


def test_bytearray_is_snapshotted():
    data = bytearray(b"\x01\x00")
    r = ByteReader(data)
    data[0] = 9
    assert r.u16(0) == 1


def test_rejects_non_bytes():
    with pytest.raises(TypeError):
        ByteReader("not bytes")  # type: ignore[arg-type]
