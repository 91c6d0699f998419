# seg2csv/io/seg2_reader.py
from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from seg2csv.core import (
    AcquisitionParams,
    DecodedFile,
    DecodeError,
    FileHeader,
    InvalidFileMagic,
    InvalidHeader,
    InvalidTraceDescriptorMagic,
    Trace,
    TraceDescriptor,
    UnsupportedDataFormat,
)
from seg2csv.core import layout
from seg2csv.io.byte_reader import ByteReader

logger = logging.getLogger(__name__)


def parse_free_strings(raw: bytes) -> list[str]:
    """Split a free-format region into its null-terminated strings.

    Runs of one character or less are padding (or the low byte of a
    string-length prefix) and are dropped. A trailing run without a null
    terminator is dropped as well.

    Examples
    --------
    b"\\x16\\x00ACQ 1\\x00\\x00" -> ["ACQ 1"]
    """
    result: list[str] = []
    *terminated, _unterminated = raw.split(b"\x00")
    for run in terminated:
        if len(run) > 1:
            result.append(run.decode("latin-1"))
    return result


def find_sample_interval(free_strings: list[str] | tuple[str, ...]) -> float | None:
    """Return the value following a SAMPLE_INTERVAL token, if any.

    When several strings carry the token, the last parsable one wins.
    """
    interval: float | None = None
    for fs in free_strings:
        if layout.SAMPLE_INTERVAL_KEY not in fs:
            continue
        parts = fs.split()
        try:
            idx = parts.index(layout.SAMPLE_INTERVAL_KEY)
        except ValueError:
            continue
        if idx + 1 >= len(parts):
            continue
        try:
            interval = float(parts[idx + 1])
        except ValueError:
            logger.warning("Unparsable %s value %r", layout.SAMPLE_INTERVAL_KEY, parts[idx + 1])
    return interval


def acquisition_params(free_strings: list[str] | tuple[str, ...]) -> AcquisitionParams:
    interval = find_sample_interval(free_strings)
    if interval is None:
        logger.warning("No %s in free-format strings; frequency and interval left at 0",
                       layout.SAMPLE_INTERVAL_KEY)
        return AcquisitionParams()
    try:
        return AcquisitionParams.from_interval(interval)
    except InvalidHeader as e:
        logger.warning("Ignoring %s: %s", layout.SAMPLE_INTERVAL_KEY, e)
        return AcquisitionParams()


# ----------------------------------------------------------------------
# Block decoders
# ----------------------------------------------------------------------
def read_file_header(reader: ByteReader) -> FileHeader:
    magic = reader.u16(layout.FILE_MAGIC_OFFSET)
    if magic != layout.FILE_DESCRIPTOR_MAGIC:
        raise InvalidFileMagic(magic)

    revision = reader.u16(layout.FILE_REVISION_OFFSET)
    m = reader.u16(layout.FILE_POINTER_BLOCK_SIZE_OFFSET)
    n = reader.u16(layout.FILE_TRACE_COUNT_OFFSET)

    pointers = [
        reader.u32(layout.FILE_POINTERS_OFFSET + i * layout.TRACE_POINTER_WIDTH)
        for i in range(n)
    ]
    logger.debug("SEG2 revision %d, M=%d, N=%d", revision, m, n)
    return FileHeader(revision=revision, pointer_block_size=m, trace_count=n, pointers=pointers)


def read_trace_descriptor(reader: ByteReader, pointer: int, channel: int) -> TraceDescriptor:
    magic = reader.u16(pointer + layout.TRACE_MAGIC_OFFSET)
    if magic != layout.TRACE_DESCRIPTOR_MAGIC:
        raise InvalidTraceDescriptorMagic(channel, pointer, magic)

    x = reader.u16(pointer + layout.TRACE_BLOCK_SIZE_OFFSET)
    y = reader.u32(pointer + layout.TRACE_DATA_SIZE_OFFSET)
    ns = reader.u32(pointer + layout.TRACE_SAMPLE_COUNT_OFFSET)
    # Only the first byte of the 4-byte format slot is meaningful.
    df = reader.u8(pointer + layout.TRACE_FORMAT_OFFSET)

    strings_start = pointer + layout.TRACE_STRINGS_OFFSET
    strings_end = pointer + x
    if strings_end > strings_start:
        free_strings = parse_free_strings(reader.bytes_at(strings_start, strings_end - strings_start))
    else:
        free_strings = []

    descriptor = TraceDescriptor(
        pointer=pointer,
        block_size=x,
        data_size=y,
        sample_count=ns,
        data_format=df,
        free_strings=free_strings,
    )

    if df not in layout.SAMPLE_DTYPES:
        raise UnsupportedDataFormat(channel, df)
    # Validate the payload range now so lazy sample access cannot fail later.
    reader.check(descriptor.payload_offset, descriptor.payload_size)

    logger.debug(
        "channel %d: pointer=%d X=%d Y=%d NS=%d format=0x%02X strings=%d",
        channel, pointer, x, y, ns, df, len(free_strings),
    )
    return descriptor


def read_samples(reader: ByteReader, descriptor: TraceDescriptor) -> np.ndarray:
    """Decode the sample payload of one trace (pure function of buffer + descriptor).

    `descriptor` comes from read_trace_descriptor, which already rejected
    unsupported format codes.
    """
    dtype = layout.SAMPLE_DTYPES[descriptor.data_format]
    return reader.array(descriptor.payload_offset, dtype, descriptor.sample_count)


def _make_loader(reader: ByteReader, descriptor: TraceDescriptor) -> Callable[[], np.ndarray]:
    def _loader() -> np.ndarray:
        return read_samples(reader, descriptor)

    return _loader


# ----------------------------------------------------------------------
# Entry point
# ----------------------------------------------------------------------
def decode(buffer: bytes | bytearray | memoryview, filename: str | None = None) -> DecodedFile:
    """Decode a full SEG2 file held in memory.

    Parameters
    ----------
    buffer:
        Complete file contents. Mutable buffers are copied first.
    filename:
        Optional source name, attached to the result and to any
        DecodeError raised.

    Raises
    ------
    InvalidFileMagic, InvalidTraceDescriptorMagic, OutOfBounds,
    UnsupportedDataFormat
        Any failure aborts the whole decode.
    """
    try:
        reader = ByteReader(buffer)
        header = read_file_header(reader)

        traces: list[Trace] = []
        for channel, pointer in enumerate(header.pointers):
            descriptor = read_trace_descriptor(reader, pointer, channel)
            traces.append(
                Trace(index=channel, descriptor=descriptor, loader=_make_loader(reader, descriptor))
            )
    except DecodeError as e:
        if e.filename is None:
            e.filename = filename
        logger.debug("Decode failed: %s", e)
        raise

    free_strings = traces[0].free_strings if traces else ()
    params = acquisition_params(free_strings) if traces else AcquisitionParams()

    decoded = DecodedFile(
        header=header,
        params=params,
        traces=traces,
        free_strings=free_strings,
        filename=filename,
    )
    logger.debug(
        "Decoded %s: %d channel(s), %d Hz, dt=%g s",
        filename or "<buffer>", decoded.channel_count, params.frequency, params.sample_interval,
    )
    return decoded
