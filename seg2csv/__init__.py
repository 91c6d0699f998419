# seg2csv/__init__.py
"""
seg2csv: decode SEG2 seismic recordings and export them as CSV.

    >>> from seg2csv import decode, render
    >>> text = render(decode(open("shot.sg2", "rb").read()))
"""

from seg2csv.core import (
    DecodedFile,
    FileInfo,
    Trace,
    Seg2Error,
    DecodeError,
    InvalidFileMagic,
    InvalidTraceDescriptorMagic,
    OutOfBounds,
    UnsupportedDataFormat,
    ChannelNotFound,
)
from seg2csv.io import (
    ExportOptions,
    decode,
    render,
    load_seg2,
    file_info,
    convert_file,
    convert_batch,
)

__version__ = "0.1.0"

__all__ = [
    "DecodedFile",
    "FileInfo",
    "Trace",
    "Seg2Error",
    "DecodeError",
    "InvalidFileMagic",
    "InvalidTraceDescriptorMagic",
    "OutOfBounds",
    "UnsupportedDataFormat",
    "ChannelNotFound",
    "ExportOptions",
    "decode",
    "render",
    "load_seg2",
    "file_info",
    "convert_file",
    "convert_batch",
]
