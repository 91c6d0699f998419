# seg2csv/core/__init__.py
"""
Core domain objects for seg2csv.

This module defines the decoded, format-level data model:
- FileHeader: file descriptor block + trace pointers
- TraceDescriptor: per-channel block header + free-format strings
- AcquisitionParams: sampling frequency / sample interval
- Trace: one channel with lazily decoded samples
- DecodedFile: all traces of one SEG2 file

The core layer performs no file-system I/O.
"""

from .metadata import FileHeader, TraceDescriptor, AcquisitionParams
from .trace import Trace
from .decoded import DecodedFile, FileInfo
from .exceptions import (
    Seg2Error,
    DecodeError,
    InvalidFileMagic,
    InvalidTraceDescriptorMagic,
    OutOfBounds,
    UnsupportedDataFormat,
    InvalidHeader,
    ChannelNotFound,
)


__all__ = [
    # headers
    "FileHeader",
    "TraceDescriptor",
    "AcquisitionParams",

    # domain objects
    "Trace",
    "DecodedFile",
    "FileInfo",

    # exceptions
    "Seg2Error",
    "DecodeError",
    "InvalidFileMagic",
    "InvalidTraceDescriptorMagic",
    "OutOfBounds",
    "UnsupportedDataFormat",
    "InvalidHeader",
    "ChannelNotFound",
]
