# seg2csv/io/__init__.py
"""
Binary decoding, CSV rendering and file orchestration.
"""

from .byte_reader import ByteReader
from .seg2_reader import decode, parse_free_strings, find_sample_interval
from .csv_writer import ExportOptions, render
from .convert import BatchResult, csv_filename, load_seg2, file_info, convert_file, convert_batch


__all__ = [
    "ByteReader",
    "decode",
    "parse_free_strings",
    "find_sample_interval",
    "ExportOptions",
    "render",
    "BatchResult",
    "csv_filename",
    "load_seg2",
    "file_info",
    "convert_file",
    "convert_batch",
]
