# seg2csv/core/layout.py
"""
Byte layout of the SEG2 container.

Every offset used by the decoder lives here. File-level offsets are
absolute; trace descriptor offsets are relative to the trace pointer.
"""
from __future__ import annotations

import numpy as np


# ---- File descriptor block ----
FILE_DESCRIPTOR_MAGIC = 0x3A55

FILE_MAGIC_OFFSET = 0x00
FILE_REVISION_OFFSET = 0x02
FILE_POINTER_BLOCK_SIZE_OFFSET = 0x04   # M
FILE_TRACE_COUNT_OFFSET = 0x06          # N
FILE_RESERVED_SIZE = 0x18               # 0x08..0x1F
FILE_POINTERS_OFFSET = FILE_TRACE_COUNT_OFFSET + 2 + FILE_RESERVED_SIZE
TRACE_POINTER_WIDTH = 4


# ---- Trace descriptor block (relative to the trace pointer) ----
TRACE_DESCRIPTOR_MAGIC = 0x4422

TRACE_MAGIC_OFFSET = 0x00
TRACE_BLOCK_SIZE_OFFSET = 0x02          # X
TRACE_DATA_SIZE_OFFSET = 0x04           # Y
TRACE_SAMPLE_COUNT_OFFSET = 0x08        # NS
TRACE_FORMAT_OFFSET = 0x0C
TRACE_FORMAT_SLOT_SIZE = 4              # 1 code byte + 3 reserved
TRACE_RESERVED_SIZE = 0x10
TRACE_STRINGS_OFFSET = TRACE_FORMAT_OFFSET + TRACE_FORMAT_SLOT_SIZE + TRACE_RESERVED_SIZE


# ---- Sample formats: code -> little-endian dtype ----
FORMAT_INT16 = 0x01
FORMAT_INT32 = 0x02
FORMAT_FLOAT32 = 0x04
FORMAT_FLOAT64 = 0x05

SAMPLE_DTYPES: dict[int, np.dtype] = {
    FORMAT_INT16: np.dtype("<i2"),
    FORMAT_INT32: np.dtype("<i4"),
    FORMAT_FLOAT32: np.dtype("<f4"),
    FORMAT_FLOAT64: np.dtype("<f8"),
}


# ---- Free-format keys ----
SAMPLE_INTERVAL_KEY = "SAMPLE_INTERVAL"
