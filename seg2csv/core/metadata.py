# seg2csv/core/metadata.py
from __future__ import annotations

import math
from dataclasses import dataclass, field

from .exceptions import InvalidHeader
from .layout import SAMPLE_DTYPES


@dataclass(frozen=True, slots=True)
class FileHeader:
    """
    File descriptor block of a SEG2 file.

    - revision: format revision number
    - pointer_block_size: declared size M of the trace-pointer sub-block
    - trace_count: number of traces N
    - pointers: absolute byte offsets of the N trace descriptors
    """
    revision: int
    pointer_block_size: int
    trace_count: int
    pointers: tuple[int, ...] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pointers", tuple(self.pointers))
        if len(self.pointers) != self.trace_count:
            raise InvalidHeader(
                f"FileHeader declares {self.trace_count} traces "
                f"but has {len(self.pointers)} pointers."
            )


@dataclass(frozen=True, slots=True)
class TraceDescriptor:
    """
    Trace descriptor block of one channel.

    The sample payload starts at `pointer + block_size`, whatever the
    free-format strings region actually contained.
    """
    pointer: int
    block_size: int
    data_size: int
    sample_count: int
    data_format: int
    free_strings: tuple[str, ...] = field(default=(), repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "free_strings", tuple(self.free_strings))
        if self.block_size < 0 or self.sample_count < 0:
            raise InvalidHeader("TraceDescriptor sizes must be non-negative.")

    @property
    def payload_offset(self) -> int:
        return self.pointer + self.block_size

    @property
    def sample_width(self) -> int | None:
        dtype = SAMPLE_DTYPES.get(self.data_format)
        return None if dtype is None else dtype.itemsize

    @property
    def payload_size(self) -> int | None:
        width = self.sample_width
        return None if width is None else width * self.sample_count


@dataclass(frozen=True, slots=True)
class AcquisitionParams:
    """
    Acquisition settings derived from the first channel's free-format strings.

    Both values are 0 when no usable SAMPLE_INTERVAL was recorded.
    """
    frequency: int = 0
    sample_interval: float = 0.0

    @classmethod
    def from_interval(cls, interval: float) -> "AcquisitionParams":
        if not math.isfinite(interval) or interval <= 0:
            raise InvalidHeader(f"Sample interval must be a positive number, got {interval!r}.")
        freq = 1.0 / interval
        if not math.isfinite(freq):
            raise InvalidHeader(f"Sample interval {interval!r} gives a non-finite frequency.")
        # round half up
        return cls(frequency=int(math.floor(freq + 0.5)), sample_interval=interval)

    @property
    def is_known(self) -> bool:
        return self.sample_interval > 0
