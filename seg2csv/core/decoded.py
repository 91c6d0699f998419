# seg2csv/core/decoded.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

import numpy as np

from .exceptions import ChannelNotFound, InvalidHeader
from .metadata import AcquisitionParams, FileHeader
from .trace import Trace


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Summary of one source file, valid or not."""
    filename: str
    channels: int = 0
    frequency: int = 0
    sample_interval: float = 0.0
    sample_count: int = 0
    free_strings: tuple[str, ...] = field(default=(), repr=False)
    valid: bool = True
    error: str | None = None

    @classmethod
    def failed(cls, filename: str, error: str) -> "FileInfo":
        return cls(filename=filename, valid=False, error=error)


@dataclass(frozen=True, slots=True)
class DecodedFile:
    """
    Result of decoding one SEG2 buffer.

    Design goals:
    - list-like access: decoded[0] is the first Trace
    - all-or-nothing: only built once every trace descriptor decoded cleanly
    - pure: samples are decoded per channel on demand and cached on the Trace
    """
    header: FileHeader
    params: AcquisitionParams = field(default_factory=AcquisitionParams)
    traces: Sequence[Trace] = field(default=(), repr=False)
    free_strings: tuple[str, ...] = field(default=(), repr=False)
    filename: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.header, FileHeader):
            raise InvalidHeader("DecodedFile.header must be a FileHeader instance.")
        if not isinstance(self.params, AcquisitionParams):
            raise InvalidHeader("DecodedFile.params must be an AcquisitionParams instance.")

        traces = tuple(self.traces)
        for i, tr in enumerate(traces):
            if not isinstance(tr, Trace):
                raise InvalidHeader("DecodedFile.traces values must be Trace instances.")
            if tr.index != i:
                raise InvalidHeader(f"Trace index mismatch: position {i} but Trace.index is {tr.index}.")
        if len(traces) != self.header.trace_count:
            raise InvalidHeader(
                f"Header declares {self.header.trace_count} traces, got {len(traces)}."
            )

        object.__setattr__(self, "traces", traces)
        object.__setattr__(self, "free_strings", tuple(self.free_strings))

    # ---- list-like API ----
    def __len__(self) -> int:
        return len(self.traces)

    def __iter__(self) -> Iterator[Trace]:
        return iter(self.traces)

    def __getitem__(self, channel: int) -> Trace:
        if not isinstance(channel, int) or not 0 <= channel < len(self.traces):
            raise ChannelNotFound(channel)
        return self.traces[channel]

    # ---- derived values ----
    @property
    def channel_count(self) -> int:
        return len(self.traces)

    @property
    def frequency(self) -> int:
        return self.params.frequency

    @property
    def sample_interval(self) -> float:
        return self.params.sample_interval

    @property
    def sample_count(self) -> int:
        """Samples in the first channel (0 for an empty file)."""
        return self.traces[0].n if self.traces else 0

    @property
    def max_sample_count(self) -> int:
        return max((tr.n for tr in self.traces), default=0)

    @property
    def is_ragged(self) -> bool:
        return len({tr.n for tr in self.traces}) > 1

    def channel_data(self, channel: int) -> np.ndarray:
        return self[channel].samples

    def all_channels_data(self) -> list[np.ndarray]:
        return [tr.samples for tr in self.traces]

    def info(self) -> FileInfo:
        return FileInfo(
            filename=self.filename or "",
            channels=self.channel_count,
            frequency=self.frequency,
            sample_interval=self.sample_interval,
            sample_count=self.sample_count,
            free_strings=self.free_strings,
        )
