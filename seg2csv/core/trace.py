# seg2csv/core/trace.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import numpy as np

from .exceptions import InvalidHeader
from .metadata import TraceDescriptor


@dataclass(slots=True)
class Trace:
    """One recorded channel: descriptor + samples decoded on first access and cached."""

    index: int
    descriptor: TraceDescriptor
    loader: Callable[[], np.ndarray] = field(repr=False)

    _samples: np.ndarray | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if not callable(self.loader):
            raise InvalidHeader("Trace.loader must be callable.")
        if not isinstance(self.descriptor, TraceDescriptor):
            raise InvalidHeader("Trace.descriptor must be a TraceDescriptor instance.")

    def _ensure_loaded(self) -> np.ndarray:
        if self._samples is not None:
            return self._samples

        v = np.asarray(self.loader())
        if v.ndim != 1:
            raise InvalidHeader(f"samples must be 1D, got shape {v.shape}")
        if v.size != self.descriptor.sample_count:
            raise InvalidHeader(
                f"channel {self.index}: expected {self.descriptor.sample_count} samples, "
                f"loader returned {v.size}"
            )

        v.flags.writeable = False
        self._samples = v
        return v

    @property
    def name(self) -> str:
        return f"CH{self.index + 1}"

    @property
    def samples(self) -> np.ndarray:
        return self._ensure_loaded()

    @property
    def is_loaded(self) -> bool:
        return self._samples is not None

    @property
    def n(self) -> int:
        # Known from the descriptor, no need to decode the payload.
        return self.descriptor.sample_count

    @property
    def data_format(self) -> int:
        return self.descriptor.data_format

    @property
    def free_strings(self) -> tuple[str, ...]:
        return self.descriptor.free_strings

    def time(self, sample_interval: float) -> np.ndarray:
        return np.arange(self.n, dtype=float) * sample_interval

    def to_numpy(self, *, copy: bool = False) -> np.ndarray:
        if copy:
            return self.samples.copy()
        return self.samples
