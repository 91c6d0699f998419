# test/test_lazy_decoding.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from seg2_builder import build_seg2, simple_file
from seg2csv.core import InvalidHeader, Trace, TraceDescriptor
from seg2csv.io.seg2_reader import decode


def _descriptor(ns: int = 3) -> TraceDescriptor:
    return TraceDescriptor(pointer=0, block_size=32, data_size=ns * 2, sample_count=ns, data_format=1)


def test_trace_loads_once_and_caches():
    calls = {"n": 0}

    def loader():
        calls["n"] += 1
        return np.array([1, 2, 3], dtype=np.int16)

    tr = Trace(index=0, descriptor=_descriptor(), loader=loader)

    # n comes from the descriptor: not loaded yet
    assert tr.n == 3
    assert not tr.is_loaded
    assert calls["n"] == 0

    assert tr.samples.tolist() == [1, 2, 3]
    assert calls["n"] == 1

    _ = tr.samples
    _ = tr.to_numpy(copy=True)
    assert calls["n"] == 1
    assert tr.is_loaded


def test_trace_samples_are_read_only_and_copy_is_writable():
    tr = Trace(index=0, descriptor=_descriptor(), loader=lambda: np.zeros(3, dtype=np.int16))
    with pytest.raises(ValueError):
        tr.samples[0] = 5
    out = tr.to_numpy(copy=True)
    out[0] = 5
    assert tr.samples[0] == 0


def test_trace_rejects_loader_length_mismatch():
    tr = Trace(index=0, descriptor=_descriptor(3), loader=lambda: np.zeros(2))
    with pytest.raises(InvalidHeader):
        _ = tr.samples


def test_trace_rejects_non_callable_loader():
    with pytest.raises(InvalidHeader):
        Trace(index=0, descriptor=_descriptor(), loader=None)  # type: ignore[arg-type]


def test_trace_name_and_time_axis():
    tr = Trace(index=4, descriptor=_descriptor(3), loader=lambda: np.zeros(3))
    assert tr.name == "CH5"
    assert np.allclose(tr.time(0.5), [0.0, 0.5, 1.0])


def test_decode_is_idempotent_per_channel():
    buf = build_seg2([
        {"fmt": 0x05, "samples": [0.1, 0.2, 0.3], "strings": ["SAMPLE_INTERVAL 0.002"]},
        {"fmt": 0x04, "samples": [1.25, -7.5]},
    ])
    a = decode(buf)
    b = decode(buf)

    for ch in range(2):
        assert np.array_equal(a[ch].samples, b[ch].samples)
        assert a[ch].samples.dtype == b[ch].samples.dtype


def test_access_order_does_not_matter():
    buf = build_seg2([
        {"fmt": 0x01, "samples": [1, 2, 3], "strings": ["SAMPLE_INTERVAL 0.001"]},
        {"fmt": 0x04, "samples": [0.5, -1.5]},
        {"fmt": 0x05, "samples": [1e-3, 2e-3, 3e-3, 4e-3]},
    ])
    decoded = decode(buf)

    # last channel first, on the same decoded object
    backward = {ch: decoded[ch].samples.tolist() for ch in reversed(range(3))}
    assert all(tr.is_loaded for tr in decoded)
    forward = {ch: decoded[ch].samples.tolist() for ch in range(3)}

    assert backward == forward
    assert forward == {0: [1, 2, 3], 1: [0.5, -1.5], 2: [1e-3, 2e-3, 3e-3, 4e-3]}


def test_channel_decode_does_not_depend_on_other_channels():
    buf = simple_file(n_channels=3, n_samples=5)
    decoded = decode(buf)

    # only the middle channel is touched
    assert decoded[1].samples.tolist() == [100, 101, 102, 103, 104]
    assert [tr.is_loaded for tr in decoded] == [False, True, False]


def test_concurrent_decode_matches_sequential():
    buffers = [
        simple_file(n_channels=4, n_samples=200, fmt=0x02),
        build_seg2([{"fmt": 0x05, "samples": [float(i) / 3 for i in range(300)]}]),
    ]

    def run(buf):
        decoded = decode(buf)
        return [tr.samples.tolist() for tr in decoded], decoded.frequency

    sequential = [run(b) for b in buffers]
    with ThreadPoolExecutor(max_workers=2) as pool:
        concurrent = list(pool.map(run, buffers))

    assert concurrent == sequential


def test_decoded_file_summaries():
    buf = build_seg2([
        {"fmt": 1, "samples": [1, 2, 3], "strings": ["SAMPLE_INTERVAL 0.01"]},
        {"fmt": 1, "samples": [1]},
    ])
    decoded = decode(buf, filename="x.sg2")

    assert decoded.sample_count == 3
    assert decoded.max_sample_count == 3
    assert decoded.is_ragged
    assert [a.tolist() for a in decoded.all_channels_data()] == [[1, 2, 3], [1]]

    info = decoded.info()
    assert info.filename == "x.sg2"
    assert info.channels == 2
    assert info.frequency == 100
    assert info.sample_interval == 0.01
    assert info.sample_count == 3
    assert info.valid and info.error is None
