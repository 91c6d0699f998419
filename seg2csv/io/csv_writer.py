# seg2csv/io/csv_writer.py
"""
CSV rendering of decoded SEG2 files.

The layout mimics an oscilloscope export: a commented header with the
acquisition settings and the first free-format strings, one column-header
row, then one row per sample index.
"""
from __future__ import annotations

import math
from decimal import Decimal
from dataclasses import dataclass
from datetime import datetime, timezone

import numpy as np

from seg2csv.core import DecodedFile


@dataclass(frozen=True, slots=True)
class ExportOptions:
    """
    Rendering options.

    - include_time_column: prepend a Time(s) column
    - export_date: timestamp written in the header (None = now, UTC)
    - max_free_strings: how many free-format strings to copy into the header
    """
    include_time_column: bool = True
    export_date: datetime | None = None
    max_free_strings: int = 10


def _shortest_digits(v: float) -> tuple[str, int]:
    """Shortest round-trip digits of abs(v) and the decimal point position n.

    abs(v) == 0.<digits> * 10**n
    """
    _, digits, exp = Decimal(repr(abs(v))).as_tuple()
    digits = list(digits)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exp += 1
    return "".join(map(str, digits)), len(digits) + exp


def format_value(value) -> str:
    """Number text in ECMAScript Number#toString form.

    Shortest round-trip digits, integral floats without `.0`, plain
    notation for 1e-6 <= |v| < 1e21 and `1e-7` / `1.5e+300` otherwise.
    """
    if isinstance(value, (bool, np.bool_)):
        return str(int(value))
    if isinstance(value, (int, np.integer)):
        return str(int(value))

    v = float(value)
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "Infinity" if v > 0 else "-Infinity"
    if v == 0:
        return "0"

    sign = "-" if v < 0 else ""
    digits, n = _shortest_digits(v)
    k = len(digits)

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + text


def _export_date(options: ExportOptions) -> str:
    when = options.export_date or datetime.now(timezone.utc)
    return when.strftime("%Y-%m-%d %H:%M:%S")


def header_lines(decoded: DecodedFile, options: ExportOptions) -> list[str]:
    interval = decoded.sample_interval
    sample_count = decoded.max_sample_count

    lines = [
        "# SEG2 Data Export",
        f"# Export Date: {_export_date(options)}",
        "# Format: SEG2",
        "#",
        "# === Acquisition Settings ===",
        f"# Sampling Frequency: {format_value(decoded.frequency)} Hz",
        f"# Sample Interval: {format_value(interval)} s",
        f"# Number of Samples: {sample_count}",
        f"# Number of Channels: {decoded.channel_count}",
        f"# Record Length: {sample_count * interval:.6f} s",
        "#",
    ]

    free_strings = decoded.free_strings[:max(options.max_free_strings, 0)]
    if free_strings:
        lines.append("# === SEG2 Metadata ===")
        # Embedded line breaks must stay inside the comment block.
        lines.extend(f"# {part}" for fs in free_strings for part in fs.splitlines())
        lines.append("#")

    return lines


def column_headers(decoded: DecodedFile, options: ExportOptions) -> list[str]:
    cols = ["Time(s)"] if options.include_time_column else []
    cols.extend(tr.name for tr in decoded)
    return cols


def data_rows(decoded: DecodedFile, options: ExportOptions) -> list[str]:
    interval = decoded.sample_interval
    # Pre-format each channel once; ragged channels simply run out early.
    columns = [[format_value(v) for v in tr.samples.tolist()] for tr in decoded]

    rows: list[str] = []
    for i in range(decoded.max_sample_count):
        row: list[str] = []
        if options.include_time_column:
            row.append(f"{i * interval:.9f}")
        for col in columns:
            row.append(col[i] if i < len(col) else "")
        rows.append(",".join(row))
    return rows


def render(decoded: DecodedFile, options: ExportOptions | None = None) -> str:
    """Render a decoded file as CSV text (lines joined with "\\n", no trailing newline)."""
    if options is None:
        options = ExportOptions()

    lines = header_lines(decoded, options)
    lines.append(",".join(column_headers(decoded, options)))
    lines.extend(data_rows(decoded, options))
    return "\n".join(lines)
