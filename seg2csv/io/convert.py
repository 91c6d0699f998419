# seg2csv/io/convert.py
from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from seg2csv.core import DecodedFile, FileInfo, Seg2Error
from seg2csv.io.csv_writer import ExportOptions, render
from seg2csv.io.seg2_reader import decode

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Outcome of a batch conversion, one entry per input file."""

    succeeded: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


_EXT_RE = re.compile(r"\.[^.]+$")


def csv_filename(name: str) -> str:
    """Replace the final extension with `.csv`.

    Names without an extension get `.csv` appended (trailing dots dropped).

    Examples
    --------
    "shot_01.sg2"  -> "shot_01.csv"
    "a.b.dat"      -> "a.b.csv"
    ".hidden"      -> ".csv"
    "noext"        -> "noext.csv"
    "a."           -> "a.csv"
    """
    base = Path(name).name
    if _EXT_RE.search(base):
        return _EXT_RE.sub(".csv", base)
    return f"{base.rstrip('.')}.csv"


def load_seg2(path: str | Path) -> DecodedFile:
    path = Path(path)
    buffer = path.read_bytes()
    return decode(buffer, filename=path.name)


def file_info(path: str | Path) -> FileInfo:
    """Summarize a file; decode failures are reported in the result, not raised."""
    path = Path(path)
    try:
        return load_seg2(path).info()
    except (Seg2Error, OSError) as e:
        logger.warning("Cannot read %s: %s", path, e)
        return FileInfo.failed(path.name, str(e))


def convert_file(
    path: str | Path,
    out_dir: str | Path | None = None,
    options: ExportOptions | None = None,
) -> Path:
    """Decode `path` and write `<stem>.csv` to `out_dir` (default: next to the source)."""
    path = Path(path)
    target_dir = Path(out_dir) if out_dir is not None else path.parent

    decoded = load_seg2(path)
    text = render(decoded, options)

    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / csv_filename(path.name)
    target.write_text(text, encoding="utf-8")
    logger.info("Wrote %s (%d channel(s), %d sample(s))",
                target, decoded.channel_count, decoded.max_sample_count)
    return target


def convert_batch(
    paths: Iterable[str | Path],
    out_dir: str | Path | None = None,
    options: ExportOptions | None = None,
    *,
    max_workers: int = 1,
) -> BatchResult:
    """
    Convert several files; each file succeeds or fails on its own.

    max_workers:
      - 1  : convert sequentially
      - >1 : convert on a thread pool (result order still follows `paths`)
    """
    paths = [Path(p) for p in paths]
    result = BatchResult()

    def _one(p: Path) -> tuple[Path, Path | None, str | None]:
        try:
            return p, convert_file(p, out_dir, options), None
        except (Seg2Error, OSError) as e:
            logger.error("Conversion failed for %s: %s", p, e)
            return p, None, str(e)

    if max_workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            outcomes = list(pool.map(_one, paths))
    else:
        outcomes = [_one(p) for p in paths]

    for src, target, error in outcomes:
        if target is not None:
            result.succeeded.append(target)
        else:
            result.failed.append((src, error or "Unknown error"))

    logger.info("Batch done: %d converted, %d failed", len(result.succeeded), len(result.failed))
    return result
