# seg2csv/cli.py
from __future__ import annotations

import argparse
import logging
import sys

from seg2csv.io.convert import convert_batch, file_info
from seg2csv.io.csv_writer import ExportOptions

logger = logging.getLogger(__name__)


def setup_parser(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    parser.add_argument("files", nargs="+", help="SEG2 file(s) to convert.")
    parser.add_argument(
        "-o", "--out-dir", default=None,
        help="Output directory (default: next to each source file).",
    )
    parser.add_argument(
        "--no-time", action="store_true",
        help="Do not write the Time(s) column.",
    )
    parser.add_argument(
        "-j", "--jobs", type=int, default=1,
        help="Number of files converted in parallel.",
    )
    parser.add_argument(
        "--info", action="store_true",
        help="Only print a summary of each file.",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    return parser


def _print_info(paths: list[str]) -> int:
    status = 0
    for path in paths:
        info = file_info(path)
        if not info.valid:
            print(f"{info.filename}: INVALID ({info.error})")
            status = 1
            continue
        print(
            f"{info.filename}: {info.channels} channel(s), {info.frequency} Hz, "
            f"dt={info.sample_interval:g} s, {info.sample_count} sample(s)"
        )
    return status


def run(args: argparse.Namespace) -> int:
    if args.info:
        return _print_info(args.files)

    options = ExportOptions(include_time_column=not args.no_time)
    result = convert_batch(args.files, args.out_dir, options, max_workers=max(args.jobs, 1))

    for target in result.succeeded:
        print(target)
    for source, error in result.failed:
        print(f"FAILED {source}: {error}", file=sys.stderr)
    return 0 if result.ok else 1


def main(argv: list[str] | None = None) -> int:
    parser = setup_parser(
        argparse.ArgumentParser(prog="seg2csv", description="Convert SEG2 files to CSV.")
    )
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    return run(args)


if __name__ == "__main__":
    sys.exit(main())
