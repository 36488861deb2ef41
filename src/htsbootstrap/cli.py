"""Command-line entry point.

Usage:
    OUT_DIR=/tmp/build HTSLIB=static htsbootstrap
    htsbootstrap --out-dir /tmp/build --target x86_64-linux-musl
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from htsbootstrap.bootstrap import bootstrap
from htsbootstrap.environment import RawInputs, raw_inputs_from_environ, resolve
from htsbootstrap.errors import BootstrapError
from htsbootstrap.models import MAKE_JOBS
from htsbootstrap.observability import StructuredLogger
from htsbootstrap.report import BuildReport
from htsbootstrap.runner import CommandRunner, SubprocessRunner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="htsbootstrap",
        description="Fetch and build htslib, cross-building zlib/bzip2 for musl targets.",
    )
    parser.add_argument("--out-dir", help="Staging root (default: $OUT_DIR)")
    parser.add_argument("--htslib-version", help="htslib tag (default: $HTSLIB_VERSION or 1.9)")
    parser.add_argument("--target", help="Target triple (default: $TARGET)")
    parser.add_argument(
        "--mode",
        help="Library mode: static or shared (default: $HTSLIB or shared)",
    )
    parser.add_argument(
        "--jobs",
        type=int,
        default=MAKE_JOBS,
        help=f"Parallel make jobs (default: {MAKE_JOBS})",
    )
    parser.add_argument("--log-file", type=Path, help="Write structured logs as JSON lines")
    parser.add_argument("--report", type=Path, help="Write a run report (.json or .cbor)")
    parser.add_argument("--quiet", action="store_true", help="Do not echo progress to stderr")
    return parser


def raw_inputs_from_args(args: argparse.Namespace, base: RawInputs) -> RawInputs:
    overrides = {
        "output_dir": args.out_dir,
        "library_version": args.htslib_version,
        "target_triple": args.target,
        "library_mode": args.mode,
    }
    return replace(base, **{key: value for key, value in overrides.items() if value is not None})


def main(argv: Sequence[str] | None = None, *, runner: CommandRunner | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.jobs < 1:
        parser.error("--jobs must be at least 1")
    logger = StructuredLogger(stream=None if args.quiet else sys.stderr)
    if runner is None:
        runner = SubprocessRunner(logger=logger)

    try:
        env = resolve(raw_inputs_from_args(args, raw_inputs_from_environ()))
        result = bootstrap(env, runner=runner, logger=logger, jobs=args.jobs)
    except BootstrapError as exc:
        logger.log(
            operation="main",
            phase=None,
            level="error",
            message=str(exc),
            extra=exc.to_dict(),
        )
        return exc.exit_code
    finally:
        if args.log_file is not None:
            logger.to_json_lines(args.log_file)

    if args.report is not None:
        BuildReport.from_run(env, result).write(args.report)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
