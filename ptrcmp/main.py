#!/usr/bin/env python3
"""ptrcmp/main.py — command-line entry point.

Usage examples
--------------
    # Scan dump files produced by ``cppcheck --dump``
    ptrcmp main.c.dump util.c.dump

    # Walk a source tree, generating dumps with cppcheck as needed
    ptrcmp --generate-dumps src/

    # Cppcheck addon JSON on stdout, four files at a time
    ptrcmp --output json -j 4 build/dumps/

With no paths, every ``*.dump`` file in the current directory is scanned.

Exit codes
----------
    0   No basic-pointer comparisons found.
    1   One or more diagnostics were printed.
    2   Usage error, bad configuration, or nothing to scan.
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
from pathlib import Path
from typing import List, Optional, Sequence

from ptrcmp import __version__
from ptrcmp.config import OUTPUT_FORMATS, AnalysisConfig
from ptrcmp.errors import ConfigError
from ptrcmp.report import write
from ptrcmp.runner import Runner

_log = logging.getLogger("ptrcmp")

EXIT_INFRA: int = 2


def _configure_logging(level: int) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("ptrcmp")
    root.setLevel(level)
    root.handlers[:] = [handler]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ptrcmp",
        description=(
            "Find comparisons between pointers to basic types "
            "(int *a, *b; a == b) in Cppcheck dump files."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              ptrcmp main.c.dump
              ptrcmp --generate-dumps src/
              ptrcmp --output json -j 4 build/dumps/
        """),
    )
    parser.add_argument(
        "paths", nargs="*", metavar="PATH",
        help="Dump files, C/C++ sources or directories (default: ./*.dump).",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase verbosity (-v info, -vv debug).",
    )
    parser.add_argument(
        "-o", "--output", choices=OUTPUT_FORMATS, default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "-j", "--jobs", type=int, default=1, metavar="N",
        help="Files processed concurrently (default: 1).",
    )

    g = parser.add_argument_group("dump generation")
    g.add_argument(
        "--generate-dumps", action="store_true",
        help="Run 'cppcheck --dump' on C/C++ sources found in PATH.",
    )
    g.add_argument(
        "--cppcheck", default=None, metavar="EXE",
        help="cppcheck executable (default: $PTRCMP_CPPCHECK or 'cppcheck').",
    )
    g.add_argument(
        "--cppcheck-arg", action="append", default=None, metavar="ARG",
        help="Extra argument for cppcheck; may be repeated.",
    )
    g.add_argument(
        "--timeout", type=float, default=None, metavar="SECONDS",
        help="Per-file cppcheck timeout (default: $PTRCMP_TIMEOUT or 60).",
    )
    return parser


def _default_paths() -> List[str]:
    return [str(p) for p in sorted(Path.cwd().glob("*.dump"))]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the ptrcmp CLI and return its exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = AnalysisConfig.from_args(args)
    except ConfigError as exc:
        parser.print_usage(sys.stderr)
        sys.stderr.write(f"ptrcmp: error: {exc}\n")
        return EXIT_INFRA

    _configure_logging(config.log_level)

    paths = args.paths or _default_paths()
    if not paths:
        _log.error("No dump files specified and none found in current directory")
        return EXIT_INFRA

    try:
        result = Runner(config).run(paths)
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130

    write(result.diagnostics, sys.stdout, config.output_format)

    if result.files_scanned == 0:
        _log.error("Nothing was scanned")
        return EXIT_INFRA
    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
