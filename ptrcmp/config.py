"""
ptrcmp/config.py
════════════════

Run configuration for the command-line tool and :class:`ptrcmp.runner.Runner`.

Defaults can be overridden from the environment:

    PTRCMP_CPPCHECK   cppcheck executable used by --generate-dumps
    PTRCMP_TIMEOUT    per-file timeout for cppcheck, in seconds
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Tuple

from ptrcmp.errors import ConfigError

OUTPUT_FORMATS: Tuple[str, ...] = ("text", "gcc", "json")

DEFAULT_SOURCE_SUFFIXES: FrozenSet[str] = frozenset({
    ".c", ".h",
    ".cc", ".cpp", ".cxx", ".c++",
    ".hh", ".hpp", ".hxx", ".h++",
})

DUMP_SUFFIX = ".dump"


def _env_timeout() -> float:
    raw = os.environ.get("PTRCMP_TIMEOUT")
    if not raw:
        return 60.0
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"PTRCMP_TIMEOUT must be a number, got {raw!r}")


@dataclass
class AnalysisConfig:
    """
    Options for one analysis run.

    Attributes
    ----------
    output_format   : "text", "gcc" or "json"
    generate_dumps  : run ``cppcheck --dump`` on C/C++ sources found in
                      the inputs; when False such sources are skipped
    cppcheck        : cppcheck executable
    cppcheck_args   : extra arguments passed to cppcheck
    timeout         : seconds allowed per cppcheck invocation
    jobs            : number of files processed concurrently
    source_suffixes : file suffixes treated as C/C++ sources
    log_level       : level for the ``ptrcmp`` logger
    """
    output_format: str = "text"
    generate_dumps: bool = False
    cppcheck: str = field(
        default_factory=lambda: os.environ.get("PTRCMP_CPPCHECK", "cppcheck")
    )
    cppcheck_args: Tuple[str, ...] = ()
    timeout: float = field(default_factory=_env_timeout)
    jobs: int = 1
    source_suffixes: FrozenSet[str] = DEFAULT_SOURCE_SUFFIXES
    log_level: int = logging.WARNING

    def validate(self) -> AnalysisConfig:
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigError(
                f"unknown output format {self.output_format!r} "
                f"(expected one of {', '.join(OUTPUT_FORMATS)})"
            )
        if self.jobs < 1:
            raise ConfigError(f"jobs must be at least 1, got {self.jobs}")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.generate_dumps and not self.cppcheck:
            raise ConfigError("generate_dumps requires a cppcheck executable")
        for suffix in self.source_suffixes:
            if not suffix.startswith("."):
                raise ConfigError(f"source suffix must start with '.', got {suffix!r}")
        return self

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> AnalysisConfig:
        """Build a validated config from the CLI's parsed arguments."""
        verbosity: int = getattr(args, "verbose", 0) or 0
        level = logging.WARNING
        if verbosity == 1:
            level = logging.INFO
        elif verbosity >= 2:
            level = logging.DEBUG

        kwargs = {}
        cppcheck: Optional[str] = getattr(args, "cppcheck", None)
        if cppcheck:
            kwargs["cppcheck"] = cppcheck
        timeout: Optional[float] = getattr(args, "timeout", None)
        if timeout is not None:
            kwargs["timeout"] = timeout

        config = cls(
            output_format=getattr(args, "output", "text") or "text",
            generate_dumps=bool(getattr(args, "generate_dumps", False)),
            cppcheck_args=tuple(getattr(args, "cppcheck_arg", None) or ()),
            jobs=1 if getattr(args, "jobs", None) is None else args.jobs,
            log_level=level,
            **kwargs,
        )
        return config.validate()


__all__ = [
    "OUTPUT_FORMATS",
    "DEFAULT_SOURCE_SUFFIXES",
    "DUMP_SUFFIX",
    "AnalysisConfig",
]
