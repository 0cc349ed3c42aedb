"""
ptrcmp/runner.py
════════════════

Orchestrates a run over many inputs.

Every input file is handled in isolation: it is (optionally) turned into a
dump, loaded, and each of its configurations is scanned with a fresh
checker.  A failure on one file is logged and recorded in
:attr:`RunResult.failures`; the remaining files are still analysed.
Per-file results are merged in input order, also when ``jobs > 1``
spreads the files over a thread pool.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

from ptrcmp.checker import run_checker
from ptrcmp.config import DUMP_SUFFIX, AnalysisConfig
from ptrcmp.diagnostics import Diagnostic
from ptrcmp.errors import PtrcmpError
from ptrcmp.loader import (
    DumpFile,
    discover,
    dump_path_for,
    generate_dump,
    load_dump,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FOUND = 1


def scan_dump(dump: DumpFile) -> List[Diagnostic]:
    """
    Scan every configuration of one dump file.

    Each configuration gets its own checker.  The same comparison seen
    under several preprocessor configurations is reported once, at its
    first occurrence.
    """
    seen: Set[Tuple[object, str]] = set()
    merged: List[Diagnostic] = []
    for cfg in dump.configurations:
        name = getattr(cfg, "name", "") or "<default>"
        diags = run_checker(cfg)
        logger.debug("%s [%s]: %d diagnostics", dump.path, name, len(diags))
        for diag in diags:
            key = (diag.location, diag.message)
            if key in seen:
                continue
            seen.add(key)
            merged.append(diag)
    return merged


@dataclass(frozen=True)
class _Task:
    path: Path
    is_source: bool


@dataclass
class FileOutcome:
    """Result of processing one input file."""
    path: Path
    diagnostics: List[Diagnostic] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class RunResult:
    """
    Aggregate results of a run.

    Attributes
    ----------
    diagnostics   : all diagnostics, in input order
    failures      : input path → error text for files that were skipped
    files_scanned : number of dump files successfully scanned
    elapsed_ms    : wall time of the run
    """
    diagnostics: List[Diagnostic] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)
    files_scanned: int = 0
    elapsed_ms: float = 0.0

    @property
    def exit_code(self) -> int:
        return EXIT_FOUND if self.diagnostics else EXIT_OK

    def add(self, outcome: FileOutcome) -> None:
        if outcome.error is not None:
            self.failures[str(outcome.path)] = outcome.error
            return
        self.files_scanned += 1
        self.diagnostics.extend(outcome.diagnostics)

    def summary(self) -> str:
        lines = [
            f"Scanned {self.files_scanned} files: "
            f"{len(self.diagnostics)} pointer comparisons found "
            f"({self.elapsed_ms:.1f}ms)",
        ]
        for path, error in self.failures.items():
            lines.append(f"  skipped {path}: {error}")
        return "\n".join(lines)


class Runner:
    """
    Runs the pointer-comparison check over files and directories.

    Usage
    -----
    >>> runner = Runner(AnalysisConfig(generate_dumps=True))
    >>> result = runner.run(["src/"])
    >>> print(result.summary())
    """

    def __init__(self, config: Optional[AnalysisConfig] = None) -> None:
        self.config = (config or AnalysisConfig()).validate()

    def _plan(self, paths: Iterable[Union[str, Path]]) -> List[_Task]:
        suffixes = self.config.source_suffixes
        tasks: List[_Task] = []
        planned: Set[Path] = set()
        for path in discover(paths, suffixes):
            if path.name.endswith(DUMP_SUFFIX):
                target, is_source = path, False
            elif path.suffix.lower() in suffixes:
                if not self.config.generate_dumps:
                    logger.info("Skipping source %s (dump generation disabled)", path)
                    continue
                target, is_source = dump_path_for(path), True
            else:
                logger.warning("Skipping %s: not a dump file or C/C++ source", path)
                continue
            key = target.resolve()
            if key in planned:
                continue
            planned.add(key)
            tasks.append(_Task(path=path, is_source=is_source))
        return tasks

    def process(self, task: _Task) -> FileOutcome:
        """Load and scan one input; errors are captured, not raised."""
        try:
            dump_path = task.path
            if task.is_source:
                dump_path = generate_dump(
                    task.path,
                    cppcheck=self.config.cppcheck,
                    timeout=self.config.timeout,
                    extra_args=self.config.cppcheck_args,
                )
            dump = load_dump(dump_path)
            return FileOutcome(path=task.path, diagnostics=scan_dump(dump))
        except PtrcmpError as exc:
            logger.warning("Skipping %s: %s", task.path, exc.message)
            return FileOutcome(path=task.path, error=exc.message)

    def run(self, paths: Iterable[Union[str, Path]]) -> RunResult:
        t0 = time.monotonic()
        tasks = self._plan(paths)
        result = RunResult()

        if self.config.jobs > 1 and len(tasks) > 1:
            with ThreadPoolExecutor(max_workers=self.config.jobs) as pool:
                outcomes = list(pool.map(self.process, tasks))
        else:
            outcomes = [self.process(task) for task in tasks]

        for outcome in outcomes:
            result.add(outcome)
        result.elapsed_ms = (time.monotonic() - t0) * 1000.0
        logger.info(result.summary())
        return result


__all__ = [
    "EXIT_OK",
    "EXIT_FOUND",
    "scan_dump",
    "FileOutcome",
    "RunResult",
    "Runner",
]
