"""
ptrcmp/checker.py
═════════════════

Adapter exposing the scanner through the Cppcheck-addon checker
lifecycle, so it can sit beside other checkers in a larger suite.

Each Checker follows a four-phase lifecycle:

  1. **configure()**        — prepare for one configuration
  2. **collect_evidence()** — scan the configuration
  3. **diagnose()**         — turn evidence into Diagnostics
  4. **report()**           — hand the Diagnostics back

Reporting metadata (error id, severity, CWE) lives on the checker class,
not on the Diagnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, List, Optional

from ptrcmp.classifier import TypeInfo
from ptrcmp.diagnostics import Diagnostic
from ptrcmp.scanner import PointerComparisonScanner


@dataclass
class CheckerContext:
    """
    Context passed to a checker for one configuration.

    Attributes
    ----------
    cfg       : cppcheckdata.Configuration (the compilation unit)
    type_info : optional TypeInfo override; None uses token valueTypes
    """
    cfg: Any
    type_info: Optional[TypeInfo] = None



class Checker(ABC):
    """
    Abstract base class for checkers.

    Subclass Contract
    ─────────────────
      - Override ``name`` and ``error_id``
      - Implement ``collect_evidence()`` and ``diagnose()``
    """

    name: ClassVar[str] = "base-checker"
    error_id: ClassVar[str] = ""
    severity: ClassVar[str] = "style"
    cwe: ClassVar[int] = 0

    def __init__(self) -> None:
        self._diagnostics: List[Diagnostic] = []

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def configure(self, ctx: CheckerContext) -> None:
        """Called before evidence collection.  Default does nothing."""

    @abstractmethod
    def collect_evidence(self, ctx: CheckerContext) -> None:
        ...

    @abstractmethod
    def diagnose(self, ctx: CheckerContext) -> None:
        ...

    def report(self, ctx: CheckerContext) -> List[Diagnostic]:
        return self.diagnostics

    def run(self, ctx: CheckerContext) -> List[Diagnostic]:
        """Drive the full lifecycle on one configuration."""
        self.configure(ctx)
        self.collect_evidence(ctx)
        self.diagnose(ctx)
        return self.report(ctx)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} '{self.name}'>"


class PointerComparisonChecker(Checker):
    """
    Detects comparisons of pointers to basic types.

    CWE-595: Comparison of Object References Instead of Object Contents
    """

    name = "pointer-comparison"
    error_id = "basicPointerComparison"
    severity = "style"
    cwe = 595

    def __init__(self) -> None:
        super().__init__()
        self._evidence: List[Diagnostic] = []

    def collect_evidence(self, ctx: CheckerContext) -> None:
        self._evidence = PointerComparisonScanner(ctx.type_info).scan(ctx.cfg)

    def diagnose(self, ctx: CheckerContext) -> None:
        self._diagnostics.extend(self._evidence)


def run_checker(cfg: Any, type_info: Optional[TypeInfo] = None) -> List[Diagnostic]:
    """Run a fresh PointerComparisonChecker on one configuration."""
    ctx = CheckerContext(cfg=cfg, type_info=type_info)
    return PointerComparisonChecker().run(ctx)


__all__ = [
    "CheckerContext",
    "Checker",
    "PointerComparisonChecker",
    "run_checker",
]
