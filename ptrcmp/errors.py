"""
ptrcmp/errors.py
════════════════

Exception hierarchy for the glue around the analysis core.

    PtrcmpError (base)
    ├── ConfigError           - invalid options / command-line usage
    ├── DumpLoadError         - dump file missing, unreadable or unparsable,
    │                           or cppcheckdata could not be located
    └── DumpGenerationError   - ``cppcheck --dump`` failed for a source file

The scanner itself never raises any of these: unresolved type information
is treated as "do not report", not as an error.  Failures are raised by
the loader and caught per file by the runner, so one bad input never
aborts the rest of a run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class PtrcmpError(Exception):
    """Base class for all ptrcmp errors."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
    ) -> None:
        self.message = message
        self.path = str(path) if path is not None else None
        super().__init__(self._render())

    def _render(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class ConfigError(PtrcmpError):
    """Raised when an AnalysisConfig fails validation."""


class DumpLoadError(PtrcmpError):
    """Raised when a Cppcheck dump file cannot be loaded."""


class DumpGenerationError(PtrcmpError):
    """Raised when ``cppcheck --dump`` does not produce a dump file."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message, path)


__all__ = [
    "PtrcmpError",
    "ConfigError",
    "DumpLoadError",
    "DumpGenerationError",
]
