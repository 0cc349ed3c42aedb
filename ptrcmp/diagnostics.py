"""
ptrcmp/diagnostics.py
═════════════════════

Positioned advisory messages produced by the scanner.

A :class:`Diagnostic` is only a location and a text.  It carries no
severity, error id or fix suggestion; :mod:`ptrcmp.report` adds those when
serialising for Cppcheck's addon protocol.
"""

from __future__ import annotations

from dataclasses import dataclass

from ptrcmp.ast_helper import Token, tok_location


@dataclass(frozen=True, order=True)
class SourceLocation:
    """A specific point in source code."""
    file: str = ""
    line: int = 0
    column: int = 0

    @classmethod
    def of(cls, tok: Token) -> SourceLocation:
        file, line, column = tok_location(tok)
        return cls(file=file, line=line, column=column)

    def __str__(self) -> str:
        if self.column:
            return f"{self.file}:{self.line}:{self.column}"
        return f"{self.file}:{self.line}"


@dataclass(frozen=True)
class Diagnostic:
    """A suspected defect at ``location``, described by ``message``."""
    location: SourceLocation
    message: str

    @property
    def file(self) -> str:
        return self.location.file

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column


__all__ = ["SourceLocation", "Diagnostic"]
