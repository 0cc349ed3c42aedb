"""
ptrcmp/report.py
════════════════

Serialisation of diagnostics for the caller.

  text  ``file:line: message``                   (default)
  gcc   ``file:line:column: style: message [basicPointerComparison]``
  json  one Cppcheck addon JSON object per line
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable, TextIO

from ptrcmp.checker import PointerComparisonChecker
from ptrcmp.diagnostics import Diagnostic

ADDON_NAME = "ptrcmp"


def to_cppcheck_json(diag: Diagnostic) -> Dict[str, Any]:
    """Cppcheck's JSON addon output format for one diagnostic."""
    checker = PointerComparisonChecker
    result: Dict[str, Any] = {
        "file": diag.file,
        "linenr": diag.line,
        "column": diag.column,
        "severity": checker.severity,
        "message": diag.message,
        "addon": ADDON_NAME,
        "errorId": checker.error_id,
        "extra": "",
    }
    if checker.cwe:
        result["cwe"] = checker.cwe
    return result


def format_text(diag: Diagnostic) -> str:
    return f"{diag.file}:{diag.line}: {diag.message}"


def format_gcc(diag: Diagnostic) -> str:
    checker = PointerComparisonChecker
    return f"{diag.location}: {checker.severity}: {diag.message} [{checker.error_id}]"


def format_json(diag: Diagnostic) -> str:
    return json.dumps(to_cppcheck_json(diag))


FORMATTERS: Dict[str, Callable[[Diagnostic], str]] = {
    "text": format_text,
    "gcc": format_gcc,
    "json": format_json,
}


def render(diagnostics: Iterable[Diagnostic], output_format: str = "text") -> str:
    """All diagnostics in ``output_format``, one per line."""
    try:
        formatter = FORMATTERS[output_format]
    except KeyError:
        raise ValueError(f"unknown output format: {output_format!r}") from None
    return "\n".join(formatter(d) for d in diagnostics)


def write(
    diagnostics: Iterable[Diagnostic],
    stream: TextIO,
    output_format: str = "text",
) -> int:
    """Write diagnostics to ``stream``; returns how many were written."""
    formatter = FORMATTERS[output_format]
    count = 0
    for diag in diagnostics:
        stream.write(formatter(diag) + "\n")
        count += 1
    return count


__all__ = [
    "ADDON_NAME",
    "FORMATTERS",
    "to_cppcheck_json",
    "format_text",
    "format_gcc",
    "format_json",
    "render",
    "write",
]
