"""
ptrcmp — find comparisons of pointers to basic types
====================================================

Comparing two ``int *`` (or ``char *``, ``double *``, ...) with ``==``,
``!=``, ``<``, ``>``, ``<=`` or ``>=`` compares addresses.  Usually the
author meant to compare the values, so the expression is reported.

The analysis reads Cppcheck dump files: Cppcheck parses and type-checks
the code, ptrcmp walks the resulting AST.

Core modules
------------
classifier
    Is an expression a pointer, and is its pointee a basic scalar?
scanner
    Walks a compilation unit and emits diagnostics.

Glue
----
checker, loader, runner, report, config, main

Quick start
-----------
>>> from ptrcmp import scan
>>> for diag in scan(cfg):          # cfg: cppcheckdata.Configuration
...     print(diag.location, diag.message)
"""

from __future__ import annotations

import logging

__version__ = "0.2.0"
__license__ = "GPL-3.0-or-later"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from ptrcmp.classifier import (  # noqa: E402
    MappingTypeInfo,
    PointeeKind,
    TypeInfo,
    ValueTypeInfo,
    classify,
    is_pointer,
    pointee_kind,
    pointee_name,
)
from ptrcmp.diagnostics import Diagnostic, SourceLocation  # noqa: E402
from ptrcmp.errors import (  # noqa: E402
    ConfigError,
    DumpGenerationError,
    DumpLoadError,
    PtrcmpError,
)
from ptrcmp.scanner import PointerComparisonScanner, scan  # noqa: E402

__all__ = [
    "__version__",
    "MappingTypeInfo",
    "PointeeKind",
    "TypeInfo",
    "ValueTypeInfo",
    "classify",
    "is_pointer",
    "pointee_kind",
    "pointee_name",
    "Diagnostic",
    "SourceLocation",
    "PtrcmpError",
    "ConfigError",
    "DumpLoadError",
    "DumpGenerationError",
    "PointerComparisonScanner",
    "scan",
]
