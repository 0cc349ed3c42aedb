"""
ptrcmp/scanner.py
═════════════════

Comparison scanner: flags ``==``, ``!=``, ``<``, ``>``, ``<=`` and ``>=``
between two pointers whose referents are basic scalar types.

    int *one, *two;
    if (one == two) { }      // reported: compares addresses
    if (*one == *two) { }    // fine: compares values

Algorithm
─────────
One pass over the unit: AST roots in token order, each walked pre-order.
For every comparison node

  1. both operands must be pointers, otherwise skip (pointer vs value is
     a different bug class);
  2. both pointee kinds must be BASIC, otherwise skip (pointers to
     records, containers, void or other pointers are compared for
     identity on purpose);
  3. emit one diagnostic at the operator token.

The scanner keeps no state between calls.  Each :meth:`scan` builds and
returns its own list, so separate units can be scanned independently and
in any order.

License: GPL-3.0-or-later
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from ptrcmp.ast_helper import (
    Token,
    is_comparison_op,
    iter_unit_ast,
    tok_op1,
    tok_op2,
)
from ptrcmp.classifier import (
    PointeeKind,
    TypeInfo,
    ValueTypeInfo,
    classify,
    kind_of,
)
from ptrcmp.diagnostics import Diagnostic, SourceLocation

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATE = "comparing pointers to basic types: {left} and {right}"


class PointerComparisonScanner:
    """
    Visitor producing diagnostics for basic-pointer comparisons.

    Parameters
    ----------
    type_info : TypeInfo used to resolve operand types.  Defaults to the
                ``valueType`` Cppcheck recorded on each token.
    """

    def __init__(self, type_info: Optional[TypeInfo] = None) -> None:
        self.type_info: TypeInfo = type_info or ValueTypeInfo()

    def scan(self, unit: Any) -> List[Diagnostic]:
        """
        Scan one compilation unit.

        Parameters
        ----------
        unit : cppcheckdata.Configuration, or any iterable of tokens

        Returns
        -------
        Diagnostics in traversal (source) order.
        """
        diagnostics: List[Diagnostic] = []
        compared = 0
        for tok in iter_unit_ast(unit):
            if not is_comparison_op(tok):
                continue
            compared += 1
            diag = self.check_comparison(tok)
            if diag is not None:
                diagnostics.append(diag)
        logger.debug(
            "Scanned %d comparisons, %d diagnostics", compared, len(diagnostics)
        )
        return diagnostics

    def check_comparison(self, tok: Token) -> Optional[Diagnostic]:
        """Diagnostic for a single comparison node, or None."""
        left = classify(tok_op1(tok), self.type_info)
        right = classify(tok_op2(tok), self.type_info)
        if not (left.is_pointer and right.is_pointer):
            return None

        if kind_of(left.inner) is not PointeeKind.BASIC:
            return None
        if kind_of(right.inner) is not PointeeKind.BASIC:
            return None

        message = MESSAGE_TEMPLATE.format(
            left=left.inner.spelling(),
            right=right.inner.spelling(),
        )
        return Diagnostic(location=SourceLocation.of(tok), message=message)


def scan(unit: Any, type_info: Optional[TypeInfo] = None) -> List[Diagnostic]:
    """Scan ``unit`` with a fresh :class:`PointerComparisonScanner`."""
    return PointerComparisonScanner(type_info).scan(unit)


__all__ = [
    "MESSAGE_TEMPLATE",
    "PointerComparisonScanner",
    "scan",
]
