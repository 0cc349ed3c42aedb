#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
ptrcmp/ast_helper.py
════════════════════

Read-only accessors and traversal over the AST stored in Cppcheck dump
files.

Cppcheck links every expression token to its operands through
``astOperand1`` / ``astOperand2`` and to its parent through ``astParent``.
A compilation unit (one ``cppcheckdata.Configuration``) exposes its tokens
in source order through ``tokenlist``.  The helpers below:

    ┌─────────────────────────────────────────────────────────────────┐
    │  Safe accessors     tok_str, tok_op1, tok_op2, tok_parent,      │
    │                     tok_value_type, tok_location                │
    ├─────────────────────────────────────────────────────────────────┤
    │  Traversal          iter_unit_tokens, iter_ast_roots,           │
    │                     iter_ast_preorder, iter_unit_ast            │
    ├─────────────────────────────────────────────────────────────────┤
    │  Predicates         is_binary_op, is_comparison_op              │
    └─────────────────────────────────────────────────────────────────┘

Every function accepts ``None`` and returns a neutral value (empty string,
``None``, empty iterator, ``False``) rather than raising.  Token objects
are never modified.

License: GPL-3.0-or-later
"""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, Iterator, List, Optional, Tuple


# ═══════════════════════════════════════════════════════════════════════════
#  TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════

# Any keeps cppcheckdata out of the import graph; tests use mock tokens.
Token = Any


# ═══════════════════════════════════════════════════════════════════════════
#  CONSTANTS
# ═══════════════════════════════════════════════════════════════════════════

# Equality and ordering operators.  C++20 ``<=>`` is deliberately absent:
# it yields an ordering object, not a truth value.
COMPARISON_OPS: FrozenSet[str] = frozenset({
    '==', '!=', '<', '>', '<=', '>=',
})


# ═══════════════════════════════════════════════════════════════════════════
#  PART 1 — SAFE ACCESSORS
# ═══════════════════════════════════════════════════════════════════════════

def tok_str(tok: Token) -> str:
    """
    Safely get the string representation of a token.

    Args:
        tok: A cppcheckdata Token object (may be None)

    Returns:
        The token's string value, or empty string if tok is None
    """
    if tok is None:
        return ""
    return getattr(tok, "str", "") or ""


def tok_op1(tok: Token) -> Optional[Token]:
    """Safely get astOperand1 of a token."""
    if tok is None:
        return None
    return getattr(tok, "astOperand1", None)


def tok_op2(tok: Token) -> Optional[Token]:
    """Safely get astOperand2 of a token."""
    if tok is None:
        return None
    return getattr(tok, "astOperand2", None)


def tok_parent(tok: Token) -> Optional[Token]:
    """Safely get astParent of a token."""
    if tok is None:
        return None
    return getattr(tok, "astParent", None)


def tok_value_type(tok: Token) -> Optional[Any]:
    """
    Safely get the ValueType of a token.

    Args:
        tok: A cppcheckdata Token object (may be None)

    Returns:
        The ValueType object, or None when Cppcheck could not resolve one
    """
    if tok is None:
        return None
    return getattr(tok, "valueType", None)


def tok_location(tok: Token) -> Tuple[str, int, int]:
    """Return ``(file, line, column)`` for a token, zeros when missing."""
    if tok is None:
        return ("", 0, 0)
    return (
        getattr(tok, "file", "") or "",
        getattr(tok, "linenr", 0) or 0,
        getattr(tok, "column", 0) or 0,
    )


# ═══════════════════════════════════════════════════════════════════════════
#  PART 2 — AST TRAVERSAL
# ═══════════════════════════════════════════════════════════════════════════

def iter_unit_tokens(unit: Any) -> Iterator[Token]:
    """
    Iterate the tokens of a compilation unit in source order.

    Args:
        unit: A ``cppcheckdata.Configuration`` (anything with a
              ``tokenlist``), or a plain iterable of tokens

    Yields:
        Tokens in the order Cppcheck recorded them
    """
    if unit is None:
        return
    tokens = getattr(unit, "tokenlist", None)
    if tokens is None:
        tokens = unit
    for tok in tokens:
        yield tok


def iter_ast_roots(tokens: Iterable[Token]) -> Iterator[Token]:
    """
    Yield every AST root among ``tokens``, in token order.

    A root has no astParent and at least one operand.  Because a statement's
    tokens all precede the next statement's tokens, roots come out in
    lexical order.
    """
    for tok in tokens:
        if tok_parent(tok) is not None:
            continue
        if tok_op1(tok) is None and tok_op2(tok) is None:
            continue
        yield tok


def iter_ast_preorder(root: Token) -> Iterator[Token]:
    """
    Iterate over AST nodes in pre-order (root, left, right).

    Args:
        root: The root token of the AST subtree

    Yields:
        Tokens in pre-order sequence

    Example:
        >>> for tok in iter_ast_preorder(expr_root):
        ...     print(tok_str(tok))
    """
    if root is None:
        return
    stack: List[Token] = [root]
    while stack:
        node = stack.pop()
        yield node
        # Push right first so left is processed first (LIFO)
        op2 = tok_op2(node)
        if op2 is not None:
            stack.append(op2)
        op1 = tok_op1(node)
        if op1 is not None:
            stack.append(op1)


def iter_unit_ast(unit: Any) -> Iterator[Token]:
    """Every AST node of a unit: roots in token order, each walked pre-order."""
    for root in iter_ast_roots(iter_unit_tokens(unit)):
        yield from iter_ast_preorder(root)


# ═══════════════════════════════════════════════════════════════════════════
#  PART 3 — AST PREDICATES
# ═══════════════════════════════════════════════════════════════════════════

def is_binary_op(tok: Token) -> bool:
    """
    Check if a token is a binary operator in the AST.

    A binary operator has both astOperand1 and astOperand2.
    """
    if tok is None:
        return False
    return tok_op1(tok) is not None and tok_op2(tok) is not None


def is_comparison_op(tok: Token) -> bool:
    """True for a binary ``==``, ``!=``, ``<``, ``>``, ``<=`` or ``>=`` node.

    Template angle brackets share the ``<``/``>`` spelling but carry no
    operands, so the binary check filters them out.
    """
    return tok_str(tok) in COMPARISON_OPS and is_binary_op(tok)


__all__ = [
    "Token",
    "COMPARISON_OPS",
    "tok_str",
    "tok_op1",
    "tok_op2",
    "tok_parent",
    "tok_value_type",
    "tok_location",
    "iter_unit_tokens",
    "iter_ast_roots",
    "iter_ast_preorder",
    "iter_unit_ast",
    "is_binary_op",
    "is_comparison_op",
]
