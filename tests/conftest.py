# tests/conftest.py
"""
Shared mock objects mirroring the parts of the cppcheckdata API that
ptrcmp reads, plus builders for small expression ASTs.

Expressions are assembled bottom-up and then laid out into a token list
in source order, one statement per line:

    one = var("one", ptr("int"))
    two = var("two", ptr("int"))
    tokens = layout(binary("==", one, two))
    cfg = make_cfg(tokens)
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, Iterable, List, Optional

import pytest


# ── Mock cppcheckdata objects ────────────────────────────────────────

class MockScope:
    def __init__(self, className: str = "", type: str = "Struct") -> None:
        self.className = className
        self.type = type


class MockValueType:
    def __init__(
        self,
        type: str = "int",
        sign: Optional[str] = None,
        pointer: int = 0,
        originalTypeName: Optional[str] = None,
        typeScope: Optional[MockScope] = None,
        constness: int = 0,
    ) -> None:
        self.type = type
        self.sign = sign
        self.pointer = pointer
        self.originalTypeName = originalTypeName
        self.typeScope = typeScope
        self.constness = constness


class MockToken:
    def __init__(
        self,
        str: str = "",
        file: str = "test.c",
        linenr: int = 1,
        column: int = 1,
        valueType: Optional[MockValueType] = None,
        **kwargs: Any,
    ) -> None:
        self.str = str
        self.file = file
        self.linenr = linenr
        self.column = column
        self.valueType = valueType
        self.astOperand1: Optional[MockToken] = None
        self.astOperand2: Optional[MockToken] = None
        self.astParent: Optional[MockToken] = None
        self.next: Optional[MockToken] = None
        self.previous: Optional[MockToken] = None
        for key, value in kwargs.items():
            setattr(self, key, value)

    def __repr__(self) -> str:
        return f"<MockToken {self.str!r} {self.file}:{self.linenr}:{self.column}>"


class MockConfiguration:
    def __init__(self, tokenlist: List[MockToken], name: str = "") -> None:
        self.tokenlist = tokenlist
        self.name = name


class MockCppcheckData:
    def __init__(self, configurations: List[MockConfiguration]) -> None:
        self.configurations = configurations


def make_token_chain(specs: Iterable[Dict[str, Any]]) -> List[MockToken]:
    """Build tokens from attribute dicts and link next/previous."""
    tokens = [MockToken(**spec) for spec in specs]
    for prev, cur in zip(tokens, tokens[1:]):
        prev.next = cur
        cur.previous = prev
    return tokens


def make_cfg(tokens: List[MockToken], name: str = "") -> MockConfiguration:
    return MockConfiguration(tokens, name=name)


def make_data(cfgs: List[MockConfiguration]) -> MockCppcheckData:
    return MockCppcheckData(cfgs)


# ── Value types ──────────────────────────────────────────────────────

def vt(type: str = "int", **kwargs: Any) -> MockValueType:
    return MockValueType(type=type, **kwargs)


def ptr(type: str = "int", levels: int = 1, **kwargs: Any) -> MockValueType:
    return MockValueType(type=type, pointer=levels, **kwargs)


def record(name: str, levels: int = 1) -> MockValueType:
    return MockValueType(
        type="record", pointer=levels, typeScope=MockScope(className=name),
    )


# ── Expression builders ──────────────────────────────────────────────

def var(name: str, value_type: Optional[MockValueType] = None) -> MockToken:
    return MockToken(str=name, valueType=value_type)


def binary(
    op: str,
    lhs: MockToken,
    rhs: MockToken,
    value_type: Optional[MockValueType] = None,
) -> MockToken:
    node = MockToken(str=op, valueType=value_type)
    node.astOperand1 = lhs
    node.astOperand2 = rhs
    lhs.astParent = node
    rhs.astParent = node
    return node


def compare(op: str, lhs: MockToken, rhs: MockToken) -> MockToken:
    return binary(op, lhs, rhs, value_type=vt("bool"))


def unary(
    op: str,
    operand: MockToken,
    value_type: Optional[MockValueType] = None,
) -> MockToken:
    node = MockToken(str=op, valueType=value_type)
    node.astOperand1 = operand
    operand.astParent = node
    return node


def deref(operand: MockToken) -> MockToken:
    """``*operand`` typed as the pointee of the operand."""
    inner = operand.valueType
    value_type = None
    if inner is not None:
        value_type = MockValueType(
            type=inner.type,
            sign=inner.sign,
            pointer=max(inner.pointer - 1, 0),
            originalTypeName=inner.originalTypeName,
            typeScope=inner.typeScope,
        )
    return unary("*", operand, value_type)


def _inorder(node: MockToken, out: List[MockToken]) -> None:
    if node.astOperand2 is None and node.astOperand1 is not None:
        # prefix unary operator
        out.append(node)
        _inorder(node.astOperand1, out)
        return
    if node.astOperand1 is not None:
        _inorder(node.astOperand1, out)
    out.append(node)
    if node.astOperand2 is not None:
        _inorder(node.astOperand2, out)


def layout(*statements: MockToken, file: str = "test.c") -> List[MockToken]:
    """
    Lay out statement ASTs into a linked token list.

    Statement *i* goes on line *i + 1*, each followed by a ``;`` token
    without AST links.  Columns advance by token width plus one space.
    """
    tokens: List[MockToken] = []
    for lineno, stmt in enumerate(statements, start=1):
        line_tokens: List[MockToken] = []
        _inorder(stmt, line_tokens)
        line_tokens.append(MockToken(str=";"))
        column = 1
        for tok in line_tokens:
            tok.file = file
            tok.linenr = lineno
            tok.column = column
            column += len(tok.str) + 1
        tokens.extend(line_tokens)
    for prev, cur in zip(tokens, tokens[1:]):
        prev.next = cur
        cur.previous = prev
    return tokens


def fake_cppcheckdata(dumps: Dict[str, MockCppcheckData]) -> SimpleNamespace:
    """Stand-in for the cppcheckdata module: ``parsedump`` by path."""

    def parsedump(path: str) -> MockCppcheckData:
        try:
            return dumps[path]
        except KeyError:
            raise ValueError(f"not well-formed (invalid token): {path}") from None

    return SimpleNamespace(parsedump=parsedump)


@pytest.fixture
def basic_pointer_cfg() -> MockConfiguration:
    """``one == two`` on line 1 and ``*one == *two`` on line 2."""
    one, two = var("one", ptr("int")), var("two", ptr("int"))
    one2, two2 = var("one", ptr("int")), var("two", ptr("int"))
    tokens = layout(
        compare("==", one, two),
        compare("==", deref(one2), deref(two2)),
    )
    return make_cfg(tokens)


@pytest.fixture(autouse=True)
def _reset_cppcheckdata_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    import ptrcmp.loader

    monkeypatch.setattr(ptrcmp.loader, "_cppcheckdata", None)
