"""
ptrcmp/classifier.py
════════════════════

Type classifier: decides whether an expression is a pointer and, if so,
what kind of value it points at.

Theory
──────
Cppcheck resolves a ``ValueType`` for most expression tokens.  A value type
is a scalar or record spelling (``type``), an optional ``sign``, a pointer
depth (``pointer``), the alias it was written with (``originalTypeName``)
and, for records, the defining scope (``typeScope``).  We read it as the
term

    τ ::= base | ptr(τ)          with  ptr^n(base)  ⇔  pointer == n

so removing one pointer level is just ``pointer - 1``.  The pointee of an
expression is then classified as

    BASIC      base is a primitive scalar (integer, character, bool,
               floating point) or a string container, and no pointer
               level remains;
    COMPOSITE  record, non-string container, iterator, smart pointer,
               void, or a pointee that is itself a pointer;
    UNKNOWN    Cppcheck could not resolve the type.

Aliases (``typedef unsigned int u32``) are already resolved to their
representation by Cppcheck, so a pointer to a named scalar is BASIC.
The alias is reused for the pointee only when it is a standard scalar
typedef such as ``uint32_t``; a user alias on a pointer value type may
spell the pointer itself (``typedef int *intptr``).

Where type information lives
────────────────────────────
The classifier never reads ``tok.valueType`` directly; it asks a
:class:`TypeInfo`.  :class:`ValueTypeInfo` is the default lookup;
:class:`MappingTypeInfo` wraps an explicit token → value-type table for
callers that compute types elsewhere.  An unresolved token is never a
pointer.

License: GPL-3.0-or-later
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, FrozenSet, Mapping, Optional

from ptrcmp.ast_helper import Token, tok_value_type


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — TYPE VOCABULARY
# ═════════════════════════════════════════════════════════════════════════

# ``valueType-type`` spellings whose representation is a primitive scalar.
BASIC_TYPES: FrozenSet[str] = frozenset({
    "bool",
    "char", "char8_t", "char16_t", "char32_t", "wchar_t",
    "short", "int", "long", "long long", "unknown int",
    "float", "double", "long double",
})

# Spellings with internal structure (or no value at all, for void).
COMPOSITE_TYPES: FrozenSet[str] = frozenset({
    "record", "container", "iterator", "smart-pointer", "void",
})

# Containers that model a string value rather than a collection.
STRING_CONTAINERS: FrozenSet[str] = frozenset({
    "std::string", "std::wstring", "std::u8string",
    "std::u16string", "std::u32string",
    "std::string_view", "std::wstring_view",
    "std::basic_string", "std::basic_string_view",
})


# Typedefs from the standard headers that name a scalar.  On a pointer
# value type any other ``originalTypeName`` may spell the pointer itself
# (``typedef int *intptr``) rather than the pointee.
SCALAR_ALIAS = re.compile(
    r"(?:std::)?(?:"
    r"u?int(?:_least|_fast)?(?:8|16|32|64)_t|u?int(?:max|ptr)_t"
    r"|s?size_t|ptrdiff_t|wchar_t|char(?:8|16|32)_t|_Bool|bool"
    r")"
)


class PointeeKind(Enum):
    """Classification of a referent type."""
    BASIC = auto()
    COMPOSITE = auto()
    UNKNOWN = auto()


class Shape(Enum):
    POINTER = auto()
    NON_POINTER = auto()


@dataclass(frozen=True)
class ResolvedType:
    """
    Immutable snapshot of a Cppcheck ValueType.

    Attributes
    ----------
    base          : ``valueType.type`` (``"int"``, ``"record"``, ...)
    sign          : ``"signed"``, ``"unsigned"`` or ``""``
    pointer       : pointer depth; 0 for a value
    original_name : alias spelling (``originalTypeName``), ``""`` if none
    scope_name    : class name of ``typeScope`` for records, ``""`` if none
    """
    base: str
    sign: str = ""
    pointer: int = 0
    original_name: str = ""
    scope_name: str = ""

    @classmethod
    def from_value_type(cls, vt: Any) -> Optional[ResolvedType]:
        """Convert a cppcheckdata.ValueType, or return None when unresolved."""
        if vt is None:
            return None
        base = getattr(vt, "type", None) or ""
        if not base:
            return None
        try:
            pointer = int(getattr(vt, "pointer", 0) or 0)
        except (TypeError, ValueError):
            return None
        scope = getattr(vt, "typeScope", None)
        return cls(
            base=base,
            sign=getattr(vt, "sign", None) or "",
            pointer=pointer,
            original_name=getattr(vt, "originalTypeName", None) or "",
            scope_name=(getattr(scope, "className", None) or "") if scope else "",
        )

    @property
    def is_pointer(self) -> bool:
        return self.pointer > 0

    def dereference(self) -> ResolvedType:
        """
        The referent type: one pointer level removed.

        The alias is only carried over when it is a standard scalar typedef;
        otherwise it may name the pointer type and the referent is spelled
        from its representation.
        """
        original_name = self.original_name
        if self.pointer > 0 and not SCALAR_ALIAS.fullmatch(original_name.strip()):
            original_name = ""
        return ResolvedType(
            base=self.base,
            sign=self.sign,
            pointer=max(self.pointer - 1, 0),
            original_name=original_name,
            scope_name=self.scope_name,
        )

    def spelling(self) -> str:
        """Human-readable type name used in diagnostics."""
        if self.original_name:
            name = self.original_name
        elif self.base == "record" and self.scope_name:
            name = self.scope_name
        elif self.sign == "unsigned":
            name = f"unsigned {self.base}"
        else:
            # "signed" is the default spelling for every integer type, and
            # Cppcheck reports plain char as signed on most platforms.
            name = self.base
        if self.pointer and not name.rstrip().endswith("*"):
            name = f"{name} {'*' * self.pointer}"
        return name


@dataclass(frozen=True)
class TypeClass:
    """
    Result of :func:`classify`.

    ``shape`` is POINTER or NON_POINTER.  For a pointer, ``inner`` is the
    pointee; for a non-pointer it is the expression's own type.  ``inner``
    is None when the type could not be resolved.
    """
    shape: Shape
    inner: Optional[ResolvedType] = None

    @property
    def is_pointer(self) -> bool:
        return self.shape is Shape.POINTER


NON_POINTER = TypeClass(Shape.NON_POINTER)


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — TYPE INFORMATION LOOKUP
# ═════════════════════════════════════════════════════════════════════════

class TypeInfo(ABC):
    """Read-only lookup from expression token to resolved value type."""

    @abstractmethod
    def type_of(self, tok: Token) -> Optional[Any]:
        """Return the token's ValueType, or None when unresolved."""
        ...

    def resolve(self, tok: Token) -> Optional[ResolvedType]:
        return ResolvedType.from_value_type(self.type_of(tok))


class ValueTypeInfo(TypeInfo):
    """Type information recorded by Cppcheck on each token."""

    def type_of(self, tok: Token) -> Optional[Any]:
        return tok_value_type(tok)


class MappingTypeInfo(TypeInfo):
    """Type information from an explicit ``{token: value_type}`` mapping.

    A token missing from the mapping is unresolved even if it carries its
    own ``valueType``.
    """

    def __init__(self, types: Mapping[Any, Any]) -> None:
        self._types = dict(types)

    def type_of(self, tok: Token) -> Optional[Any]:
        if tok is None:
            return None
        return self._types.get(tok)


DEFAULT_TYPE_INFO: TypeInfo = ValueTypeInfo()


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — CLASSIFICATION
# ═════════════════════════════════════════════════════════════════════════

def _is_string_container(rt: ResolvedType) -> bool:
    name = rt.original_name or rt.scope_name
    if not name:
        return False
    name = name.replace("const ", "").replace("volatile ", "").strip()
    # std::basic_string<char, ...> and friends
    name = name.split("<", 1)[0].strip()
    if not name.startswith("std::") and f"std::{name}" in STRING_CONTAINERS:
        return True
    return name in STRING_CONTAINERS


def kind_of(rt: Optional[ResolvedType]) -> PointeeKind:
    """
    Classify a resolved type.

    Parameters
    ----------
    rt : ResolvedType or None

    Returns
    -------
    BASIC for primitive scalars and strings, COMPOSITE for structured
    types and remaining pointer levels, UNKNOWN when unresolved or when
    Cppcheck only knows the type as ``nonstd`` / ``pod`` / ``unknown``.
    """
    if rt is None:
        return PointeeKind.UNKNOWN
    if rt.is_pointer:
        return PointeeKind.COMPOSITE
    if rt.base in BASIC_TYPES:
        return PointeeKind.BASIC
    if rt.base == "container" and _is_string_container(rt):
        return PointeeKind.BASIC
    if rt.base in COMPOSITE_TYPES:
        return PointeeKind.COMPOSITE
    return PointeeKind.UNKNOWN


def classify(tok: Token, type_info: Optional[TypeInfo] = None) -> TypeClass:
    """Pointer(inner) or NonPointer for an expression token."""
    info = type_info or DEFAULT_TYPE_INFO
    rt = info.resolve(tok)
    if rt is None:
        return NON_POINTER
    if rt.is_pointer:
        return TypeClass(Shape.POINTER, rt.dereference())
    return TypeClass(Shape.NON_POINTER, rt)


def is_pointer(tok: Token, type_info: Optional[TypeInfo] = None) -> bool:
    """True iff the token's static type is a pointer; unresolved is False."""
    return classify(tok, type_info).is_pointer


def pointee_kind(tok: Token, type_info: Optional[TypeInfo] = None) -> PointeeKind:
    """
    Kind of the value a pointer expression refers to.

    For a non-pointer the expression's own type is classified instead.
    """
    return kind_of(classify(tok, type_info).inner)


def pointee_name(tok: Token, type_info: Optional[TypeInfo] = None) -> str:
    """Spelling of the pointee (or own) type, ``"?"`` when unresolved."""
    inner = classify(tok, type_info).inner
    if inner is None:
        return "?"
    return inner.spelling()


__all__ = [
    "BASIC_TYPES",
    "COMPOSITE_TYPES",
    "STRING_CONTAINERS",
    "SCALAR_ALIAS",
    "PointeeKind",
    "Shape",
    "ResolvedType",
    "TypeClass",
    "TypeInfo",
    "ValueTypeInfo",
    "MappingTypeInfo",
    "kind_of",
    "classify",
    "is_pointer",
    "pointee_kind",
    "pointee_name",
]
