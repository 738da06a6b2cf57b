"""Tokenizer turning raw Lua source lines into annotation directives."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..typeexpr.scanner import clean_return_text, leading_type
from ..typeexpr.translator import is_function_type

DOC_MARKER = "---"

_FUNCTION_DOT = re.compile(r"^function\s+((?:\w+\.)*\w+)\.(\w+)\s*\(([^)]*)\)")
_FUNCTION_COLON = re.compile(r"^function\s+((?:\w+\.)*\w+):(\w+)\s*\(([^)]*)\)")
_NESTED_ASSIGNMENT = re.compile(r"^(\w+)\.(\w+)\s*=\s*\{\s*\}$")

_TYPE = re.compile(r"^@type\s+(\w+)")
_ALIAS = re.compile(r"^@alias\s+(\w+)\s+(.+)$")
_CLASS = re.compile(r"^@class\s+(\w+)")
_PARAM = re.compile(r"^@param\s+(\.\.\.|\w+\??)\s+(.+)$")
_RETURN = re.compile(r"^@return\s+(.+)$")
_SCOPE = r"(?:(?:public|private|protected|package)\s+)?"
_INDEX_FIELD = re.compile(rf"^@field\s+{_SCOPE}\[(\w+)\]\s+(.+)$")
_FIELD = re.compile(rf"^@field\s+{_SCOPE}(\w+\??)\s+(.+)$")
_INLINE_DESCRIPTION = re.compile(r" [A-Z][a-z]")


@dataclass(frozen=True)
class ClassDirective:
    name: str


@dataclass(frozen=True)
class AliasDirective:
    name: str
    body: str


@dataclass(frozen=True)
class TypeHint:
    name: str


@dataclass(frozen=True)
class ParamDirective:
    name: str
    type_expression: str
    optional: bool = False


@dataclass(frozen=True)
class ReturnDirective:
    type_expression: str


@dataclass(frozen=True)
class IndexFieldDirective:
    key_type: str
    value_type: str


@dataclass(frozen=True)
class FieldDirective:
    name: str
    type_expression: str
    optional: bool = False
    inline_description: Optional[str] = None

    @property
    def is_function(self) -> bool:
        return is_function_type(self.type_expression)


@dataclass(frozen=True)
class DescriptionLine:
    text: str


@dataclass(frozen=True)
class FunctionDeclaration:
    """`function Class.method(a, b)` (dot form) or `function Class:method(a, b)` (colon form)."""

    class_name: str
    method: str
    params: Tuple[str, ...] = ()
    colon: bool = False


@dataclass(frozen=True)
class NestedAssignment:
    """`Outer.Inner = {}` declaring a nested table under the active class."""

    outer: str
    inner: str


@dataclass(frozen=True)
class Flush:
    """Code line that discards pending annotations."""


@dataclass(frozen=True)
class Passive:
    """Line with no effect on the parser state."""


Directive = Union[
    ClassDirective,
    AliasDirective,
    TypeHint,
    ParamDirective,
    ReturnDirective,
    IndexFieldDirective,
    FieldDirective,
    DescriptionLine,
    FunctionDeclaration,
    NestedAssignment,
    Flush,
    Passive,
]

FLUSH = Flush()
PASSIVE = Passive()


def tokenize_line(line: str) -> Directive:
    """Classify one source line."""
    stripped = line.strip()

    declaration = _match_declaration(stripped)
    if declaration is not None:
        return declaration

    nested = _NESTED_ASSIGNMENT.match(stripped)
    if nested:
        return NestedAssignment(outer=nested.group(1), inner=nested.group(2))

    if not stripped.startswith(DOC_MARKER):
        if not stripped or stripped.startswith("--") or stripped.startswith("_G."):
            return PASSIVE
        return FLUSH

    content = stripped[len(DOC_MARKER) :].strip()
    if content.startswith("@"):
        return _parse_annotation(content)
    if content:
        return DescriptionLine(text=content)
    return PASSIVE


def _match_declaration(stripped: str) -> Optional[FunctionDeclaration]:
    for pattern, colon in ((_FUNCTION_DOT, False), (_FUNCTION_COLON, True)):
        match = pattern.match(stripped)
        if match:
            class_path, method, params_text = match.groups()
            params = tuple(name.strip() for name in params_text.split(",") if name.strip())
            return FunctionDeclaration(
                class_name=class_path.split(".")[-1],
                method=method,
                params=params,
                colon=colon,
            )
    return None


def _parse_annotation(content: str) -> Directive:
    match = _TYPE.match(content)
    if match:
        return TypeHint(name=match.group(1))

    match = _ALIAS.match(content)
    if match:
        return AliasDirective(name=match.group(1), body=match.group(2).strip())

    match = _CLASS.match(content)
    if match:
        return ClassDirective(name=match.group(1))

    match = _PARAM.match(content)
    if match:
        name = match.group(1)
        type_expression, _ = leading_type(match.group(2))
        return ParamDirective(
            name=name.rstrip("?"), type_expression=type_expression, optional=name.endswith("?")
        )

    match = _RETURN.match(content)
    if match:
        return ReturnDirective(type_expression=clean_return_text(match.group(1)))

    match = _INDEX_FIELD.match(content)
    if match:
        return IndexFieldDirective(key_type=match.group(1), value_type=match.group(2).strip())

    match = _FIELD.match(content)
    if match:
        return _field_directive(match.group(1), match.group(2).strip())

    # Unknown or malformed directives (`@diagnostic`, `@see`, ...) are ignored.
    return PASSIVE


def _field_directive(raw_name: str, type_expression: str) -> FieldDirective:
    optional = raw_name.endswith("?")
    name = raw_name.rstrip("?")
    inline_description: Optional[str] = None
    if not is_function_type(type_expression):
        match = _INLINE_DESCRIPTION.search(type_expression)
        if match:
            inline_description = type_expression[match.start() :].strip()
            type_expression = type_expression[: match.start()].strip()
    return FieldDirective(
        name=name,
        type_expression=type_expression,
        optional=optional,
        inline_description=inline_description,
    )


__all__ = [
    "AliasDirective",
    "ClassDirective",
    "DescriptionLine",
    "Directive",
    "FieldDirective",
    "Flush",
    "FunctionDeclaration",
    "IndexFieldDirective",
    "NestedAssignment",
    "ParamDirective",
    "Passive",
    "ReturnDirective",
    "TypeHint",
    "tokenize_line",
]
