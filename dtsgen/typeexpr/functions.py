"""Parser for Lua `fun(...)` signatures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .scanner import clean_return_text, find_matching, split_top_level
from .translator import GENERIC_CALLABLE, VOID, multi_return, translate_type

RECEIVER_PARAM = "self"
VOID_RECEIVER = "void"

RESERVED_PARAM_NAMES = frozenset(
    {
        "break", "case", "catch", "class", "const", "continue", "debugger",
        "default", "delete", "do", "else", "enum", "export", "extends", "false",
        "finally", "for", "function", "if", "import", "in", "instanceof", "new",
        "null", "return", "super", "switch", "this", "throw", "true", "try",
        "typeof", "var", "void", "while", "with", "yield",
    }
)

RESERVED_METHOD_NAMES = frozenset(
    {"new", "delete", "default", "class", "function", "return", "typeof", "import", "export"}
)


@dataclass(frozen=True)
class FunctionParam:
    """One positional parameter, already translated to TypeScript."""

    name: str
    type: str
    optional: bool = False
    variadic: bool = False

    def render(self) -> str:
        if self.variadic:
            return f"...{self.name}: {self.type}"
        mark = "?" if self.optional else ""
        return f"{self.name}{mark}: {self.type}"


@dataclass(frozen=True)
class FunctionSignature:
    """Structured `fun(...)` type.

    `receiver_type` is None for functions without a `self` parameter; such
    signatures render an explicit `this: void` so TypeScriptToLua emits a
    plain `.` call instead of a method call.
    """

    receiver_type: Optional[str] = None
    params: Tuple[FunctionParam, ...] = ()
    return_type: str = VOID
    generic: bool = field(default=False, compare=False)

    def render_params(self) -> str:
        receiver = self.receiver_type if self.receiver_type is not None else VOID_RECEIVER
        rendered = [f"this: {receiver}"]
        rendered.extend(param.render() for param in self.params)
        return ", ".join(rendered)

    def render_callable(self) -> str:
        if self.generic:
            return GENERIC_CALLABLE
        return f"({self.render_params()}) => {self.return_type}"

    def render_method(self, name: str) -> str:
        method_name = f'"{name}"' if name in RESERVED_METHOD_NAMES else name
        if self.generic:
            return f"{method_name}(this: void, ...args: any[]): any"
        return f"{method_name}({self.render_params()}): {self.return_type}"


@dataclass(frozen=True)
class _RawParam:
    name: str
    type: str
    optional: bool = False
    variadic: bool = False


def parse_function_type(expr: str) -> FunctionSignature:
    """Parse `fun(self: T, a: number, ...: any): R1, R2` into a signature."""
    expr = expr.strip()
    start = expr.find("(")
    end = find_matching(expr, start) if start != -1 else None
    if end is None:
        return FunctionSignature(generic=True)

    raw_params = _parse_params(expr[start + 1 : end])
    return_type = _parse_return(expr[end + 1 :].strip())

    receiver: Optional[str] = None
    params: List[FunctionParam] = []
    for raw in raw_params:
        if raw.name == RECEIVER_PARAM and receiver is None:
            receiver = translate_type(raw.type)
            continue
        params.append(
            FunctionParam(
                name=_sanitize_param_name(raw.name),
                type=translate_type(raw.type),
                optional=raw.optional,
                variadic=raw.variadic,
            )
        )
    return FunctionSignature(receiver_type=receiver, params=tuple(params), return_type=return_type)


def declares_receiver(expr: str) -> bool:
    """True when a `fun(...)` type lists a `self` parameter."""
    expr = expr.strip()
    start = expr.find("(")
    end = find_matching(expr, start) if start != -1 else None
    if end is None:
        return False
    return any(raw.name == RECEIVER_PARAM for raw in _parse_params(expr[start + 1 : end]))


def _parse_return(rest: str) -> str:
    if not rest.startswith(":"):
        return VOID
    cleaned = clean_return_text(rest[1:])
    parts = split_top_level(cleaned, ",")
    if len(parts) > 1:
        return multi_return(translate_type(part) for part in parts)
    return translate_type(cleaned)


def _parse_params(params_text: str) -> List[_RawParam]:
    params: List[_RawParam] = []
    for part in split_top_level(params_text, ","):
        if part.startswith("..."):
            name, colon, param_type = part[3:].partition(":")
            element = param_type.strip() if colon else "any"
            params.append(
                _RawParam(name=name.strip() or "args", type=f"{element}[]", variadic=True)
            )
            continue

        name, colon, param_type = part.partition(":")
        name = name.strip()
        if not colon:
            params.append(_RawParam(name=name, type="any"))
            continue
        param_type = param_type.strip()
        optional = name.endswith("?") or param_type.endswith("?")
        if optional:
            name = name.rstrip("?")
            param_type = param_type.rstrip("?")
        params.append(_RawParam(name=name, type=param_type, optional=optional))
    return params


def _sanitize_param_name(name: str) -> str:
    return f"_{name}" if name in RESERVED_PARAM_NAMES else name


__all__ = [
    "FunctionParam",
    "FunctionSignature",
    "RESERVED_METHOD_NAMES",
    "declares_receiver",
    "parse_function_type",
]
