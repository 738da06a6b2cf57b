"""Translate Lua type expressions into TypeScript type syntax."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

from .scanner import is_fully_enclosed, split_top_level, strip_inline_comment

VOID = "void"
NULLABLE_SUFFIX = " | null"
UNDEFINED_SUFFIX = " | undefined"
GENERIC_CALLABLE = "(...args: any[]) => any"
MULTI_RETURN_FMT = "LuaMultiReturn<[{items}]>"

PRIMITIVES: Dict[str, str] = {
    "number": "number",
    "integer": "number",
    "string": "string",
    "boolean": "boolean",
    "any": "any",
    "userdata": "unknown",
    "table": "object",
    "function": GENERIC_CALLABLE,
}

_TRAILING_NIL = re.compile(r"\|\s*nil$")


def is_function_type(expr: str) -> bool:
    """True when `expr` starts with the Lua function-type marker."""
    return expr.startswith("fun(") or expr.startswith("fun ")


def multi_return(types: Iterable[str]) -> str:
    return MULTI_RETURN_FMT.format(items=", ".join(types))


def translate_type(expr: str) -> str:
    """Translate a Lua annotation type into its TypeScript equivalent.

    Rules apply in a fixed precedence and the first match wins; anything
    unrecognised is passed through untouched.
    """
    lua_type = strip_inline_comment(expr)

    if not lua_type or lua_type == "nil":
        return VOID

    if lua_type.endswith("| nil") or lua_type.endswith("|nil"):
        base = _TRAILING_NIL.sub("", lua_type).strip()
        return translate_type(base) + NULLABLE_SUFFIX

    primitive = PRIMITIVES.get(lua_type)
    if primitive is not None:
        return primitive

    if lua_type.endswith("?") and "|" not in lua_type:
        return translate_type(lua_type[:-1]) + UNDEFINED_SUFFIX

    if "|" in lua_type:
        parts = split_top_level(lua_type, "|")
        if len(parts) > 1:
            return " | ".join(_unique(translate_type(part) for part in parts))

    if is_fully_enclosed(lua_type):
        inner = lua_type[1:-1]
        parts = split_top_level(inner, ",")
        if len(parts) > 1:
            return multi_return(translate_type(part) for part in parts)
        return translate_type(inner)

    if lua_type.endswith("[]") and len(lua_type) > 2:
        element = translate_type(lua_type[:-2])
        if " | " in element or "=>" in element:
            element = f"({element})"
        return element + "[]"

    if lua_type.startswith("table<") and lua_type.endswith(">"):
        parts = split_top_level(lua_type[6:-1], ",")
        if len(parts) == 2:
            return f"Record<{translate_type(parts[0])}, {translate_type(parts[1])}>"

    if is_function_type(lua_type):
        # Imported lazily: the function parser translates its own parameters.
        from .functions import parse_function_type

        return parse_function_type(lua_type).render_callable()

    return lua_type


def translate_alias(body: str) -> str:
    """Translate an `@alias` body, which may be an object literal or a union of functions."""
    lua_type = body.strip()

    if lua_type.startswith("{") and lua_type.endswith("}"):
        inner = lua_type[1:-1].strip()
        if not inner:
            return "{}"
        members: List[str] = []
        for part in split_top_level(inner, ","):
            name, colon, field_type = part.partition(":")
            if not colon:
                continue
            members.append(f"{name.strip()}: {translate_type(field_type.strip())}")
        return "{ " + "; ".join(members) + " }"

    if "|" in lua_type and "fun(" in lua_type:
        from .functions import parse_function_type

        converted: List[str] = []
        for part in split_top_level(lua_type, "|"):
            if is_function_type(part):
                converted.append(f"({parse_function_type(part).render_callable()})")
            else:
                converted.append(translate_type(part))
        return " | ".join(_unique(converted))

    return translate_type(lua_type)


def _unique(items: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return list(seen)


__all__ = [
    "GENERIC_CALLABLE",
    "PRIMITIVES",
    "VOID",
    "is_function_type",
    "multi_return",
    "translate_alias",
    "translate_type",
]
