"""Depth-aware scanning helpers for Lua type expressions.

Type expressions nest through `()`, `[]`, `{}` and `<>`. Every helper here
walks the text with an explicit delimiter stack so that separators inside a
nested group (the `,` in `table<string, number>` or the `|` inside
`fun(a: string|nil)`) are never mistaken for top-level syntax.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

OPENERS = "([{<"
CLOSERS = ")]}>"

_CAPITALISED_DESCRIPTION = re.compile(r" [A-Z][a-z]")
_TRAILING_BARE_WORD = re.compile(r" ([a-z_]\w*)$")
_WORD_THEN_WORD = re.compile(r"[>\]\w]\s+\w")

TYPE_KEYWORDS = frozenset(
    {
        "nil",
        "string",
        "number",
        "boolean",
        "integer",
        "any",
        "void",
        "table",
        "function",
        "userdata",
    }
)


def split_top_level(text: str, separator: str) -> List[str]:
    """Split on `separator` only where no delimiter group is open.

    Parts are trimmed and empty parts are dropped, so a dangling separator
    (`"boolean,"`) yields a single part.
    """
    parts: List[str] = []
    stack: List[str] = []
    current: List[str] = []
    for char in text:
        if char in OPENERS:
            stack.append(char)
        elif char in CLOSERS:
            # Stray closers are tolerated so malformed input never raises.
            if stack:
                stack.pop()
        elif char == separator and not stack:
            part = "".join(current).strip()
            if part:
                parts.append(part)
            current = []
            continue
        current.append(char)
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return parts


def find_matching(text: str, start: int) -> Optional[int]:
    """Return the index of the closer matching the opener at `start`."""
    if start < 0 or start >= len(text) or text[start] not in OPENERS:
        return None
    stack: List[str] = []
    for index in range(start, len(text)):
        char = text[index]
        if char in OPENERS:
            stack.append(char)
        elif char in CLOSERS and stack:
            stack.pop()
            if not stack:
                return index
    return None


def is_fully_enclosed(text: str) -> bool:
    """True when `text` is `( ... )` and the first paren closes at the end."""
    if not (text.startswith("(") and text.endswith(")")):
        return False
    return find_matching(text, 0) == len(text) - 1


def strip_inline_comment(text: str) -> str:
    """Drop a trailing ` --` Lua comment or a double-space `#` note."""
    text = text.strip()
    comment_index = text.find(" --")
    if comment_index != -1:
        text = text[:comment_index].strip()
    hash_index = text.find("  #")
    if hash_index != -1:
        text = text[:hash_index].strip()
    return text


def clean_return_text(text: str) -> str:
    """Heuristically strip an embedded natural-language description.

    This is lossy on purpose: tuple returns followed by prose can be cut
    mid-tuple (`(boolean, Milliseconds, ...` becomes `(boolean,`). The
    per-module patches in :mod:`dtsgen.postproc` restore the known cases.
    """
    text = strip_inline_comment(text)
    match = _CAPITALISED_DESCRIPTION.search(text)
    if match:
        text = text[: match.start()].strip()
    trailing = _TRAILING_BARE_WORD.search(text)
    if trailing and trailing.group(1) not in TYPE_KEYWORDS:
        text = text[: trailing.start()].strip()
    if _WORD_THEN_WORD.search(text):
        return "any"
    return text


def leading_type(text: str) -> Tuple[str, str]:
    """Split `text` into a leading type expression and trailing free text.

    Top-level whitespace ends the type unless it is glued by a union bar, a
    return colon or a comma (`string | nil`, `fun(a: number): boolean`).
    """
    tokens: List[str] = []
    stack: List[str] = []
    current: List[str] = []
    for char in text.strip():
        if char in OPENERS:
            stack.append(char)
        elif char in CLOSERS and stack:
            stack.pop()
        if char.isspace() and not stack:
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(char)
    if current:
        tokens.append("".join(current))

    taken: List[str] = []
    for position, token in enumerate(tokens):
        if taken and not (taken[-1].endswith(("|", ":", ",")) or token.startswith("|")):
            return " ".join(taken), " ".join(tokens[position:])
        taken.append(token)
    return " ".join(taken), ""


__all__ = [
    "TYPE_KEYWORDS",
    "clean_return_text",
    "find_matching",
    "is_fully_enclosed",
    "leading_type",
    "split_top_level",
    "strip_inline_comment",
]
