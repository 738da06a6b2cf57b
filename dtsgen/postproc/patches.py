"""Idempotent text patches applied to emitted declarations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence, Tuple

from ..typeexpr.translator import multi_return


class Patch(Protocol):
    """Anything that rewrites declaration text."""

    def apply(self, text: str) -> str:  # pragma: no cover - protocol
        ...


@dataclass(frozen=True)
class RegexPatch:
    """Plain `re.sub` replacement; `count=0` replaces every match."""

    pattern: str
    replacement: str
    count: int = 0

    def apply(self, text: str) -> str:
        return re.sub(self.pattern, self.replacement, text, count=self.count)


@dataclass(frozen=True)
class TupleReturnRestorer:
    """Restore tuple returns that description stripping cut short.

    A return such as `(boolean, CCFlagMask, Milliseconds, ...)` followed by
    prose is truncated to `(boolean, CCFlagMask,` and passed through as-is,
    leaving `name(...): (boolean, CCFlagMask,;` in the output. Each family
    maps method names to the tuple shape those methods are known to return.
    """

    families: Mapping[Tuple[str, ...], Tuple[str, ...]] = field(default_factory=dict)

    def apply(self, text: str) -> str:
        for methods, shape in self.families.items():
            replacement = f"\\1: {multi_return(shape)};"
            for method in methods:
                pattern = rf"\b({re.escape(method)}\([^)]*\)):\s*\([^;]*,;"
                text = re.sub(pattern, replacement, text)
        return text


@dataclass(frozen=True)
class FunctionUnionParenthesizer:
    """Wrap a function alternative in parentheses for the listed members.

    `vec2: vec2 | (this: void, x: number) => vec2;` parses as a function
    returning a union; the fixed form is
    `vec2: vec2 | ((this: void, x: number) => vec2);`.
    """

    members: Sequence[str] = ()

    def apply(self, text: str) -> str:
        for member in self.members:
            name = re.escape(member)
            text = re.sub(
                rf"(?m)^(\s*{name}\??: [^;\n]*?) \| (\(this: [^;\n]*\) => [^;|\n]+);$",
                r"\1 | (\2);",
                text,
            )
            text = re.sub(
                rf"(?m)^(type {name} = [^;\n]*?) \| (\(this: [^;\n]*\) => [^;|\n]+);$",
                r"\1 | (\2);",
                text,
            )
        return text


@dataclass(frozen=True)
class EventHandlerSignatureFix:
    """Normalise subscription methods that return an unsubscribe callback.

    The annotations describe the callback loosely; the fixed signature takes
    `cb: (this: void, ev: any) => void` and returns `() => void`.
    """

    handlers: Sequence[str] = ()
    callback: str = "cb: (this: void, ev: any) => void"
    lead: str = "cb"

    def apply(self, text: str) -> str:
        for handler in self.handlers:
            pattern = (
                rf"\b{re.escape(handler)}\(this: void, {self.lead}: .*?\): "
                r"\(this: void\) => void;"
            )
            text = re.sub(pattern, f"{handler}(this: void, {self.callback}): () => void;", text)
        return text


@dataclass(frozen=True)
class PatchChain:
    """Ordered sequence of patches applied as one."""

    patches: Tuple[Patch, ...] = ()

    def apply(self, text: str) -> str:
        for patch in self.patches:
            text = patch.apply(text)
        return text


__all__ = [
    "EventHandlerSignatureFix",
    "FunctionUnionParenthesizer",
    "Patch",
    "PatchChain",
    "RegexPatch",
    "TupleReturnRestorer",
]
