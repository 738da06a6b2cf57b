"""Module-specific post-processing of emitted declarations."""

from __future__ import annotations

from .modules import MODULE_PATCHES
from .patches import (
    EventHandlerSignatureFix,
    FunctionUnionParenthesizer,
    PatchChain,
    RegexPatch,
    TupleReturnRestorer,
)


def apply_post_processing(module_name: str, text: str) -> str:
    """Apply the patch chain registered for `module_name`; other modules pass through."""
    chain = MODULE_PATCHES.get(module_name)
    if chain is None:
        return text
    return chain.apply(text)


__all__ = [
    "EventHandlerSignatureFix",
    "FunctionUnionParenthesizer",
    "MODULE_PATCHES",
    "PatchChain",
    "RegexPatch",
    "TupleReturnRestorer",
    "apply_post_processing",
]
