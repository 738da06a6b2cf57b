"""LuaCATS annotation parsing."""

from .builder import ModelBuilder, ParserContext, apply_directive, parse_annotations, parse_lines
from .lines import Directive, tokenize_line

__all__ = [
    "Directive",
    "ModelBuilder",
    "ParserContext",
    "apply_directive",
    "parse_annotations",
    "parse_lines",
    "tokenize_line",
]
