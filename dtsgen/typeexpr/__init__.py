"""Lua annotation type expressions and their TypeScript translation."""

from .functions import FunctionParam, FunctionSignature, declares_receiver, parse_function_type
from .scanner import clean_return_text, split_top_level
from .translator import is_function_type, translate_alias, translate_type

__all__ = [
    "FunctionParam",
    "FunctionSignature",
    "clean_return_text",
    "declares_receiver",
    "is_function_type",
    "parse_function_type",
    "split_top_level",
    "translate_alias",
    "translate_type",
]
