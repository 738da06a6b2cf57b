"""Generate TypeScript declarations from LuaCATS annotations."""

from .annotations import parse_annotations
from .emitter import DeclarationEmitter
from .models import ModuleConfig, ParseResult, TranslationOutcome
from .translate import translate
from .typeexpr import parse_function_type, translate_type

__version__ = "0.1.0"

__all__ = [
    "DeclarationEmitter",
    "ModuleConfig",
    "ParseResult",
    "TranslationOutcome",
    "parse_annotations",
    "parse_function_type",
    "translate",
    "translate_type",
]
