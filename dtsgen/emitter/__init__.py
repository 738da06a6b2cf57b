"""Declaration emission for parsed annotation models."""

from .declarations import DeclarationEmitter, filter_classes, matches_filter, resolve_main_export
from .enums import is_enum_like, render_enum

__all__ = [
    "DeclarationEmitter",
    "filter_classes",
    "is_enum_like",
    "matches_filter",
    "render_enum",
    "resolve_main_export",
]
