"""Enum detection for parsed classes."""

from __future__ import annotations

from typing import List

from ..models import ParsedClass
from ..typeexpr.translator import translate_type

_ENUM_MEMBER_TYPE = "number"


def is_enum_like(cls: ParsedClass) -> bool:
    """True for classes made only of numeric data fields.

    Any method or index signature disqualifies the class. Purely numeric
    data tables that are not conceptually enumerations are classified as
    enums as well.
    """
    if not cls.data_fields or cls.fields or cls.index_signatures:
        return False
    return all(
        translate_type(data_field.type_expression) == _ENUM_MEMBER_TYPE
        for data_field in cls.data_fields
    )


def render_enum(cls: ParsedClass) -> str:
    """Render a `declare enum` block; members auto-number in declaration order."""
    lines: List[str] = [f"declare enum {cls.name} {{"]
    for data_field in cls.data_fields:
        if data_field.description:
            lines.append(f"  {doc_comment(data_field.description)}")
        lines.append(f"  {data_field.name},")
    lines.append("}")
    return "\n".join(lines)


def doc_comment(text: str) -> str:
    escaped = text.replace("*/", "*\\/")
    return f"/** {escaped} */"


__all__ = ["doc_comment", "is_enum_like", "render_enum"]
