"""Render a parsed annotation model as a TypeScript declaration unit."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Set

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..logging import get_logger
from ..models import ModuleConfig, ParsedClass, ParseResult
from ..typeexpr.functions import parse_function_type
from ..typeexpr.translator import translate_alias, translate_type
from .enums import doc_comment, is_enum_like, render_enum

TEMPLATE_NAME = "declaration.d.ts.j2"

logger = get_logger("emitter")


def matches_filter(class_name: str, patterns: Sequence[str]) -> bool:
    """Exact match, or prefix match for patterns ending in `*`."""
    for pattern in patterns:
        if pattern.endswith("*"):
            if class_name.startswith(pattern[:-1]):
                return True
        elif class_name == pattern:
            return True
    return False


def filter_classes(
    classes: Mapping[str, ParsedClass], patterns: Sequence[str] | None
) -> Dict[str, ParsedClass]:
    if not patterns:
        return dict(classes)
    return {name: cls for name, cls in classes.items() if matches_filter(name, patterns)}


def resolve_main_export(
    config: ModuleConfig, result: ParseResult, classes: Mapping[str, ParsedClass]
) -> Optional[str]:
    """Configured export first, then an `@type` hint naming an emitted class."""
    if config.main_export:
        return config.main_export
    detected = result.detected_main_export
    if detected and detected in classes:
        return detected
    return None


class DeclarationEmitter:
    """Builds `.d.ts` text: aliases, enums, interfaces, then global and module bindings."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )

    def render(self, result: ParseResult, config: ModuleConfig) -> str:
        classes = filter_classes(result.classes, config.filter_classes)
        enum_names: Set[str] = {name for name, cls in classes.items() if is_enum_like(cls)}

        blocks: List[str] = [render_enum(classes[name]) for name in classes if name in enum_names]
        blocks.extend(
            self.render_interface(cls, enum_names)
            for name, cls in classes.items()
            if name not in enum_names
        )

        main_export = resolve_main_export(config, result, classes)
        logger.debug(
            "Emitting %s: %d aliases, %d enums, %d interfaces, export=%s",
            config.name,
            len(result.aliases),
            len(enum_names),
            len(classes) - len(enum_names),
            main_export,
        )

        template = self._env.get_template(TEMPLATE_NAME)
        rendered = template.render(
            source_file=config.source_file,
            module_name=config.name,
            aliases=[
                {"name": alias.name, "type": translate_alias(alias.raw_type_expression)}
                for alias in result.aliases.values()
            ],
            blocks=blocks,
            global_binding=bool(config.declare_global_var and main_export),
            main_export=main_export,
        )
        return rendered.rstrip() + "\n"

    @staticmethod
    def render_interface(cls: ParsedClass, enum_names: Set[str]) -> str:
        lines: List[str] = [f"interface {cls.name} {{"]

        for signature in cls.index_signatures:
            key_type = translate_type(signature.key_type)
            value_type = translate_type(signature.value_type)
            lines.append(f"  [key: {key_type}]: {value_type};")

        for data_field in cls.data_fields:
            if data_field.description:
                lines.append(f"  {doc_comment(data_field.description)}")
            ts_type = translate_type(data_field.type_expression)
            if ts_type in enum_names:
                ts_type = f"typeof {ts_type}"
            mark = "?" if data_field.optional else ""
            lines.append(f"  {data_field.name}{mark}: {ts_type};")

        for method in cls.fields:
            if method.description:
                lines.append(f"  {doc_comment(method.description)}")
            signature = parse_function_type(method.type_expression)
            lines.append(f"  {signature.render_method(method.name)};")

        lines.append("}")
        return "\n".join(lines)


__all__ = [
    "DeclarationEmitter",
    "filter_classes",
    "matches_filter",
    "resolve_main_export",
]
