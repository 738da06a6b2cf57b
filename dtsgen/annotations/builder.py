"""Fold annotation directives into a :class:`~dtsgen.models.ParseResult`.

The parser state lives in an immutable :class:`ParserContext` that each step
replaces, while the accumulated classes and aliases are owned by a
:class:`ModelBuilder` for the duration of a single parse.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Tuple

from ..models import Alias, IndexSignature, ParsedClass, ParsedDataField, ParsedField, ParseResult
from ..typeexpr.functions import declares_receiver
from .lines import (
    AliasDirective,
    ClassDirective,
    DescriptionLine,
    Directive,
    FieldDirective,
    Flush,
    FunctionDeclaration,
    IndexFieldDirective,
    NestedAssignment,
    ParamDirective,
    ReturnDirective,
    TypeHint,
    tokenize_line,
)


@dataclass(frozen=True)
class PendingParam:
    name: str
    type_expression: str
    optional: bool = False


@dataclass(frozen=True)
class ParserContext:
    """Annotations collected since the last declaration or flush."""

    current_class: Optional[str] = None
    pending_params: Tuple[PendingParam, ...] = ()
    pending_return: Optional[str] = None
    description: Tuple[str, ...] = ()

    def flushed(self) -> "ParserContext":
        return replace(self, pending_params=(), pending_return=None, description=())

    def description_text(self) -> Optional[str]:
        return " ".join(self.description) or None

    def find_param(self, name: str) -> Optional[PendingParam]:
        for param in self.pending_params:
            if param.name == name:
                return param
        return None


@dataclass
class _ClassDraft:
    name: str
    fields: List[ParsedField] = field(default_factory=list)
    data_fields: List[ParsedDataField] = field(default_factory=list)
    index_signatures: List[IndexSignature] = field(default_factory=list)

    def freeze(self) -> ParsedClass:
        return ParsedClass(
            name=self.name,
            fields=tuple(self.fields),
            data_fields=tuple(self.data_fields),
            index_signatures=tuple(self.index_signatures),
        )


class ModelBuilder:
    """Accumulates classes and aliases for one annotated source unit."""

    def __init__(self) -> None:
        self._classes: Dict[str, _ClassDraft] = {}
        self._aliases: Dict[str, Alias] = {}
        self._detected_main_export: Optional[str] = None

    def ensure_class(self, name: str) -> _ClassDraft:
        draft = self._classes.get(name)
        if draft is None:
            draft = _ClassDraft(name=name)
            self._classes[name] = draft
        return draft

    def add_alias(self, name: str, body: str) -> None:
        self._aliases[name] = Alias(name=name, raw_type_expression=body)

    def set_main_export(self, name: str) -> None:
        self._detected_main_export = name

    def add_index_signature(self, class_name: str, key_type: str, value_type: str) -> None:
        self.ensure_class(class_name).index_signatures.append(
            IndexSignature(key_type=key_type, value_type=value_type)
        )

    def add_method(self, class_name: str, method: ParsedField) -> None:
        """Insert a method, letting a receiver-bearing definition upgrade a receiver-less one."""
        draft = self.ensure_class(class_name)
        draft.data_fields = [item for item in draft.data_fields if item.name != method.name]
        for index, existing in enumerate(draft.fields):
            if existing.name != method.name:
                continue
            if declares_receiver(method.type_expression) and not declares_receiver(
                existing.type_expression
            ):
                draft.fields[index] = method
            return
        draft.fields.append(method)

    def add_data_field(self, class_name: str, data_field: ParsedDataField) -> None:
        draft = self.ensure_class(class_name)
        if any(item.name == data_field.name for item in draft.fields):
            return
        if any(item.name == data_field.name for item in draft.data_fields):
            return
        draft.data_fields.append(data_field)

    def build(self) -> ParseResult:
        classes = {name: draft.freeze() for name, draft in self._classes.items()}
        return ParseResult(
            classes=MappingProxyType(classes),
            aliases=MappingProxyType(dict(self._aliases)),
            detected_main_export=self._detected_main_export,
        )


def apply_directive(
    context: ParserContext, directive: Directive, builder: ModelBuilder
) -> ParserContext:
    """Apply one directive and return the next parser context."""
    if isinstance(directive, ClassDirective):
        builder.ensure_class(directive.name)
        return replace(context, current_class=directive.name)

    if isinstance(directive, AliasDirective):
        builder.add_alias(directive.name, directive.body)
        return context

    if isinstance(directive, TypeHint):
        builder.set_main_export(directive.name)
        return context

    if isinstance(directive, ParamDirective):
        param = PendingParam(directive.name, directive.type_expression, directive.optional)
        return replace(context, pending_params=context.pending_params + (param,))

    if isinstance(directive, ReturnDirective):
        return replace(context, pending_return=directive.type_expression)

    if isinstance(directive, DescriptionLine):
        return replace(context, description=context.description + (directive.text,))

    if isinstance(directive, IndexFieldDirective):
        if context.current_class is not None:
            builder.add_index_signature(
                context.current_class, directive.key_type, directive.value_type
            )
        return context

    if isinstance(directive, FieldDirective):
        if context.current_class is None:
            return context
        _apply_field(context, context.current_class, directive, builder)
        return replace(context, description=())

    if isinstance(directive, FunctionDeclaration):
        builder.add_method(
            directive.class_name,
            ParsedField(
                name=directive.method,
                type_expression=_declaration_type(context, directive),
                description=context.description_text(),
            ),
        )
        return context.flushed()

    if isinstance(directive, NestedAssignment):
        if context.current_class is None:
            return context.flushed()
        builder.add_data_field(
            directive.outer,
            ParsedDataField(name=directive.inner, type_expression=context.current_class),
        )
        return context

    if isinstance(directive, Flush):
        return context.flushed()

    return context


def parse_annotations(text: str) -> ParseResult:
    """Parse an annotated Lua source unit."""
    return parse_lines(text.splitlines())


def parse_lines(lines: Iterable[str]) -> ParseResult:
    builder = ModelBuilder()
    context = ParserContext()
    for line in lines:
        context = apply_directive(context, tokenize_line(line), builder)
    return builder.build()


def _apply_field(
    context: ParserContext, class_name: str, directive: FieldDirective, builder: ModelBuilder
) -> None:
    description = context.description_text()
    if directive.is_function:
        builder.add_method(
            class_name,
            ParsedField(
                name=directive.name,
                type_expression=directive.type_expression,
                description=description,
            ),
        )
        return
    builder.add_data_field(
        class_name,
        ParsedDataField(
            name=directive.name,
            type_expression=directive.type_expression,
            description=description or directive.inline_description,
            optional=directive.optional,
        ),
    )


def _declaration_type(context: ParserContext, declaration: FunctionDeclaration) -> str:
    """Synthesise a `fun(...)` type from a bare declaration and the pending annotations."""
    params: List[str] = []
    if declaration.colon:
        params.append(f"self: {declaration.class_name}")
    for name in declaration.params:
        if declaration.colon and name == "self":
            continue
        pending = context.find_param(name)
        if pending is None:
            params.append(f"{name}: any")
            continue
        mark = "?" if pending.optional else ""
        params.append(f"{name}{mark}: {pending.type_expression}")
    return_type = context.pending_return or "nil"
    return f"fun({', '.join(params)}): {return_type}"


__all__ = [
    "ModelBuilder",
    "ParserContext",
    "PendingParam",
    "apply_directive",
    "parse_annotations",
    "parse_lines",
]
