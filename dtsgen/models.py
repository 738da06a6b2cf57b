"""Core data models shared across dtsgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class ParsedField:
    """Method or function-valued member, typed in Lua `fun(...)` syntax."""

    name: str
    type_expression: str
    description: Optional[str] = None
    is_method: bool = True


@dataclass(frozen=True)
class ParsedDataField:
    """Non-function member of a class."""

    name: str
    type_expression: str
    description: Optional[str] = None
    optional: bool = False


@dataclass(frozen=True)
class IndexSignature:
    """`@field [KeyType] ValueType` declaration."""

    key_type: str
    value_type: str


@dataclass(frozen=True)
class ParsedClass:
    """A named `@class` with its methods, data members and index signatures."""

    name: str
    fields: Tuple[ParsedField, ...] = ()
    data_fields: Tuple[ParsedDataField, ...] = ()
    index_signatures: Tuple[IndexSignature, ...] = ()


@dataclass(frozen=True)
class Alias:
    """Global `@alias` shorthand."""

    name: str
    raw_type_expression: str


@dataclass(frozen=True)
class ParseResult:
    """Everything extracted from one annotated source unit."""

    classes: Mapping[str, ParsedClass] = field(default_factory=lambda: MappingProxyType({}))
    aliases: Mapping[str, Alias] = field(default_factory=lambda: MappingProxyType({}))
    detected_main_export: Optional[str] = None


@dataclass(frozen=True)
class ModuleConfig:
    """Registry entry describing how one source file becomes one declaration unit."""

    name: str
    source_file: str
    main_export: Optional[str] = None
    filter_classes: Tuple[str, ...] = ()
    declare_global_var: bool = False

    def describe_flags(self) -> str:
        """Summarise the export/filter/global flags for log output."""
        flags = [f"export: {self.main_export}" if self.main_export else "no export"]
        if self.filter_classes:
            flags.append(f"filter: [{', '.join(self.filter_classes)}]")
        if self.declare_global_var:
            flags.append("global var")
        return ", ".join(flags)


@dataclass(frozen=True)
class TranslationOutcome:
    """Result of translating a single unit: generated text, a skip, or an error."""

    status: str
    declaration: Optional[str] = None
    reason: Optional[str] = None

    GENERATED = "generated"
    SKIPPED = "skipped"
    ERROR = "error"

    @classmethod
    def generated(cls, declaration: str) -> "TranslationOutcome":
        return cls(status=cls.GENERATED, declaration=declaration)

    @classmethod
    def skipped(cls, reason: str) -> "TranslationOutcome":
        return cls(status=cls.SKIPPED, reason=reason)

    @classmethod
    def error(cls, reason: str) -> "TranslationOutcome":
        return cls(status=cls.ERROR, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status == self.GENERATED
