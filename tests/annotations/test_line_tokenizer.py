"""Tests for the annotation line tokenizer."""

from __future__ import annotations

from dtsgen.annotations.lines import (
    AliasDirective,
    ClassDirective,
    DescriptionLine,
    FieldDirective,
    Flush,
    FunctionDeclaration,
    IndexFieldDirective,
    NestedAssignment,
    ParamDirective,
    Passive,
    ReturnDirective,
    TypeHint,
    tokenize_line,
)


def test_tokenize_directives() -> None:
    assert tokenize_line("---@class vec3") == ClassDirective("vec3")
    assert tokenize_line("--- @class izi_spell : spell_base") == ClassDirective("izi_spell")
    assert tokenize_line("--- @type core") == TypeHint("core")
    assert tokenize_line("---@alias Milliseconds number") == AliasDirective("Milliseconds", "number")
    assert tokenize_line("---@return number The distance") == ReturnDirective("number")


def test_tokenize_param_keeps_full_type_and_optional_marker() -> None:
    assert tokenize_line("---@param unit? game_object The unit") == ParamDirective(
        "unit", "game_object", optional=True
    )
    assert tokenize_line("---@param cb fun(ev: table): boolean callback") == ParamDirective(
        "cb", "fun(ev: table): boolean"
    )
    assert tokenize_line("---@param ... any") == ParamDirective("...", "any")


def test_tokenize_fields() -> None:
    assert tokenize_line("---@field [string] number") == IndexFieldDirective("string", "number")
    assert tokenize_line("---@field public x number") == FieldDirective("x", "number")
    assert tokenize_line("---@field name? string Display name") == FieldDirective(
        "name", "string", optional=True, inline_description="Display name"
    )
    method = tokenize_line("---@field get fun(self: foo): number The value")
    assert isinstance(method, FieldDirective)
    assert method.is_function
    assert method.inline_description is None


def test_tokenize_function_declarations() -> None:
    assert tokenize_line("function foo.bar(a, b)") == FunctionDeclaration(
        "foo", "bar", ("a", "b"), colon=False
    )
    assert tokenize_line("function lib.geo.vec3.new(x, y, z) end") == FunctionDeclaration(
        "vec3", "new", ("x", "y", "z"), colon=False
    )
    assert tokenize_line("function point:length(self) end") == FunctionDeclaration(
        "point", "length", ("self",), colon=True
    )


def test_tokenize_nested_assignment() -> None:
    assert tokenize_line("core.graphics = {}") == NestedAssignment("core", "graphics")


def test_tokenize_code_lines() -> None:
    assert tokenize_line("") == Passive()
    assert tokenize_line("-- plain comment") == Passive()
    assert tokenize_line("_G.core = core") == Passive()
    assert tokenize_line("local M = {}") == Flush()
    assert tokenize_line("return M") == Flush()


def test_tokenize_description_and_unknown_directives() -> None:
    assert tokenize_line("--- Returns the player unit") == DescriptionLine("Returns the player unit")
    assert tokenize_line("---") == Passive()
    assert tokenize_line("---@diagnostic disable: missing-return") == Passive()
    assert tokenize_line("---@field") == Passive()
