"""Tests for declaration emission."""

from __future__ import annotations

import textwrap

from dtsgen.annotations import parse_annotations
from dtsgen.emitter import DeclarationEmitter, filter_classes, matches_filter
from dtsgen.models import ModuleConfig

GEOMETRY = textwrap.dedent(
    """
    ---@alias Radians number
    ---@class circle
    ---@field center vec3
    ---@field radius number
    ---@class circle_options
    ---@field filled? boolean
    ---@class cone
    ---@field angle Radians
    """
)


def test_matches_filter_exact_and_prefix() -> None:
    patterns = ["circle", "circle_*"]
    assert matches_filter("circle", patterns)
    assert matches_filter("circle_options", patterns)
    assert not matches_filter("circles", patterns)
    assert not matches_filter("cone", patterns)


def test_filter_classes_without_patterns_keeps_everything() -> None:
    result = parse_annotations(GEOMETRY)
    assert list(filter_classes(result.classes, None)) == ["circle", "circle_options", "cone"]
    assert list(filter_classes(result.classes, ["cone"])) == ["cone"]


def test_render_point_interface() -> None:
    source = textwrap.dedent(
        """
        --- @class point
        --- @field x number
        --- @field y number
        --- @param self point
        --- @return number
        function point:length(self) end
        """
    )
    output = DeclarationEmitter().render(
        parse_annotations(source), ModuleConfig(name="point", source_file="point.lua")
    )
    assert "interface point {\n  x: number;\n  y: number;\n  length(this: point): number;\n}" in output
    assert "declare module" not in output


def test_render_orders_aliases_enums_interfaces_and_bindings() -> None:
    source = textwrap.dedent(
        """
        ---@alias Milliseconds number
        ---@class spell_school
        ---@field PHYSICAL integer
        ---@field HOLY integer
        ---@class core
        ---@field [string] any
        ---@field school spell_school
        --- Current game time
        ---@field time fun(): Milliseconds
        ---@field new fun(): core
        """
    )
    config = ModuleConfig(name="core", source_file="core.lua", main_export="core", declare_global_var=True)
    output = DeclarationEmitter().render(parse_annotations(source), config)

    assert output.startswith(
        "// Auto-generated from LuaCATS annotations\n// Source: core.lua\n// Do not edit manually\n"
    )
    assert output.index("type Milliseconds = number;") < output.index("declare enum spell_school")
    assert output.index("declare enum spell_school") < output.index("interface core")
    assert "  [key: string]: any;\n  school: typeof spell_school;\n" in output
    assert "  /** Current game time */\n  time(this: void): Milliseconds;\n" in output
    assert '  "new"(this: void): core;\n' in output
    assert "// Global variable declaration\ndeclare const core: core;" in output
    assert output.endswith(
        'declare module "core" {\n  const _default: core;\n  export = _default;\n}\n'
    )


def test_detected_export_requires_emitted_class() -> None:
    source = GEOMETRY + "---@type cone\n"
    result = parse_annotations(source)
    emitter = DeclarationEmitter()

    filtered = emitter.render(
        result,
        ModuleConfig(name="common/geometry/circle", source_file="geometry.lua", filter_classes=("circle*",)),
    )
    assert "interface cone" not in filtered
    assert "declare module" not in filtered

    unfiltered = emitter.render(result, ModuleConfig(name="common/geometry/cone", source_file="geometry.lua"))
    assert 'declare module "common/geometry/cone" {\n  const _default: cone;' in unfiltered
    assert "declare const cone" not in unfiltered


def test_configured_export_overrides_detected() -> None:
    result = parse_annotations(GEOMETRY + "---@type cone\n")
    output = DeclarationEmitter().render(
        result, ModuleConfig(name="geo", source_file="geometry.lua", main_export="circle")
    )
    assert "const _default: circle;" in output


def test_optional_fields_and_alias_object_literal() -> None:
    source = textwrap.dedent(
        """
        ---@alias cast_opts { skip_gcd: boolean, target: game_object|nil }
        ---@class spell_queue
        ---@field last_cast? integer
        ---@field queue table<integer, string>
        """
    )
    output = DeclarationEmitter().render(
        parse_annotations(source), ModuleConfig(name="q", source_file="q.lua")
    )
    assert "type cast_opts = { skip_gcd: boolean; target: game_object | null };" in output
    assert "  last_cast?: number;\n  queue: Record<number, string>;\n" in output
