"""Tests for the module registry."""

from __future__ import annotations

import pytest

from dtsgen.models import ModuleConfig
from dtsgen.registry import DEFAULT_MODULES, ModuleRegistry, UnknownModuleError


def test_default_registry_contents() -> None:
    registry = ModuleRegistry()
    assert len(registry) == len(DEFAULT_MODULES)
    assert registry.names()[0] == "common/geometry/vector_2"

    circle = registry.get("common/geometry/circle")
    assert circle.source_file == "common/geometry/geometry.lua"
    assert circle.filter_classes == ("circle", "circle_*")

    izi = registry.get("common/izi_sdk")
    assert izi.main_export == "izi_api"
    assert registry.get("common/modules/buff_manager").source_file == "common/modules/buff_manager.lua"
    assert registry.get("common/enums").main_export is None
    assert registry.get("core").declare_global_var is True
    assert registry.get("game_object").declare_global_var is False


def test_select_returns_all_or_one() -> None:
    registry = ModuleRegistry()
    assert [module.name for module in registry.select()] == registry.names()
    assert [module.name for module in registry.select("menu")] == ["menu"]
    assert "menu" in registry
    assert "missing" not in registry


def test_unknown_module_lists_available_names() -> None:
    registry = ModuleRegistry([ModuleConfig(name="a", source_file="a.lua")])
    with pytest.raises(UnknownModuleError) as excinfo:
        registry.select("b")
    assert str(excinfo.value) == "Unknown module: b. Available modules: a"


def test_duplicate_module_names_are_rejected() -> None:
    module = ModuleConfig(name="a", source_file="a.lua")
    with pytest.raises(ValueError):
        ModuleRegistry([module, module])


def test_describe_flags() -> None:
    assert ModuleConfig(name="a", source_file="a.lua").describe_flags() == "no export"
    module = ModuleConfig(
        name="core",
        source_file="core.lua",
        main_export="core",
        filter_classes=("core", "core_*"),
        declare_global_var=True,
    )
    assert module.describe_flags() == "export: core, filter: [core, core_*], global var"
