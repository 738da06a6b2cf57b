"""Module registry: which annotation files become which declaration units."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from .models import ModuleConfig


class UnknownModuleError(KeyError):
    """Raised when a requested module is not part of the registry."""

    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown module: {self.name}. Available modules: {', '.join(self.available)}"


def _module(
    name: str,
    source_file: str,
    main_export: Optional[str] = None,
    *,
    filter_classes: Tuple[str, ...] = (),
    declare_global_var: bool = False,
) -> ModuleConfig:
    return ModuleConfig(
        name=name,
        source_file=source_file,
        main_export=main_export,
        filter_classes=filter_classes,
        declare_global_var=declare_global_var,
    )


def _mirrored(name: str, main_export: Optional[str] = None) -> ModuleConfig:
    """Entry whose source file mirrors the module path (`common/x` -> `common/x.lua`)."""
    return _module(name, f"{name}.lua", main_export or name.rsplit("/", 1)[-1])


_UTILITY_HELPERS = (
    "plugin_helper",
    "control_panel_helper",
    "unit_helper",
    "spell_helper",
    "key_helper",
    "auto_attack_helper",
    "cooldown_tracker",
    "dungeons_helper",
    "evade_helper",
    "fish_helper",
    "graphics_helper",
    "inventory_helper",
    "kick_external_filters_helper",
    "dispel_external_filters_helper",
    "movement_handler",
    "pet_handler",
    "pvp_helper",
    "simple_movement",
    "ui_buttons_info",
    "wigs_tracker",
    "assets_helper",
    "icons_helper",
    "spell_sequence_helper",
    "coords_helper",
)

_MODULES = (
    "buff_manager",
    "settings_manager",
    "spell_queue",
    "spell_prediction",
    "combat_forecast",
    "profiler",
    "health_prediction",
    "target_selector",
)

DEFAULT_MODULES: Tuple[ModuleConfig, ...] = (
    # Geometry
    _module("common/geometry/vector_2", "common/geometry/vec2.lua", "vec2"),
    _module("common/geometry/vector_3", "common/geometry/vec3.lua", "vec3"),
    _module(
        "common/geometry/circle",
        "common/geometry/geometry.lua",
        "circle",
        filter_classes=("circle", "circle_*"),
    ),
    _module(
        "common/geometry/rectangle",
        "common/geometry/geometry.lua",
        "rectangle",
        filter_classes=("rectangle", "rectangle_*"),
    ),
    _module(
        "common/geometry/cone",
        "common/geometry/geometry.lua",
        "cone",
        filter_classes=("cone", "cone_*"),
    ),
    # Common base
    _mirrored("common/color"),
    _module("common/enums", "common/enums.lua"),
    _mirrored("common/unit_manager"),
    _mirrored("common/buff_db"),
    _mirrored("common/spell_attributes"),
    _mirrored("common/talents_id"),
    _mirrored("common/wow_api_clone"),
    _mirrored("common/ow_menu_api"),
    _mirrored("common/izi_sdk", "izi_api"),
    # Modules and utility helpers
    *(_mirrored(f"common/modules/{name}") for name in _MODULES),
    *(_mirrored(f"common/utility/{name}") for name in _UTILITY_HELPERS),
    # Core globals: available everywhere and importable
    _module("menu", "menu.lua", "menu", declare_global_var=True),
    _module("core", "core.lua", "core", declare_global_var=True),
    _module("game_object", "game_object.lua", "game_object"),
)


class ModuleRegistry:
    """Ordered collection of module configs, looked up by logical name."""

    def __init__(self, modules: Iterable[ModuleConfig] = DEFAULT_MODULES) -> None:
        self._modules: List[ModuleConfig] = []
        seen: set[str] = set()
        for module in modules:
            if module.name in seen:
                raise ValueError(f"Duplicate module in registry: {module.name}")
            seen.add(module.name)
            self._modules.append(module)

    def __iter__(self) -> Iterator[ModuleConfig]:
        return iter(self._modules)

    def __len__(self) -> int:
        return len(self._modules)

    def __contains__(self, name: object) -> bool:
        return any(module.name == name for module in self._modules)

    def names(self) -> List[str]:
        return [module.name for module in self._modules]

    def get(self, name: str) -> ModuleConfig:
        for module in self._modules:
            if module.name == name:
                return module
        raise UnknownModuleError(name, self.names())

    def select(self, name: str | None = None) -> List[ModuleConfig]:
        """Every module in registry order, or only `name` when given."""
        if name is None:
            return list(self._modules)
        return [self.get(name)]


__all__ = ["DEFAULT_MODULES", "ModuleRegistry", "UnknownModuleError"]
