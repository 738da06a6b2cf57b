"""Configuration loading for dtsgen (.dtsgen.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .models import ModuleConfig
from .registry import DEFAULT_MODULES, ModuleRegistry

CONFIG_FILENAME = ".dtsgen.yml"
LOCAL_CONFIG_FILENAME = ".dtsgen.local.yml"

ENV_API_DIR = "DTSGEN_API_DIR"
ENV_OUTPUT_DIR = "DTSGEN_OUTPUT_DIR"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GeneratorConfig:
    """Represents the settings defined in .dtsgen.yml."""

    root: Path
    api_dir: Optional[Path] = None
    output_dir: Optional[Path] = None
    registry: ModuleRegistry = field(default_factory=ModuleRegistry)

    def require_paths(self) -> tuple[Path, Path]:
        """Return `(api_dir, output_dir)` or fail when either is unset."""
        if self.api_dir is None or self.output_dir is None:
            missing = [
                name
                for name, value in (("api_dir", self.api_dir), ("output_dir", self.output_dir))
                if value is None
            ]
            raise ConfigError(
                f"{' and '.join(missing)} must be set in {CONFIG_FILENAME} "
                f"(or via {ENV_API_DIR}/{ENV_OUTPUT_DIR})"
            )
        return self.api_dir, self.output_dir


def load_config(
    config_path: Path, *, environ: Mapping[str, str] | None = None
) -> GeneratorConfig:
    """Load configuration from disk, layering the local file and environment on top."""
    environ = os.environ if environ is None else environ
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    data: Dict[str, Any] = {}
    if config_file.exists():
        data.update(_read_config(config_file))
    local_file = config_file.with_name(LOCAL_CONFIG_FILENAME)
    if local_file.exists():
        data.update(_read_config(local_file))

    api_dir = _as_path(root, environ.get(ENV_API_DIR) or data.get("api_dir"))
    output_dir = _as_path(root, environ.get(ENV_OUTPUT_DIR) or data.get("output_dir"))

    modules_data = data.get("modules")
    if modules_data is None:
        registry = ModuleRegistry(DEFAULT_MODULES)
    else:
        registry = _build_registry(modules_data)

    return GeneratorConfig(root=root, api_dir=api_dir, output_dir=output_dir, registry=registry)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _build_registry(modules_data: Any) -> ModuleRegistry:
    if not isinstance(modules_data, list):
        raise ConfigError("`modules` must be a list of module entries")
    modules: List[ModuleConfig] = []
    for index, entry in enumerate(modules_data):
        if not isinstance(entry, dict):
            raise ConfigError(f"modules[{index}] must be a mapping")
        name = _as_str(entry.get("name"))
        source_file = _as_str(entry.get("file"))
        if not name or not source_file:
            raise ConfigError(f"modules[{index}] requires `name` and `file`")
        modules.append(
            ModuleConfig(
                name=name,
                source_file=source_file,
                main_export=_as_str(entry.get("main_export")),
                filter_classes=tuple(_as_str_list(entry.get("filter_classes"))),
                declare_global_var=_as_bool(entry.get("declare_global_var")) or False,
            )
        )
    try:
        return ModuleRegistry(modules)
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def _as_path(root: Path, value: Any) -> Optional[Path]:
    text = _as_str(value)
    if not text:
        return None
    path = Path(text).expanduser()
    return path if path.is_absolute() else (root / path)


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["ConfigError", "GeneratorConfig", "load_config"]
