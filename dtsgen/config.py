"""Configuration loading for dtsgen (.dtsgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".dtsgen.yml"
DEFAULT_OUTPUT_DIR = "typings"
DEFAULT_HEADER_TITLE = "Java API"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GeneratorConfig:
    """Inputs of one generation run, as read from .dtsgen.yml."""

    root: Path
    source_dirs: List[Path] = field(default_factory=list)
    output_dir: Optional[Path] = None
    api_packages: List[str] = field(default_factory=list)
    clean_output_first: bool = False
    patches_dir: Optional[Path] = None
    exclude_paths: List[str] = field(default_factory=list)
    header_title: str = DEFAULT_HEADER_TITLE

    def __post_init__(self) -> None:
        if self.output_dir is None:
            self.output_dir = self.root / DEFAULT_OUTPUT_DIR

    def with_overrides(
        self,
        *,
        source_dirs: Sequence[str] | None = None,
        output_dir: str | None = None,
        api_packages: Sequence[str] | None = None,
        clean_output_first: bool | None = None,
        patches_dir: str | None = None,
        exclude_paths: Sequence[str] | None = None,
        header_title: str | None = None,
    ) -> "GeneratorConfig":
        """Return a copy with command-line values taking precedence."""
        updates: Dict[str, Any] = {}
        if source_dirs:
            updates["source_dirs"] = [self._resolve(value) for value in source_dirs]
        if output_dir:
            updates["output_dir"] = self._resolve(output_dir)
        if api_packages:
            updates["api_packages"] = [value for value in api_packages if value]
        if clean_output_first is not None:
            updates["clean_output_first"] = clean_output_first
        if patches_dir:
            updates["patches_dir"] = self._resolve(patches_dir)
        if exclude_paths:
            updates["exclude_paths"] = list(exclude_paths)
        if header_title:
            updates["header_title"] = header_title
        return replace(self, **updates)

    def _resolve(self, value: str) -> Path:
        path = Path(value).expanduser()
        return path if path.is_absolute() else self.root / path


def load_config(config_path: Path) -> GeneratorConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GeneratorConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    def _path(value: Any) -> Optional[Path]:
        text = _as_str(value)
        if not text:
            return None
        path = Path(text).expanduser()
        return path if path.is_absolute() else root / path

    source_dirs = [
        path for path in (_path(item) for item in _as_str_list(data.get("source_dirs"))) if path
    ]

    return GeneratorConfig(
        root=root,
        source_dirs=source_dirs,
        output_dir=_path(data.get("output_dir")),
        api_packages=[value for value in _as_str_list(data.get("api_packages")) if value],
        clean_output_first=_as_bool(data.get("clean_output_first")) or False,
        patches_dir=_path(data.get("patches_dir")),
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        header_title=_as_str(data.get("header_title")) or DEFAULT_HEADER_TITLE,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
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
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


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
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "GeneratorConfig",
    "load_config",
]
