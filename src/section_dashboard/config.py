"""Configuration loading for the section dashboard."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError
from .layout import LAYOUTS
from .producers import build_producer
from .registry import Producer, SectionRegistry

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ("dashboard.yaml", "dashboard.yml", "dashboard.toml")


def _default_config_dirs() -> list[Path]:
    repo_root = Path(__file__).resolve().parents[2]
    return [
        Path.home() / ".config" / "section_dashboard",
        repo_root / "config",
    ]


def find_config() -> Path | None:
    for base in _default_config_dirs():
        for filename in CONFIG_FILENAMES:
            candidate = base / filename
            if candidate.exists():
                return candidate
    return None


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _load_yaml(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data or {}


def _positive_int(data: dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"'{key}' must be an integer, got {value!r}") from exc
    if number < 1:
        raise ConfigurationError(f"'{key}' must be >= 1, got {number}")
    return number


@dataclass
class SectionConfig:
    """One configured section: its tag, producer kind and producer options."""
    kind: str
    tag: str | None = None
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SectionConfig":
        if not isinstance(data, dict):
            raise ConfigurationError(f"Section entry must be a table, got {data!r}")
        options = dict(data)
        kind = options.pop("kind", None)
        tag = options.pop("tag", None)
        if not kind:
            raise ConfigurationError(f"Section entry is missing 'kind': {data!r}")
        if tag is not None and not isinstance(tag, str):
            raise ConfigurationError(f"Section tag must be a string, got {tag!r}")
        return cls(kind=str(kind), tag=tag, options=options)

    def build_producer(self) -> Producer:
        return build_producer(self.kind, self.options)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"kind": self.kind}
        if self.tag is not None:
            payload["tag"] = self.tag
        payload.update(self.options)
        return payload


@dataclass
class DashboardConfig:
    """Main dashboard configuration."""
    header: str | SectionConfig | None = None
    sections: list[SectionConfig] = field(default_factory=list)
    layout: str = "single"
    columns: int = 2
    column_width: int = 40
    refresh_interval: int = 30

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DashboardConfig":
        if not isinstance(data, dict):
            raise ConfigurationError("Dashboard configuration must be a mapping")
        header_data = data.get("header")
        header: str | SectionConfig | None
        if header_data is None or isinstance(header_data, str):
            header = header_data
        else:
            header = SectionConfig.from_dict(header_data)

        sections_data = data.get("sections", [])
        if not isinstance(sections_data, list):
            raise ConfigurationError("'sections' must be a list")

        layout = data.get("layout", "single")
        if not isinstance(layout, str) or layout not in LAYOUTS:
            raise ConfigurationError(
                f"Unknown layout {layout!r} (known: {', '.join(sorted(LAYOUTS))})"
            )

        return cls(
            header=header,
            sections=[SectionConfig.from_dict(item) for item in sections_data],
            layout=layout,
            columns=_positive_int(data, "columns", 2),
            column_width=_positive_int(data, "column_width", 40),
            refresh_interval=_positive_int(data, "refresh_interval", 30),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "DashboardConfig":
        """Load configuration from YAML file."""
        return cls.from_dict(_load_yaml(path))

    @classmethod
    def from_toml(cls, path: Path) -> "DashboardConfig":
        """Load configuration from TOML file."""
        return cls.from_dict(_load_toml(path))

    @classmethod
    def load(cls, path: Path | None = None) -> "DashboardConfig":
        """Load ``path``, or the first config found in the default dirs."""
        path = path or find_config()
        if path is None:
            logger.debug("No dashboard config found, using defaults")
            return cls()
        path = Path(path).expanduser()
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")
        logger.debug("Loading dashboard config from %s", path)
        try:
            if path.suffix.lower() == ".toml":
                return cls.from_toml(path)
            if path.suffix.lower() in {".yaml", ".yml"}:
                return cls.from_yaml(path)
        except (tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Invalid config {path}: {exc}") from exc
        raise ConfigurationError(f"Unsupported config format: {path.suffix}")

    def to_dict(self) -> dict[str, Any]:
        header: Any = self.header
        if isinstance(header, SectionConfig):
            header = header.to_dict()
        return {
            "header": header,
            "sections": [section.to_dict() for section in self.sections],
            "layout": self.layout,
            "columns": self.columns,
            "column_width": self.column_width,
            "refresh_interval": self.refresh_interval,
        }

    def to_yaml(self, path: Path) -> None:
        """Save configuration to YAML file."""
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def build_registry(config: DashboardConfig) -> SectionRegistry:
    registry = SectionRegistry()
    for section in config.sections:
        name = section.options.get("name")
        registry.register(section.tag, section.build_producer(), name=name)
    return registry
