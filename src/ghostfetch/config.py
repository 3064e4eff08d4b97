"""User configuration loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .exceptions import ConfigError
from .utils import load_yaml

KNOWN_KEYS = ("logo", "ascii", "color", "all", "hide")


@dataclass(slots=True)
class Settings:
    logo: str | None = None
    ascii: Path | None = None
    color: bool = True
    show_all: bool = False
    hide: List[str] = field(default_factory=list)


def _expect(payload: Dict[str, Any], key: str, kind: type, context: str) -> Any:
    value = payload.get(key)
    if value is not None and not isinstance(value, kind):
        raise ConfigError(f"{context}: '{key}' must be {kind.__name__}")
    return value


def parse_settings(payload: Any, context: str) -> Settings:
    if payload is None:
        return Settings()
    if not isinstance(payload, dict):
        raise ConfigError(f"{context}: expected mapping at root")
    unknown = sorted(set(payload) - set(KNOWN_KEYS))
    if unknown:
        raise ConfigError(f"{context}: unknown key(s) {', '.join(map(str, unknown))}")

    settings = Settings()
    logo = _expect(payload, "logo", str, context)
    if logo:
        settings.logo = logo
    ascii_path = _expect(payload, "ascii", str, context)
    if ascii_path:
        settings.ascii = Path(ascii_path).expanduser()
    color = _expect(payload, "color", bool, context)
    if color is not None:
        settings.color = color
    show_all = _expect(payload, "all", bool, context)
    if show_all is not None:
        settings.show_all = show_all
    hide = _expect(payload, "hide", list, context)
    if hide:
        settings.hide = [str(item) for item in hide]
    return settings


def load_settings(path: Path) -> Settings:
    """Load settings from ``path``; a missing file means defaults."""
    if not path.exists():
        return Settings()
    try:
        payload = load_yaml(path)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    return parse_settings(payload, f"{path}")
