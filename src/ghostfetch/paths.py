"""Shared path helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final, Mapping

PACKAGE_ROOT: Final[Path] = Path(__file__).resolve().parent


def art_dir() -> Path:
    return PACKAGE_ROOT / "art"


def catalog_file() -> Path:
    return art_dir() / "catalog.yaml"


def config_home(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    if env.get("XDG_CONFIG_HOME"):
        return Path(env["XDG_CONFIG_HOME"]).expanduser()
    home = env.get("HOME")
    return (Path(home) if home else Path.home()) / ".config"


def config_file(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    if env.get("GHOSTFETCH_CONFIG"):
        return Path(env["GHOSTFETCH_CONFIG"]).expanduser()
    return config_home(env) / "ghostfetch" / "config.yaml"
