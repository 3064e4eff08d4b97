"""Utility helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml


def load_yaml(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def parse_key_values(text: str, separator: str = "=") -> Dict[str, str]:
    """Parse ``KEY=value`` lines, dropping comments and surrounding quotes."""
    parsed: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or separator not in line:
            continue
        key, value = line.split(separator, 1)
        parsed[key.strip()] = value.strip().strip('"').strip("'")
    return parsed


def to_gib(value: float) -> float:
    return value / 1024.0 / 1024.0 / 1024.0
