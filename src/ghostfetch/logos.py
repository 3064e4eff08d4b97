"""Logo catalog loading and distro dispatch."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from .exceptions import AsciiArtError, ConfigError
from .models import Logo
from .paths import catalog_file
from .utils import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_LOGO = "linux"
CUSTOM_LOGO_WIDTH = 40
CUSTOM_PRIMARY = "cyan"
CUSTOM_SECONDARY = "blue"


@dataclass(slots=True)
class CatalogEntry:
    keywords: List[str]
    logo: Logo

    def matches(self, distro_id: str) -> bool:
        return any(keyword in distro_id for keyword in self.keywords)


class LogoCatalog:
    """Ordered keyword table; the first entry whose keyword is found wins."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or catalog_file()
        self._entries: List[CatalogEntry] = []
        self._loaded = False

    def load(self) -> None:
        if self._loaded:
            return
        payload = load_yaml(self._path)
        if not isinstance(payload, dict) or not isinstance(payload.get("logos"), list):
            raise ConfigError(f"{self._path}: expected a 'logos' list")
        for index, entry in enumerate(payload["logos"]):
            self._entries.append(self._parse_entry(entry, f"{self._path} logos[{index}]"))
        self._loaded = True

    def _parse_entry(self, entry: Any, context: str) -> CatalogEntry:
        if not isinstance(entry, dict):
            raise ConfigError(f"{context}: must be a mapping")
        for key in ("name", "art", "width"):
            if key not in entry:
                raise ConfigError(f"{context}: missing required key '{key}'")
        keywords = entry.get("match") or []
        if not isinstance(keywords, list):
            raise ConfigError(f"{context}: 'match' must be a list")
        art_path = self._path.parent / str(entry["art"])
        try:
            art = art_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"{context}: cannot read art file {art_path}") from exc
        logo = Logo(
            name=str(entry["name"]),
            art=art,
            width=int(entry["width"]),
            primary=str(entry.get("primary", "")),
            secondary=str(entry.get("secondary", "")),
        )
        return CatalogEntry(keywords=[str(k).lower() for k in keywords], logo=logo)

    def logos(self) -> List[Logo]:
        self.load()
        return [entry.logo for entry in self._entries]

    def _default(self) -> Logo:
        for entry in self._entries:
            if entry.logo.name == DEFAULT_LOGO:
                return entry.logo
        return self._entries[-1].logo

    def get(self, distro_id: str) -> Logo:
        self.load()
        wanted = distro_id.lower()
        for entry in self._entries:
            if entry.matches(wanted):
                return entry.logo
        return self._default()


_catalog: Optional[LogoCatalog] = None


def default_catalog() -> LogoCatalog:
    global _catalog
    if _catalog is None:
        _catalog = LogoCatalog()
    return _catalog


def get_logo(distro_id: str) -> Logo:
    return default_catalog().get(distro_id)


def load_custom_logo(path: Path) -> Logo:
    try:
        art = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise AsciiArtError(f"Could not read ASCII file: {path}") from exc
    return Logo(
        name=path.stem,
        art=art,
        width=CUSTOM_LOGO_WIDTH,
        primary=CUSTOM_PRIMARY,
        secondary=CUSTOM_SECONDARY,
    )

