"""Monitor detection from the compositor's display tools."""

from __future__ import annotations

import logging
from typing import Dict, List

from .ansi import strip_ansi
from .chain import first_of
from .context import SystemContext
from .edid import edid_names
from .models import Monitor

logger = logging.getLogger(__name__)


class _OutputBlock:
    def __init__(self, connector: str) -> None:
        self.connector = connector
        self.resolution = ""
        self.refresh_rate = ""
        self.hdr = False

    def to_monitor(self, names: Dict[str, str]) -> Monitor | None:
        if not self.connector or not self.resolution:
            return None
        return Monitor(
            name=names.get(self.connector, self.connector),
            resolution=self.resolution,
            refresh_rate=self.refresh_rate,
            hdr=self.hdr,
        )


def _parse_current_mode(line: str) -> tuple[str, str] | None:
    # "Modes:  1:1920x1080@60.00  2:3840x2160@240.02*!"
    for token in line.split():
        if "*" not in token:
            continue
        _, _, mode = token.partition(":")
        mode = mode.rstrip("*!")
        resolution, separator, rate = mode.partition("@")
        if not separator:
            return None
        try:
            return resolution, f"{float(rate):.0f} Hz"
        except ValueError:
            return resolution, ""
    return None


def parse_kscreen(output: str, names: Dict[str, str]) -> List[Monitor]:
    monitors: List[Monitor] = []
    block: _OutputBlock | None = None
    for raw in strip_ansi(output).splitlines():
        line = raw.strip()
        if line.startswith("Output:"):
            if block is not None:
                monitor = block.to_monitor(names)
                if monitor:
                    monitors.append(monitor)
            parts = line.split()
            block = _OutputBlock(parts[2] if len(parts) >= 3 else "")
        elif block is None:
            continue
        elif line.startswith("Modes:"):
            mode = _parse_current_mode(line)
            if mode:
                block.resolution, block.refresh_rate = mode
        elif "HDR:" in line and "enabled" in line:
            block.hdr = True
    if block is not None:
        monitor = block.to_monitor(names)
        if monitor:
            monitors.append(monitor)
    return monitors


def parse_xrandr(output: str, names: Dict[str, str]) -> List[Monitor]:
    monitors: List[Monitor] = []
    connector = ""
    for line in output.splitlines():
        if " connected" in line:
            parts = line.split()
            connector = parts[0] if parts else ""
        elif "*" in line and connector:
            parts = line.split()
            if len(parts) < 2:
                continue
            rate = next((part for part in parts[1:] if "*" in part), parts[1])
            rate = rate.rstrip("*+")
            monitors.append(
                Monitor(
                    name=names.get(connector, connector),
                    resolution=parts[0],
                    refresh_rate=f"{rate} Hz",
                )
            )
            connector = ""
    return monitors


def resolve_monitors(ctx: SystemContext) -> List[Monitor]:
    names = edid_names(ctx)

    def from_kscreen() -> List[Monitor]:
        result = ctx.probe.run(("kscreen-doctor", "-o"))
        return parse_kscreen(result.stdout, names) if result is not None else []

    def from_xrandr() -> List[Monitor]:
        if not ctx.has_env("DISPLAY"):
            return []
        result = ctx.probe.run(("xrandr", "--query"))
        return parse_xrandr(result.stdout, names) if result is not None else []

    return first_of((from_kscreen, from_xrandr), default=[]) or []
