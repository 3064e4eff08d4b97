"""Fact assembly: runs every resolver and lays the results out as info lines."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Sequence, TypeVar

from . import display, hardware, network, prompt, session, system
from .ansi import Painter
from .context import SystemContext
from .models import UNKNOWN, Fact

logger = logging.getLogger(__name__)

LABEL_WIDTH = 12

T = TypeVar("T")


def _safely(name: str, resolver: Callable[[SystemContext], T], ctx: SystemContext, fallback: T) -> T:
    """Run one resolver; a failure degrades that fact instead of the run."""
    try:
        return resolver(ctx)
    except Exception:
        logger.debug("resolver %s failed", name, exc_info=True)
        return fallback


def _numbered(label: str, values: Sequence[str]) -> List[Fact]:
    if len(values) == 1:
        return [Fact(label, values[0], key=label.lower())]
    return [Fact(f"{label} {index}", value, key=label.lower()) for index, value in enumerate(values, 1)]


@dataclass(slots=True)
class Summary:
    username: str
    hostname: str
    distro_id: str
    facts: List[Fact] = field(default_factory=list)

    def visible_facts(self, hidden: Iterable[str] = ()) -> List[Fact]:
        hidden_keys = {name.lower() for name in hidden}
        return [fact for fact in self.facts if fact.visible and fact.key not in hidden_keys]


def collect_summary(ctx: SystemContext, show_all: bool = False) -> Summary:
    os_name, distro_id = _safely("os", system.os_info, ctx, ("Linux", "linux"))
    facts: List[Fact] = []

    def add(label: str, resolver: Callable[[SystemContext], str | None], fallback: str | None = UNKNOWN) -> None:
        facts.append(Fact(label, _safely(label, resolver, ctx, fallback)))

    add("Host", system.resolve_host, None)
    facts.append(Fact("OS", os_name))
    add("Kernel", system.resolve_kernel)
    add("Uptime", system.resolve_uptime)
    add("Packages", system.resolve_packages)
    add("Shell", session.resolve_shell)
    add("Prompt", prompt.resolve_shell_theme, None)

    monitors = _safely("Display", display.resolve_monitors, ctx, [])
    facts.extend(_numbered("Display", [monitor.describe() for monitor in monitors]))

    add("DE", session.resolve_de)
    add("WM", session.resolve_wm)
    add("Terminal", session.resolve_terminal)
    add("Font", session.resolve_terminal_font, None)
    add("Multiplexer", session.resolve_multiplexer, None)
    add("Editor", session.resolve_editor, None)
    add("CPU", hardware.resolve_cpu)
    facts.extend(_numbered("GPU", _safely("GPU", hardware.resolve_gpus, ctx, [UNKNOWN])))
    add("Memory", hardware.resolve_memory)
    add("Swap", hardware.resolve_swap, None)
    for disk in _safely("Disk", hardware.resolve_disks, ctx, []):
        facts.append(Fact("Disk", disk))
    add("Local IP", network.resolve_local_ip)
    if show_all:
        add("Init", system.resolve_init_system)
        add("Locale", system.resolve_locale)

    return Summary(username=ctx.username, hostname=ctx.hostname, distro_id=distro_id, facts=facts)


def format_info_lines(
    summary: Summary,
    painter: Painter,
    primary: str = "cyan",
    hidden: Iterable[str] = (),
) -> List[str]:
    """Turn a summary into pre-styled info lines, ending with a blank line."""
    heading = f"bold {primary}".strip()
    lines = [
        painter.paint(summary.username, heading)
        + painter.paint("@", "white")
        + painter.paint(summary.hostname, heading),
        "-" * (len(summary.username) + 1 + len(summary.hostname)),
    ]
    for fact in summary.visible_facts(hidden):
        lines.append(f"{painter.paint(fact.label.ljust(LABEL_WIDTH), heading)} {fact.value}")
    lines.append("")
    return lines
