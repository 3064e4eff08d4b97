"""Operating system level facts: OS, kernel, uptime, host, packages."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .chain import first_of
from .context import SystemContext
from .models import UNKNOWN
from .utils import parse_key_values

logger = logging.getLogger(__name__)

OS_RELEASE = "/etc/os-release"
DMI_ROOT = "/sys/devices/virtual/dmi/id"

OEM_PLACEHOLDERS = frozenset(
    {
        "System Product Name",
        "System Version",
        "To Be Filled By O.E.M.",
        "Default string",
        "Not Applicable",
    }
)

INIT_MARKERS: Sequence[Tuple[str, str]] = (
    ("/run/systemd/system", "systemd"),
    ("/run/openrc", "OpenRC"),
    ("/run/runit", "runit"),
    ("/run/s6", "s6"),
    ("/sbin/dinit", "dinit"),
)


@dataclass(slots=True)
class PackageSource:
    name: str
    args: Tuple[str, ...]
    skip_header: bool = False

    def count(self, ctx: SystemContext) -> int:
        result = ctx.probe.run(self.args)
        if result is None:
            return 0
        lines = [line for line in result.lines() if line.strip()]
        if self.skip_header:
            lines = lines[1:]
        return len(lines)


# Every source of the first tier that reports packages is listed.
PRIMARY_PACKAGE_SOURCES: Sequence[PackageSource] = (
    PackageSource("pacman", ("pacman", "-Qq")),
    PackageSource("flatpak", ("flatpak", "list", "--app")),
    PackageSource("snap", ("snap", "list"), skip_header=True),
)

# The second tier is only consulted when the first is empty; first hit wins.
FALLBACK_PACKAGE_SOURCES: Sequence[PackageSource] = (
    PackageSource("dpkg", ("dpkg-query", "-f", ".\n", "-W")),
    PackageSource("rpm", ("rpm", "-qa")),
    PackageSource("xbps", ("xbps-query", "-l")),
    PackageSource("apk", ("apk", "info")),
)


def os_info(ctx: SystemContext) -> Tuple[str, str]:
    """Return ``(pretty name, distro id)`` from os-release."""
    content = ctx.probe.read_text(OS_RELEASE) or ""
    release = parse_key_values(content)
    return release.get("PRETTY_NAME") or "Linux", release.get("ID") or "linux"


def resolve_kernel(ctx: SystemContext) -> str:
    content = ctx.probe.read_text("/proc/sys/kernel/osrelease")
    return content.strip() if content and content.strip() else UNKNOWN


def format_uptime(seconds: float) -> str:
    total = int(seconds)
    days, remainder = divmod(total, 86400)
    hours, remainder = divmod(remainder, 3600)
    mins = remainder // 60
    if days > 0:
        return f"{days} days, {hours} hours, {mins} mins"
    if hours > 0:
        return f"{hours} hours, {mins} mins"
    return f"{mins} mins"


def resolve_uptime(ctx: SystemContext) -> str:
    content = ctx.probe.read_text("/proc/uptime")
    if not content or not content.split():
        return UNKNOWN
    try:
        seconds = float(content.split()[0])
    except ValueError:
        return UNKNOWN
    return format_uptime(seconds)


def _dmi(ctx: SystemContext, name: str) -> str | None:
    content = ctx.probe.read_text(f"{DMI_ROOT}/{name}")
    if content is None:
        return None
    value = content.strip()
    if not value or value in OEM_PLACEHOLDERS:
        return None
    return value


def resolve_host(ctx: SystemContext) -> str | None:
    def product() -> str | None:
        name = _dmi(ctx, "product_name")
        if name is None:
            return None
        version = _dmi(ctx, "product_version")
        return f"{name} {version}" if version else name

    def board() -> str | None:
        name = _dmi(ctx, "board_name")
        if name is None:
            return None
        vendor = _dmi(ctx, "board_vendor")
        return f"{vendor} {name}" if vendor else name

    return first_of((product, board))


def resolve_packages(ctx: SystemContext) -> str:
    counts: List[str] = []
    for source in PRIMARY_PACKAGE_SOURCES:
        found = source.count(ctx)
        if found > 0:
            counts.append(f"{found} ({source.name})")
    if not counts:
        for source in FALLBACK_PACKAGE_SOURCES:
            found = source.count(ctx)
            if found > 0:
                counts.append(f"{found} ({source.name})")
                break
    if not counts:
        logger.debug("no package manager reported installed packages")
        return UNKNOWN
    return ", ".join(counts)


def resolve_init_system(ctx: SystemContext) -> str:
    for marker, name in INIT_MARKERS:
        if ctx.probe.exists(marker):
            return name
    return UNKNOWN


def resolve_locale(ctx: SystemContext) -> str:
    return ctx.getenv("LC_ALL") or ctx.getenv("LANG") or UNKNOWN
