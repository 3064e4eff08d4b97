"""Local IPv4 address selection."""

from __future__ import annotations

import logging
from typing import List

from .context import SystemContext
from .models import UNKNOWN, NetworkAddress

logger = logging.getLogger(__name__)

VIRTUAL_PREFIXES = ("veth", "docker", "virbr")
BRIDGE_PREFIX = "br"
BOND_PREFIX = "bond"


def parse_ip_addr(output: str) -> List[NetworkAddress]:
    """Parse ``ip -4 addr show`` into (interface, address) pairs."""
    addresses: List[NetworkAddress] = []
    interface = ""
    for line in output.splitlines():
        if line and not line[0].isspace() and ":" in line:
            # "2: enp6s0: <BROADCAST,...>" / "5: veth1@if4: <...>"
            interface = line.split(":")[1].strip().split("@")[0]
        stripped = line.strip()
        if stripped.startswith("inet "):
            parts = stripped.split()
            if len(parts) >= 2:
                addresses.append(NetworkAddress(interface=interface, address=parts[1]))
    return addresses


def is_virtual(interface: str) -> bool:
    return interface.startswith(VIRTUAL_PREFIXES)


def is_physical(interface: str) -> bool:
    return not interface.startswith((BRIDGE_PREFIX, BOND_PREFIX)) and not is_virtual(interface)


def select_local_ip(addresses: List[NetworkAddress]) -> str:
    if not addresses:
        return UNKNOWN
    bridge = next((a for a in addresses if a.interface.startswith(BRIDGE_PREFIX)), None)
    if bridge is not None:
        primary = next((a for a in addresses if is_physical(a.interface)), None)
        if primary is not None:
            return (
                f"{bridge.address} ({bridge.interface}), "
                f"{primary.address} ({primary.interface})"
            )
        return f"{bridge.address} ({bridge.interface})"
    bond = next((a for a in addresses if a.interface.startswith(BOND_PREFIX)), None)
    if bond is not None:
        return f"{bond.address} ({bond.interface})"
    for address in addresses:
        if not is_virtual(address.interface):
            return address.address
    return addresses[0].address


def resolve_local_ip(ctx: SystemContext) -> str:
    result = ctx.probe.run(("ip", "-4", "addr", "show", "scope", "global"))
    if result is None:
        logger.debug("ip address listing unavailable")
        return UNKNOWN
    return select_local_ip(parse_ip_addr(result.stdout))
