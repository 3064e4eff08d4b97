"""EDID monitor-name decoding and DRM connector mapping."""

from __future__ import annotations

import logging
import re
from typing import Dict

from .context import SystemContext

logger = logging.getLogger(__name__)

DRM_ROOT = "/sys/class/drm"

EDID_MIN_LENGTH = 128
DESCRIPTOR_START = 54
DESCRIPTOR_SIZE = 18
DESCRIPTOR_COUNT = 4
NAME_TAG = 0xFC
NAME_PAYLOAD = slice(5, 18)

_CARD_PREFIX = re.compile(r"^card\d+-")


def extract_edid_name(edid: bytes) -> str | None:
    """Return the monitor name stored in an EDID descriptor, if any."""
    for index in range(DESCRIPTOR_COUNT):
        offset = DESCRIPTOR_START + index * DESCRIPTOR_SIZE
        if offset + DESCRIPTOR_SIZE > len(edid):
            break
        block = edid[offset : offset + DESCRIPTOR_SIZE]
        if block[0] != 0 or block[1] != 0 or block[3] != NAME_TAG:
            continue
        chars = []
        for byte in block[NAME_PAYLOAD]:
            if byte in (0x0A, 0x00):
                break
            if 0x20 <= byte < 0x7F:
                chars.append(chr(byte))
        name = "".join(chars).strip()
        if name:
            return name
    return None


def connector_id(entry: str) -> str | None:
    """``card1-DP-2`` -> ``DP-2``; card directories without a connector give None."""
    if not _CARD_PREFIX.match(entry):
        return None
    return _CARD_PREFIX.sub("", entry, count=1)


def edid_names(ctx: SystemContext) -> Dict[str, str]:
    """Map connector ids to human readable monitor names from sysfs."""
    names: Dict[str, str] = {}
    entries = ctx.probe.list_dir(DRM_ROOT) or []
    for entry in entries:
        connector = connector_id(entry)
        if connector is None:
            continue
        blob = ctx.probe.read_bytes(f"{DRM_ROOT}/{entry}/edid")
        if not blob or len(blob) < EDID_MIN_LENGTH:
            continue
        name = extract_edid_name(blob)
        if name:
            logger.debug("connector %s reports EDID name %s", connector, name)
            names[connector] = name
    return names
