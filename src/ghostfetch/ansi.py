"""ANSI escape aware measurement, truncation and painting.

A single scanner defines what counts as visible: ``ESC`` opens an escape
sequence and the next ASCII letter closes it. Everything inside, including
the terminating letter, has zero width. This covers SGR colour codes
(``ESC[...m``) as well as cursor movement and erase sequences.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from rich.color import ColorSystem
from rich.style import Style

ESC = "\x1b"
ELLIPSIS = "..."

SWATCH_COLORS = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")
SWATCH_CELL = "   "


def _scan(text: str) -> Iterator[Tuple[int, str, bool]]:
    """Yield ``(offset, char, visible)`` for every character of ``text``."""
    in_escape = False
    for offset, char in enumerate(text):
        if char == ESC:
            in_escape = True
            yield offset, char, False
        elif in_escape:
            if char.isascii() and char.isalpha():
                in_escape = False
            yield offset, char, False
        else:
            yield offset, char, True


def visible_length(text: str) -> int:
    return sum(1 for _, _, visible in _scan(text) if visible)


def strip_ansi(text: str) -> str:
    return "".join(char for _, char, visible in _scan(text) if visible)


def truncate(text: str, width: int) -> str:
    """Cut ``text`` so it occupies at most ``width`` columns.

    Lines that fit are returned untouched. Longer lines are cut once the
    visible count reaches ``width - 3`` and end with ``...``; escape codes
    after the cut point (including a trailing reset) are dropped.
    """
    if visible_length(text) <= width:
        return text
    keep = width - len(ELLIPSIS)
    if keep <= 0:
        return "." * max(width, 0)
    count = 0
    cut = len(text)
    for offset, _, visible in _scan(text):
        if not visible:
            continue
        count += 1
        if count >= keep:
            cut = offset
            break
    return text[:cut] + ELLIPSIS


def ljust(text: str, width: int) -> str:
    return text + " " * max(0, width - visible_length(text))


@dataclass(slots=True)
class Painter:
    """Applies rich styles as raw ANSI codes, or nothing when disabled."""

    enabled: bool = True

    @property
    def color_system(self) -> ColorSystem | None:
        return ColorSystem.STANDARD if self.enabled else None

    def paint(self, text: str, style: str) -> str:
        if not style:
            return text
        return Style.parse(style).render(text, color_system=self.color_system)

    def swatches(self) -> str:
        if not self.enabled:
            return SWATCH_CELL * len(SWATCH_COLORS)
        return "".join(
            Style(bgcolor=color).render(SWATCH_CELL, color_system=self.color_system)
            for color in SWATCH_COLORS
        )
