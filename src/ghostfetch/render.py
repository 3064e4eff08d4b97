"""Two-column layout of the logo block beside the info block."""

from __future__ import annotations

from itertools import zip_longest
from typing import List, Sequence

from .ansi import Painter, ljust, truncate
from .models import Logo

MIN_INFO_WIDTH = 60
LOGO_GAP = 2
NARROW_MARGIN = 10


def info_width(terminal_width: int, logo_width: int) -> int:
    if terminal_width > logo_width + NARROW_MARGIN:
        return terminal_width - logo_width - LOGO_GAP
    return MIN_INFO_WIDTH


def render_dual(
    logo: Logo, info_lines: Sequence[str], terminal_width: int, painter: Painter
) -> List[str]:
    max_width = info_width(terminal_width, logo.width)
    rows: List[str] = []
    for logo_line, info_line in zip_longest(logo.lines, info_lines, fillvalue=""):
        padded = ljust(logo_line, logo.width)
        rows.append(painter.paint(padded, logo.primary) + truncate(info_line, max_width))
    rows.append(" " * logo.width + painter.swatches())
    return rows


def render_single(info_lines: Sequence[str], terminal_width: int, painter: Painter) -> List[str]:
    max_width = max(terminal_width - LOGO_GAP, 0)
    rows = [truncate(line, max_width) for line in info_lines]
    rows.append(painter.swatches())
    return rows


def render(
    info_lines: Sequence[str],
    logo: Logo | None,
    terminal_width: int,
    painter: Painter,
) -> List[str]:
    """Lay out the summary; the mode is fixed by whether a logo was chosen."""
    if logo is None:
        return render_single(info_lines, terminal_width, painter)
    return render_dual(logo, info_lines, terminal_width, painter)
