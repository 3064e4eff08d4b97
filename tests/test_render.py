from ghostfetch.ansi import Painter, strip_ansi, visible_length
from ghostfetch.models import Logo
from ghostfetch.render import MIN_INFO_WIDTH, info_width, render

PLAIN = Painter(enabled=False)

LOGO = Logo(name="box", art="+--+\n|  |\n+--+", width=6, primary="cyan", secondary="blue")


def test_info_width_has_a_floor() -> None:
    assert info_width(120, 40) == 78
    assert info_width(50, 40) == MIN_INFO_WIDTH
    assert info_width(51, 40) == 9


def test_dual_column_pads_logo_and_adds_swatches() -> None:
    rows = render(["ada@engine", "----------"], LOGO, 80, PLAIN)
    assert rows == [
        "+--+  ada@engine",
        "|  |  ----------",
        "+--+  ",
        "      " + " " * 24,
    ]


def test_dual_column_truncates_info_lines() -> None:
    long_line = "Kernel       " + "x" * 100
    rows = render([long_line], LOGO, 30, PLAIN)
    assert rows[0].startswith("+--+  Kernel")
    assert rows[0].endswith("...")
    assert visible_length(rows[0]) <= 30


def test_info_lines_longer_than_logo_get_blank_padding() -> None:
    rows = render(["a", "b", "c", "d", "e"], LOGO, 80, PLAIN)
    assert rows[4] == "      e"
    assert len(rows) == 6


def test_coloured_logo_keeps_visible_width() -> None:
    rows = render(["info"], LOGO, 80, Painter(enabled=True))
    assert strip_ansi(rows[0]) == "+--+  info"
    assert visible_length(rows[-1]) == 6 + 24


def test_single_column_fits_narrow_terminal() -> None:
    lines = ["ada@engine", "-" * 10] + [f"Disk         {'z' * 200}"] * 3 + [""]
    rows = render(lines, None, 80, PLAIN)
    assert all(visible_length(row) <= 78 for row in rows)
    assert rows[0] == "ada@engine"
    assert rows[-1] == " " * 24
