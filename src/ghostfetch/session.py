"""User session facts: shell, desktop, window manager, terminal, editor."""

from __future__ import annotations

import logging
import re
from functools import partial
from pathlib import Path
from typing import Callable, List, Sequence, Tuple

from .chain import first_of
from .context import SystemContext
from .models import UNKNOWN
from .proctree import ancestry

logger = logging.getLogger(__name__)

DESKTOP_WMS = {
    "kde": "KWin",
    "plasma": "KWin",
    "gnome": "Mutter",
    "xfce": "Xfwm4",
    "cinnamon": "Muffin",
    "x-cinnamon": "Muffin",
    "mate": "Marco",
    "lxqt": "Openbox",
    "budgie": "Mutter",
    "hyprland": "Hyprland",
    "sway": "Sway",
    "i3": "i3",
}

STANDALONE_WMS: Sequence[str] = (
    "hyprland",
    "sway",
    "i3",
    "bspwm",
    "dwm",
    "awesome",
    "openbox",
    "fluxbox",
    "herbstluftwm",
    "qtile",
    "xmonad",
    "spectrwm",
    "river",
    "niri",
)

# (process name, display name) in match priority order
TERMINALS: Sequence[Tuple[str, str]] = (
    ("ghostty", "ghostty"),
    ("alacritty", "alacritty"),
    ("kitty", "kitty"),
    ("konsole", "konsole"),
    ("gnome-terminal-server", "gnome-terminal"),
    ("xfce4-terminal", "xfce4-terminal"),
    ("terminator", "terminator"),
    ("tilix", "tilix"),
    ("urxvt", "urxvt"),
    ("foot", "foot"),
    ("wezterm-gui", "wezterm"),
    ("xterm", "xterm"),
    ("lxterminal", "lxterminal"),
    ("mate-terminal", "mate-terminal"),
    ("yakuake", "yakuake"),
    ("guake", "guake"),
    ("st", "st"),
)

TERMINAL_ENV_MARKERS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("GHOSTTY_RESOURCES_DIR", "GHOSTTY_BIN_DIR"), "ghostty"),
    (("KITTY_WINDOW_ID", "KITTY_PID"), "kitty"),
    (("ALACRITTY_WINDOW_ID", "ALACRITTY_SOCKET"), "alacritty"),
    (("WEZTERM_EXECUTABLE", "WEZTERM_PANE"), "wezterm"),
    (("KONSOLE_VERSION", "KONSOLE_DBUS_SESSION"), "konsole"),
)

# editor basename -> (command, display name, version pattern on first line)
EDITORS = {
    "nvim": ("nvim", "Neovim", r"^NVIM v(\S+)"),
    "neovim": ("nvim", "Neovim", r"^NVIM v(\S+)"),
    "vim": ("vim", "Vim", r"Vi IMproved (\S+)"),
    "nano": ("nano", "Nano", r"version (\S+)"),
    "emacs": ("emacs", "Emacs", r"Emacs (\S+)"),
    "hx": ("hx", "Helix", r"^helix (\S+)"),
    "helix": ("hx", "Helix", r"^helix (\S+)"),
    "code": ("code", "VS Code", r"^(\d\S*)"),
    "code-oss": ("code", "VS Code", r"^(\d\S*)"),
    "micro": ("micro", "Micro", r"Version: (\S+)"),
    "kate": ("kate", "Kate", r"kate (\S+)"),
    "gedit": ("gedit", "gedit", r"gedit (\S+)"),
    "subl": ("subl", "Sublime Text", r"Build (\S+)"),
    "sublime_text": ("subl", "Sublime Text", r"Build (\S+)"),
}

_VERSION_TOKEN = re.compile(r"^(?:\d|v\d)")


def version_token(line: str, allow_v_prefix: bool = True) -> str | None:
    """Return the first token that looks like a version number."""
    for token in line.split():
        if token[0].isascii() and token[0].isdigit():
            return token
        if allow_v_prefix and _VERSION_TOKEN.match(token):
            return token[1:]
    return None


def _query_version(ctx: SystemContext, program: str, allow_v_prefix: bool = True) -> str | None:
    result = ctx.probe.run((program, "--version"))
    if result is None:
        return None
    return version_token(result.first_line(), allow_v_prefix=allow_v_prefix)


def resolve_shell(ctx: SystemContext) -> str:
    shell_path = ctx.getenv("SHELL")
    if not shell_path:
        return UNKNOWN
    shell = Path(shell_path).name or UNKNOWN
    version = _query_version(ctx, shell, allow_v_prefix=False)
    return f"{shell} {version}" if version else shell


def resolve_de(ctx: SystemContext) -> str:
    desktop = ctx.getenv("XDG_CURRENT_DESKTOP") or ctx.getenv("DESKTOP_SESSION") or UNKNOWN
    lowered = desktop.lower()
    if "kde" in lowered or "plasma" in lowered:
        result = ctx.probe.run(("plasmashell", "--version"))
        if result is not None:
            for line in result.lines():
                if "plasmashell" in line and line.split():
                    return f"KDE Plasma {line.split()[-1]}"
    return desktop


def running_processes(ctx: SystemContext) -> List[str]:
    result = ctx.probe.run(("ps", "-e", "-o", "comm="))
    if result is None:
        return []
    return [line.strip().lower() for line in result.lines() if line.strip()]


def resolve_wm(ctx: SystemContext) -> str:
    desktop = ctx.getenv("XDG_CURRENT_DESKTOP")

    def from_desktop() -> str | None:
        if not desktop:
            return None
        for component in desktop.split(":"):
            wm = DESKTOP_WMS.get(component.strip().lower())
            if wm:
                return wm
        return None

    def from_processes() -> str | None:
        running = set(running_processes(ctx))
        for wm in STANDALONE_WMS:
            if wm in running:
                return wm
        return None

    wm = first_of((from_desktop, from_processes), default=desktop or UNKNOWN)
    return f"{wm} ({ctx.display_server})"


def _terminal_with_version(ctx: SystemContext, name: str) -> str:
    version = _query_version(ctx, name)
    return f"{name} {version}" if version else name


def match_terminal(command: str) -> str | None:
    command = command.lower()
    for process_name, display_name in TERMINALS:
        if command in (process_name, display_name):
            return display_name
        # two-letter names such as "st" only match exactly
        if len(process_name) > 2 and process_name in command:
            return display_name
    return None


def resolve_terminal(ctx: SystemContext) -> str:
    def from_markers() -> str | None:
        for names, terminal in TERMINAL_ENV_MARKERS:
            if ctx.has_env(*names):
                return terminal
        return None

    def from_term_program() -> str | None:
        program = ctx.getenv("TERM_PROGRAM")
        if not program:
            return None
        return match_terminal(program)

    def from_ancestry() -> str | None:
        for record in ancestry(ctx):
            terminal = match_terminal(record.name)
            if terminal:
                logger.debug("terminal %s found at pid %s", terminal, record.pid)
                return terminal
        return None

    terminal = first_of((from_markers, from_term_program, from_ancestry))
    if terminal:
        return _terminal_with_version(ctx, terminal)
    return ctx.getenv("TERM") or UNKNOWN


def _font_from_ghostty(ctx: SystemContext) -> str | None:
    content = ctx.probe.read_text(ctx.home_path(".config", "ghostty", "config"))
    for line in (content or "").splitlines():
        line = line.strip()
        if line.startswith("font-family") and "=" in line:
            font = line.split("=", 1)[1].strip().strip('"')
            if font:
                return font
    return None


def _font_from_kitty(ctx: SystemContext) -> str | None:
    content = ctx.probe.read_text(ctx.home_path(".config", "kitty", "kitty.conf"))
    for line in (content or "").splitlines():
        parts = line.strip().split(None, 1)
        if len(parts) == 2 and parts[0] == "font_family":
            return parts[1].strip()
    return None


def _font_from_alacritty(ctx: SystemContext) -> str | None:
    for name in ("alacritty.toml", "alacritty.yml"):
        content = ctx.probe.read_text(ctx.home_path(".config", "alacritty", name))
        for line in (content or "").splitlines():
            if "family" not in line or line.strip().startswith("#"):
                continue
            value = re.split(r"[=:]", line, maxsplit=1)
            if len(value) == 2:
                font = value[1].strip().strip('"').strip("'")
                if font:
                    return font
    return None


def _font_from_konsole(ctx: SystemContext) -> str | None:
    directory = ctx.home_path(".local", "share", "konsole")
    for entry in ctx.probe.list_dir(directory) or []:
        if not entry.endswith(".profile"):
            continue
        content = ctx.probe.read_text(directory / entry)
        for line in (content or "").splitlines():
            if line.startswith("Font="):
                # Font=Name,size,-1,5,...
                name = line[len("Font=") :].split(",")[0]
                if name:
                    return name
    return None


FONT_SOURCES: Sequence[Callable[[SystemContext], str | None]] = (
    _font_from_ghostty,
    _font_from_kitty,
    _font_from_alacritty,
    _font_from_konsole,
)


def resolve_terminal_font(ctx: SystemContext) -> str | None:
    return first_of(partial(source, ctx) for source in FONT_SOURCES)


def resolve_multiplexer(ctx: SystemContext) -> str | None:
    if ctx.has_env("TMUX"):
        result = ctx.probe.run(("tmux", "-V"))
        if result is not None and result.stdout.strip():
            return result.stdout.strip()
        return "tmux"
    if ctx.has_env("ZELLIJ", "ZELLIJ_SESSION_NAME"):
        result = ctx.probe.run(("zellij", "--version"))
        if result is not None:
            version = result.stdout.strip().replace("zellij ", "")
            if version:
                return f"Zellij {version}"
        return "Zellij"
    if ctx.has_env("STY"):
        return "GNU Screen"
    return None


def resolve_editor(ctx: SystemContext) -> str | None:
    value = ctx.getenv("EDITOR") or ctx.getenv("VISUAL")
    if not value:
        return None
    # EDITOR may carry arguments, e.g. "code --wait"
    parts = value.split()
    if not parts:
        return None
    name = Path(parts[0]).name
    command, display, pattern = EDITORS.get(name, (name, name, None))
    if pattern is None:
        return display
    result = ctx.probe.run((command, "--version"))
    if result is not None:
        match = re.search(pattern, result.first_line())
        if match:
            return f"{display} {match.group(1)}"
    return display
