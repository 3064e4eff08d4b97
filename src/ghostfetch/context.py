"""Per-invocation system context shared by every resolver."""

from __future__ import annotations

import getpass
import os
import shutil
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping

from .models import UNKNOWN
from .probes import Probe

DEFAULT_TERMINAL_WIDTH = 120


def detect_display_server(env: Mapping[str, str]) -> str:
    if "WAYLAND_DISPLAY" in env:
        return "Wayland"
    if "DISPLAY" in env:
        return "X11"
    return "TTY"


def _username(env: Mapping[str, str]) -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return env.get("USER", UNKNOWN)


def _hostname() -> str:
    try:
        return socket.gethostname() or UNKNOWN
    except OSError:
        return UNKNOWN


@dataclass(slots=True)
class SystemContext:
    """Snapshot of the process environment taken once at start-up.

    Resolvers read the environment, home directory and terminal geometry from
    here and reach the host only through ``probe``, so a test can hand them a
    fake probe and a synthetic environment.
    """

    env: Dict[str, str]
    home: Path
    probe: Probe
    terminal_width: int = DEFAULT_TERMINAL_WIDTH
    pid: int = 1
    username: str = UNKNOWN
    hostname: str = UNKNOWN
    display_server: str = field(default="")

    def __post_init__(self) -> None:
        if not self.display_server:
            self.display_server = detect_display_server(self.env)

    @classmethod
    def capture(cls, probe: Probe | None = None) -> "SystemContext":
        env = dict(os.environ)
        home = Path(env["HOME"]) if env.get("HOME") else Path.home()
        columns = shutil.get_terminal_size((DEFAULT_TERMINAL_WIDTH, 24)).columns
        return cls(
            env=env,
            home=home,
            probe=probe or Probe(),
            terminal_width=columns,
            pid=os.getpid(),
            username=_username(env),
            hostname=_hostname(),
        )

    def getenv(self, name: str) -> str | None:
        return self.env.get(name)

    def has_env(self, *names: str) -> bool:
        return any(name in self.env for name in names)

    def home_path(self, *parts: str) -> Path:
        return self.home.joinpath(*parts)
