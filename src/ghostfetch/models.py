"""Data models for ghostfetch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

UNKNOWN = "Unknown"


@dataclass(slots=True)
class Fact:
    label: str
    value: str | None
    key: str = ""

    def __post_init__(self) -> None:
        if not self.key:
            self.key = self.label.lower()

    @property
    def visible(self) -> bool:
        return self.value is not None


@dataclass(slots=True)
class CommandResult:
    stdout: str
    stderr: str
    returncode: int

    def lines(self) -> List[str]:
        return self.stdout.splitlines()

    def first_line(self) -> str:
        for line in self.stdout.splitlines():
            return line
        return ""


@dataclass(slots=True)
class Usage:
    total: int
    used: int

    @property
    def percent(self) -> int:
        if self.total <= 0:
            return 0
        return int(self.used / self.total * 100)


@dataclass(slots=True)
class Mount:
    mountpoint: str
    fstype: str


@dataclass(slots=True)
class Monitor:
    name: str
    resolution: str
    refresh_rate: str
    hdr: bool = False

    def describe(self) -> str:
        text = f"({self.name}) {self.resolution} @ {self.refresh_rate}"
        if self.hdr:
            text += " [HDR]"
        return text


@dataclass(slots=True)
class NetworkAddress:
    interface: str
    address: str


@dataclass(slots=True)
class Logo:
    name: str
    art: str
    width: int
    primary: str
    secondary: str

    @property
    def lines(self) -> List[str]:
        return self.art.splitlines()
