from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

import pytest

from ghostfetch.context import SystemContext
from ghostfetch.models import CommandResult, Mount, Usage
from ghostfetch.probes import Probe

GIB = 1024**3


class FakeProbe(Probe):
    """In-memory host: files, directories and command outputs keyed by path/argv."""

    def __init__(self) -> None:
        self.files: Dict[str, str | bytes] = {}
        self.dirs: Dict[str, List[str]] = {}
        self.commands: Dict[Tuple[str, ...], str] = {}
        self.calls: List[Tuple[str, ...]] = []
        self.memory_usage: Usage | None = None
        self.swap_usage: Usage | None = None
        self.mount_table: List[Mount] = []
        self.usages: Dict[str, Usage] = {}
        self.cores: int | None = 8
        self.max_freq_mhz: float | None = None

    def add_file(self, path: str | Path, content: str | bytes) -> None:
        self.files[str(path)] = content

    def add_command(self, args: Sequence[str], stdout: str) -> None:
        self.commands[tuple(args)] = stdout

    def add_mount(self, mountpoint: str, fstype: str, total: int, used: int) -> None:
        self.mount_table.append(Mount(mountpoint=mountpoint, fstype=fstype))
        self.usages[mountpoint] = Usage(total=total, used=used)

    def read_text(self, path):
        content = self.files.get(str(path))
        if isinstance(content, bytes):
            return content.decode("utf-8")
        return content

    def read_bytes(self, path):
        content = self.files.get(str(path))
        if isinstance(content, str):
            return content.encode("utf-8")
        return content

    def run(self, args):
        self.calls.append(tuple(args))
        stdout = self.commands.get(tuple(args))
        if stdout is None:
            return None
        return CommandResult(stdout=stdout, stderr="", returncode=0)

    def list_dir(self, path):
        entries = self.dirs.get(str(path))
        return sorted(entries) if entries is not None else None

    def exists(self, path):
        key = str(path)
        return key in self.files or key in self.dirs

    def memory(self):
        return self.memory_usage

    def swap(self):
        return self.swap_usage

    def mounts(self):
        return list(self.mount_table)

    def disk_usage(self, mountpoint):
        return self.usages.get(mountpoint)

    def cpu_count(self):
        return self.cores

    def cpu_max_freq_mhz(self):
        return self.max_freq_mhz


def build_context(
    probe: FakeProbe,
    env: Dict[str, str] | None = None,
    home: str = "/home/ada",
    terminal_width: int = 120,
    pid: int = 4242,
) -> SystemContext:
    return SystemContext(
        env=dict(env or {}),
        home=Path(home),
        probe=probe,
        terminal_width=terminal_width,
        pid=pid,
        username="ada",
        hostname="engine",
    )


def stat_line(pid: int, name: str, ppid: int) -> str:
    return f"{pid} ({name}) S {ppid} {pid} {pid} 0 -1 4194560 1200 0 0 0"


def add_process_chain(probe: FakeProbe, chain: Iterable[Tuple[int, str, int]]) -> None:
    for pid, name, ppid in chain:
        probe.add_file(f"/proc/{pid}/stat", stat_line(pid, name, ppid))


@pytest.fixture
def probe() -> FakeProbe:
    return FakeProbe()
