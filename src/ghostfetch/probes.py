"""Probe primitives over files, commands and psutil.

Every primitive reports an unavailable source as ``None`` (or an empty
list / ``False``) and logs the reason at debug level. Nothing here raises.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import List, Sequence

import psutil

from .models import CommandResult, Mount, Usage

logger = logging.getLogger(__name__)

PathLike = str | Path


class Probe:
    """Access point for everything the resolvers read from the host."""

    def read_text(self, path: PathLike) -> str | None:
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("read_text %s unavailable: %s", path, exc)
            return None

    def read_bytes(self, path: PathLike) -> bytes | None:
        try:
            return Path(path).read_bytes()
        except OSError as exc:
            logger.debug("read_bytes %s unavailable: %s", path, exc)
            return None

    def run(self, args: Sequence[str]) -> CommandResult | None:
        try:
            result = subprocess.run(
                list(args),
                check=False,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                stdin=subprocess.DEVNULL,
            )
        except OSError as exc:
            logger.debug("run %s unavailable: %s", args[0], exc)
            return None
        if result.returncode != 0:
            logger.debug("run %s exited with %s", " ".join(args), result.returncode)
            return None
        try:
            stdout = result.stdout.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("run %s produced non-UTF8 output", args[0])
            return None
        stderr = result.stderr.decode("utf-8", errors="replace")
        return CommandResult(stdout=stdout, stderr=stderr, returncode=result.returncode)

    def list_dir(self, path: PathLike) -> List[str] | None:
        try:
            return sorted(os.listdir(path))
        except OSError as exc:
            logger.debug("list_dir %s unavailable: %s", path, exc)
            return None

    def exists(self, path: PathLike) -> bool:
        return os.path.exists(path)

    def memory(self) -> Usage | None:
        try:
            mem = psutil.virtual_memory()
        except (OSError, RuntimeError) as exc:
            logger.debug("memory reading unavailable: %s", exc)
            return None
        return Usage(total=mem.total, used=mem.total - mem.available)

    def swap(self) -> Usage | None:
        try:
            swap = psutil.swap_memory()
        except (OSError, RuntimeError) as exc:
            logger.debug("swap reading unavailable: %s", exc)
            return None
        return Usage(total=swap.total, used=swap.used)

    def mounts(self) -> List[Mount]:
        try:
            partitions = psutil.disk_partitions(all=False)
        except (OSError, RuntimeError) as exc:
            logger.debug("mount table unavailable: %s", exc)
            return []
        return [Mount(mountpoint=part.mountpoint, fstype=part.fstype) for part in partitions]

    def disk_usage(self, mountpoint: str) -> Usage | None:
        try:
            usage = psutil.disk_usage(mountpoint)
        except OSError as exc:
            logger.debug("disk usage for %s unavailable: %s", mountpoint, exc)
            return None
        # used = total - available, matching what df reports to unprivileged users
        return Usage(total=usage.total, used=usage.total - usage.free)

    def cpu_count(self) -> int | None:
        return psutil.cpu_count(logical=True)

    def cpu_max_freq_mhz(self) -> float | None:
        try:
            freq = psutil.cpu_freq()
        except (OSError, RuntimeError, NotImplementedError) as exc:
            logger.debug("cpu frequency unavailable: %s", exc)
            return None
        if freq is None:
            return None
        return freq.max or freq.current or None
