"""Process ancestry walk over /proc status records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from .context import SystemContext
from .exceptions import ProbeError

logger = logging.getLogger(__name__)

MAX_HOPS = 20


@dataclass(slots=True)
class ProcessRecord:
    pid: int
    name: str
    ppid: int


def parse_stat(pid: int, content: str) -> ProcessRecord:
    """Parse one ``/proc/<pid>/stat`` line.

    The command name sits between the first ``(`` and the last ``)`` and may
    itself contain spaces or parentheses; the state and parent PID follow.
    """
    start = content.find("(")
    end = content.rfind(")")
    if start < 0 or end < start:
        raise ProbeError(f"malformed stat record for pid {pid}")
    name = content[start + 1 : end]
    rest = content[end + 1 :].split()
    if len(rest) < 2:
        raise ProbeError(f"truncated stat record for pid {pid}")
    try:
        ppid = int(rest[1])
    except ValueError as exc:
        raise ProbeError(f"bad parent pid in stat record for pid {pid}") from exc
    return ProcessRecord(pid=pid, name=name, ppid=ppid)


def ancestry(ctx: SystemContext, start: int | None = None) -> Iterator[ProcessRecord]:
    """Yield the current process and its ancestors.

    The walk stops after ``MAX_HOPS`` records, once the parent is PID 1 (or
    lower), or when a record cannot be read or parsed.
    """
    pid = ctx.pid if start is None else start
    for _ in range(MAX_HOPS):
        content = ctx.probe.read_text(f"/proc/{pid}/stat")
        if content is None:
            return
        try:
            record = parse_stat(pid, content)
        except ProbeError as exc:
            logger.debug("process walk stopped: %s", exc)
            return
        yield record
        if record.ppid <= 1:
            return
        pid = record.ppid
