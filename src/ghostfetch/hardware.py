"""Hardware facts: CPU, GPUs, memory, swap and disks."""

from __future__ import annotations

import logging
import re
from functools import partial
from typing import List, Sequence

from .chain import first_of
from .context import SystemContext
from .models import UNKNOWN, Usage
from .utils import to_gib

logger = logging.getLogger(__name__)

CPU_MAX_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/cpuinfo_max_freq"

CPU_NOISE = ("(R)", "(TM)", "CPU ")

GPU_CLASSES = ("VGA", "3D", "Display")

GPU_VENDORS = (
    ("NVIDIA Corporation", "NVIDIA"),
    ("Advanced Micro Devices, Inc. [AMD/ATI]", "AMD"),
    ("Advanced Micro Devices, Inc. [AMD]", "AMD"),
    ("Intel Corporation", "Intel"),
)

IGPU_KEYWORDS = ("radeon graphics", "integrated", "granite ridge", "raphael", "phoenix")

DISK_PREFIXES = ("/home", "/data", "/mnt", "/media")

MAX_SANE_SPEED = 100000


def clean_cpu_brand(brand: str) -> str:
    for noise in CPU_NOISE:
        brand = brand.replace(noise, "")
    return " ".join(brand.split())


def resolve_cpu(ctx: SystemContext) -> str:
    cpuinfo = ctx.probe.read_text("/proc/cpuinfo") or ""
    brand = ""
    processors = 0
    for line in cpuinfo.splitlines():
        key, _, value = line.partition(":")
        key = key.strip()
        if key == "model name" and not brand:
            brand = value.strip()
        elif key == "processor":
            processors += 1
    if not brand:
        return UNKNOWN
    cores = ctx.probe.cpu_count() or processors

    def from_cpufreq() -> float | None:
        content = ctx.probe.read_text(CPU_MAX_FREQ)
        try:
            return float(content.strip()) / 1_000_000.0 if content else None
        except ValueError:
            return None

    def from_psutil() -> float | None:
        mhz = ctx.probe.cpu_max_freq_mhz()
        return mhz / 1000.0 if mhz else None

    ghz = first_of((from_cpufreq, from_psutil), default=0.0)
    return f"{clean_cpu_brand(brand)} ({cores}) @ {ghz:.2f} GHz"


def _normalize_vendor(vendor: str) -> str:
    for long_name, short_name in GPU_VENDORS:
        vendor = vendor.replace(long_name, short_name)
    return vendor


def is_integrated(device: str) -> bool:
    lowered = device.lower()
    if any(keyword in lowered for keyword in IGPU_KEYWORDS):
        return True
    return "intel" in lowered and "graphics" in lowered


def parse_gpu_line(line: str) -> str | None:
    """Describe one ``lspci -mm`` row, or None when it is not a display device."""
    fields = line.split('"')
    if len(fields) < 6:
        return None
    device_class, vendor, device = fields[1], fields[3], fields[5]
    if not any(name in device_class for name in GPU_CLASSES):
        return None
    integrated = is_integrated(device) or (
        "intel" in vendor.lower() and "graphics" in device.lower()
    )
    vendor = _normalize_vendor(vendor)
    start, end = device.find("["), device.find("]")
    if 0 <= start < end:
        # "GB202 [GeForce RTX 5090]" -> "GeForce RTX 5090 [GB202]"
        chip = device[:start].strip()
        product = device[start + 1 : end]
        if integrated:
            product = product.replace(" Graphics", "")
        name = f"{vendor} {product} [{chip}]" if chip else f"{vendor} {product}"
    else:
        name = f"{vendor} {device}"
    tag = "[iGPU]" if integrated else "[dGPU]"
    return f"{name} {tag}"


def resolve_gpus(ctx: SystemContext) -> List[str]:
    result = ctx.probe.run(("lspci", "-mm"))
    gpus: List[str] = []
    if result is not None:
        for line in result.lines():
            described = parse_gpu_line(line)
            if described:
                gpus.append(described)
    return gpus or [UNKNOWN]


def _parse_speed(value: str) -> int | None:
    match = re.match(r"\s*(\d+)\s*(?:MT/s|MHz)", value)
    if not match:
        return None
    speed = int(match.group(1))
    if 0 < speed < MAX_SANE_SPEED:
        return speed
    return None


def ram_speed_from_dmidecode(output: str) -> int | None:
    """Prefer the configured (running) speed over the rated JEDEC speed."""
    configured = None
    rated = None
    for line in output.splitlines():
        line = line.strip()
        if line.startswith("Configured Memory Speed:"):
            configured = configured or _parse_speed(line.split(":", 1)[1])
        elif line.startswith("Speed:") and rated is None:
            rated = _parse_speed(line.split(":", 1)[1])
    return configured or rated


def ram_speed_from_lshw(output: str) -> int | None:
    for line in output.splitlines():
        if "DIMM" not in line and "System Memory" not in line:
            continue
        match = re.search(r"(\d+)\s*(?:MT/s|MHz)", line)
        if match:
            speed = _parse_speed(match.group(0))
            if speed:
                return speed
    return None


def resolve_ram_speed(ctx: SystemContext) -> int | None:
    def run_parser(args: Sequence[str], parser) -> int | None:
        result = ctx.probe.run(args)
        return parser(result.stdout) if result is not None else None

    return first_of(
        (
            partial(run_parser, ("dmidecode", "-t", "memory"), ram_speed_from_dmidecode),
            partial(run_parser, ("lshw", "-C", "memory", "-short"), ram_speed_from_lshw),
        )
    )


def format_usage(usage: Usage) -> str:
    return f"{to_gib(usage.used):.2f} GiB / {to_gib(usage.total):.2f} GiB ({usage.percent}%)"


def resolve_memory(ctx: SystemContext) -> str:
    usage = ctx.probe.memory()
    if usage is None or usage.total <= 0:
        return UNKNOWN
    text = format_usage(usage)
    speed = resolve_ram_speed(ctx)
    if speed:
        text += f" @ {speed} MT/s"
    return text


def resolve_swap(ctx: SystemContext) -> str | None:
    usage = ctx.probe.swap()
    if usage is None or usage.total == 0:
        return None
    return format_usage(usage)


def is_displayed_mount(mountpoint: str) -> bool:
    if mountpoint == "/":
        return True
    return any(
        mountpoint == prefix or mountpoint.startswith(prefix + "/") for prefix in DISK_PREFIXES
    )


def format_disk(mountpoint: str, fstype: str, usage: Usage) -> str:
    total = to_gib(usage.total)
    used = to_gib(usage.used)
    if total >= 1024.0:
        sizes = f"{used / 1024.0:.2f} TiB / {total / 1024.0:.2f} TiB"
    else:
        sizes = f"{used:.2f} GiB / {total:.2f} GiB"
    return f"({mountpoint}) {sizes} ({usage.percent}%) - {fstype}"


def resolve_disks(ctx: SystemContext) -> List[str]:
    disks: List[str] = []
    seen = set()
    for mount in ctx.probe.mounts():
        if mount.mountpoint in seen or not is_displayed_mount(mount.mountpoint):
            continue
        seen.add(mount.mountpoint)
        usage = ctx.probe.disk_usage(mount.mountpoint)
        if usage is None or usage.total <= 0:
            continue
        disks.append(format_disk(mount.mountpoint, mount.fstype, usage))
    return disks
