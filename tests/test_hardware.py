from ghostfetch.hardware import (
    format_disk,
    parse_gpu_line,
    ram_speed_from_dmidecode,
    ram_speed_from_lshw,
    resolve_cpu,
    resolve_disks,
    resolve_gpus,
    resolve_memory,
    resolve_swap,
)
from ghostfetch.models import Usage

from conftest import GIB, FakeProbe, build_context

LSPCI = """\
00:00.0 "Host bridge" "Advanced Micro Devices, Inc. [AMD]" "Device 14d8" "ASUSTeK Computer Inc." "Device 8877"
01:00.0 "VGA compatible controller" "NVIDIA Corporation" "GB202 [GeForce RTX 5090]" -ra1 "NVIDIA Corporation" "Device 2054"
0e:00.0 "VGA compatible controller" "Advanced Micro Devices, Inc. [AMD/ATI]" "Granite Ridge [Radeon Graphics]" -rc5 "ASUSTeK Computer Inc." "Device 8877"
"""


def test_gpu_list_orders_product_before_chip() -> None:
    probe = FakeProbe()
    probe.add_command(("lspci", "-mm"), LSPCI)
    assert resolve_gpus(build_context(probe)) == [
        "NVIDIA GeForce RTX 5090 [GB202] [dGPU]",
        "AMD Radeon [Granite Ridge] [iGPU]",
    ]


def test_gpu_without_brackets_and_intel_igpu() -> None:
    line = '00:02.0 "VGA compatible controller" "Intel Corporation" "Alder Lake-P GT2 [Iris Xe Graphics]" -r0c'
    assert parse_gpu_line(line) == "Intel Iris Xe [Alder Lake-P GT2] [iGPU]"
    plain = '03:00.0 "3D controller" "NVIDIA Corporation" "Device 2d19" -ra1'
    assert parse_gpu_line(plain) == "NVIDIA Device 2d19 [dGPU]"
    assert parse_gpu_line('00:1f.3 "Audio device" "Intel Corporation" "HD Audio"') is None


def test_gpu_unknown(probe: FakeProbe) -> None:
    assert resolve_gpus(build_context(probe)) == ["Unknown"]


def test_dmidecode_prefers_configured_speed() -> None:
    output = """
Memory Device
\tSize: 32 GB
\tSpeed: 4800 MT/s
\tConfigured Memory Speed: 6000 MT/s
Memory Device
\tSpeed: 4800 MT/s
\tConfigured Memory Speed: 6000 MT/s
"""
    assert ram_speed_from_dmidecode(output) == 6000
    assert ram_speed_from_dmidecode("\tSpeed: 3200 MT/s\n\tConfigured Memory Speed: Unknown\n") == 3200
    assert ram_speed_from_dmidecode("\tSpeed: Unknown\n") is None


def test_lshw_speed() -> None:
    output = "/0/1/0  memory  16GiB DIMM DDR4 Synchronous Unbuffered 3200 MHz (0.3 ns)\n"
    assert ram_speed_from_lshw(output) == 3200


def test_memory_with_and_without_speed(probe: FakeProbe) -> None:
    probe.memory_usage = Usage(total=64 * GIB, used=16 * GIB)
    ctx = build_context(probe)
    assert resolve_memory(ctx) == "16.00 GiB / 64.00 GiB (25%)"
    probe.add_command(("lshw", "-C", "memory", "-short"), "/0/1/0 memory 32GiB DIMM DDR5 6000 MHz\n")
    assert resolve_memory(ctx) == "16.00 GiB / 64.00 GiB (25%) @ 6000 MT/s"


def test_swap_omitted_when_absent(probe: FakeProbe) -> None:
    probe.swap_usage = Usage(total=0, used=0)
    assert resolve_swap(build_context(probe)) is None
    probe.swap_usage = Usage(total=8 * GIB, used=2 * GIB)
    assert resolve_swap(build_context(probe)) == "2.00 GiB / 8.00 GiB (25%)"


def test_cpu(probe: FakeProbe) -> None:
    probe.add_file(
        "/proc/cpuinfo",
        "processor\t: 0\nmodel name\t: AMD Ryzen 9 9950X 16-Core Processor\n"
        "processor\t: 1\nmodel name\t: AMD Ryzen 9 9950X 16-Core Processor\n",
    )
    probe.cores = 32
    probe.add_file("/sys/devices/system/cpu/cpu0/cpufreq/cpuinfo_max_freq", "5752000\n")
    assert resolve_cpu(build_context(probe)) == "AMD Ryzen 9 9950X 16-Core Processor (32) @ 5.75 GHz"


def test_cpu_brand_cleanup_and_psutil_frequency(probe: FakeProbe) -> None:
    probe.add_file("/proc/cpuinfo", "processor\t: 0\nmodel name\t: Intel(R) Core(TM) i7-8550U CPU @ 1.80GHz\n")
    probe.cores = None
    probe.max_freq_mhz = 4000.0
    assert resolve_cpu(build_context(probe)) == "Intel Core i7-8550U @ 1.80GHz (1) @ 4.00 GHz"


def test_cpu_unknown(probe: FakeProbe) -> None:
    assert resolve_cpu(build_context(probe)) == "Unknown"


def test_disk_units() -> None:
    assert format_disk("/data", "btrfs", Usage(total=2048 * GIB, used=1024 * GIB)) == (
        "(/data) 1.00 TiB / 2.00 TiB (50%) - btrfs"
    )
    assert format_disk("/", "ext4", Usage(total=500 * GIB, used=125 * GIB)) == (
        "(/) 125.00 GiB / 500.00 GiB (25%) - ext4"
    )


def test_disks_filtered_by_mountpoint(probe: FakeProbe) -> None:
    probe.add_mount("/", "ext4", 500 * GIB, 100 * GIB)
    probe.add_mount("/boot", "vfat", 1 * GIB, 0)
    probe.add_mount("/home", "xfs", 1000 * GIB, 500 * GIB)
    probe.add_mount("/run/media/usb", "exfat", 64 * GIB, 1 * GIB)
    probe.add_mount("/mnt/backup", "ext4", 4096 * GIB, 1024 * GIB)
    probe.add_mount("/homeless", "ext4", 10 * GIB, 1 * GIB)
    probe.add_mount("/mediaserver", "ext4", 10 * GIB, 1 * GIB)
    probe.add_mount("/database", "ext4", 10 * GIB, 1 * GIB)
    probe.add_mount("/home", "xfs", 1000 * GIB, 500 * GIB)
    disks = resolve_disks(build_context(probe))
    assert [disk.split()[0] for disk in disks] == ["(/)", "(/home)", "(/mnt/backup)"]
    assert disks[2] == "(/mnt/backup) 1.00 TiB / 4.00 TiB (25%) - ext4"
