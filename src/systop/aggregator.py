"""Merge raw provider readings into an immutable Snapshot."""

import time
from collections.abc import Iterable

from systop.models import (
    DiskEntry,
    InterfaceEntry,
    MemoryUsage,
    NetworkSummary,
    ProcessSnapshot,
    Snapshot,
    StorageSummary,
    TemperatureReading,
    TemperatureSummary,
)
from systop.provider import RawReadings
from systop.thresholds import classify_swap, classify_temperature

CPU_SENSOR_KEYWORDS = ("cpu", "core", "processor")
MAX_INTERFACES = 4
MAX_DISKS = 4


def is_cpu_sensor(label: str) -> bool:
    """Return True if a sensor label looks CPU-related."""
    lowered = label.lower()
    return any(keyword in lowered for keyword in CPU_SENSOR_KEYWORDS)


def summarize_temperatures(readings: Iterable[TemperatureReading]) -> TemperatureSummary:
    """
    Summarize the CPU-related sensors with a positive reading.

    The severity band is taken from the average, not the maximum.
    """
    temps = [r.celsius for r in readings if is_cpu_sensor(r.label) and r.celsius > 0]
    if not temps:
        return TemperatureSummary.unavailable()

    average = sum(temps) / len(temps)
    return TemperatureSummary(
        average=average,
        maximum=max(temps),
        severity=classify_temperature(average),
        sensor_count=len(temps),
    )


def summarize_network(
    interfaces: Iterable[InterfaceEntry], max_entries: int = MAX_INTERFACES
) -> NetworkSummary:
    """Total traffic over active interfaces, keeping the first few for display."""
    active_count = 0
    total_received = 0
    total_transmitted = 0
    shown: list[InterfaceEntry] = []

    for interface in interfaces:
        if not interface.active:
            continue
        active_count += 1
        total_received += interface.received_bytes
        total_transmitted += interface.transmitted_bytes
        if len(shown) < max_entries:
            shown.append(interface)

    return NetworkSummary(
        active_count=active_count,
        total_received=total_received,
        total_transmitted=total_transmitted,
        interfaces=tuple(shown),
    )


def summarize_storage(disks: Iterable[DiskEntry], max_entries: int = MAX_DISKS) -> StorageSummary:
    """Total space over disks with nonzero capacity, keeping the first few for display."""
    disk_count = 0
    total_bytes = 0
    used_bytes = 0
    shown: list[DiskEntry] = []

    for disk in disks:
        if disk.total_bytes <= 0:
            continue
        disk_count += 1
        total_bytes += disk.total_bytes
        used_bytes += disk.used_bytes
        if len(shown) < max_entries:
            shown.append(disk)

    return StorageSummary(
        disk_count=disk_count,
        total_bytes=total_bytes,
        used_bytes=used_bytes,
        disks=tuple(shown),
    )


def build_snapshot(
    readings: RawReadings,
    timestamp: float | None = None,
    *,
    max_interfaces: int = MAX_INTERFACES,
    max_disks: int = MAX_DISKS,
) -> Snapshot:
    """
    Build a Snapshot from one provider read.

    Args:
        readings: Raw readings; each iterable is consumed exactly once.
        timestamp: Wall-clock time of the read. Defaults to now.
        max_interfaces: How many active interfaces to keep for display.
        max_disks: How many disks to keep for display.

    Returns:
        A new immutable Snapshot. Sparse or zero-valued input never raises;
        it is reported through None percents and unavailable summaries.
    """
    temperatures = tuple(TemperatureReading(label, celsius) for label, celsius in readings.temperatures)
    disks = tuple(DiskEntry(name, total, available) for name, total, available in readings.disks)
    interfaces = tuple(InterfaceEntry(name, rx, tx) for name, rx, tx in readings.interfaces)
    processes = tuple(ProcessSnapshot(pid, name, cpu, rss) for pid, name, cpu, rss in readings.processes)

    memory = MemoryUsage(total=readings.memory_total, used=readings.memory_used)
    swap = MemoryUsage(total=readings.swap_total, used=readings.swap_used)

    return Snapshot(
        timestamp=time.time() if timestamp is None else timestamp,
        cpu_percent=float(readings.cpu_percent),
        memory=memory,
        swap=swap,
        load_avg=tuple(readings.load_avg),
        uptime_seconds=readings.uptime_seconds,
        temperatures=temperatures,
        disks=disks,
        interfaces=interfaces,
        processes=processes,
        temperature=summarize_temperatures(temperatures),
        swap_severity=classify_swap(swap.percent),
        network=summarize_network(interfaces, max_interfaces),
        storage=summarize_storage(disks, max_disks),
    )
