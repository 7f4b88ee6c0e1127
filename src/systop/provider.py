"""Raw system readings for systop, collected with psutil."""

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

import psutil

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when system-wide readings cannot be acquired."""


@dataclass(slots=True)
class RawReadings:
    """Unprocessed readings from one provider call."""

    cpu_percent: float
    memory_total: int
    memory_used: int
    swap_total: int
    swap_used: int
    load_avg: tuple[float, float, float]
    uptime_seconds: float
    temperatures: Iterable[tuple[str, float]] = field(default_factory=list)
    disks: Iterable[tuple[str, int, int]] = field(default_factory=list)
    interfaces: Iterable[tuple[str, int, int]] = field(default_factory=list)
    processes: Iterable[tuple[int, str, float, int]] = field(default_factory=list)


class ReadingProvider(Protocol):
    """Anything that can produce a RawReadings on demand."""

    def read(self) -> RawReadings: ...


class PsutilProvider:
    """
    Reading provider backed by psutil.

    Handles AccessDenied, NoSuchProcess and ZombieProcess errors per process
    and per mount gracefully; failures of system-wide calls raise
    ProviderError.
    """

    PROCESS_ATTRS = ["pid", "name", "cpu_percent", "memory_info"]

    def __init__(self) -> None:
        """Initialize the provider and prime the CPU counters."""
        try:
            # First call returns 0.0, subsequent calls measure since the last one
            psutil.cpu_percent(interval=None)
        except (psutil.Error, OSError) as exc:
            raise ProviderError(f"cannot read CPU counters: {exc}") from exc

    def read(self) -> RawReadings:
        """Collect one set of raw readings."""
        try:
            cpu_percent = psutil.cpu_percent(interval=None)
            mem = psutil.virtual_memory()
            swap = psutil.swap_memory()
            load_avg = psutil.getloadavg()
            uptime = time.time() - psutil.boot_time()
        except (psutil.Error, OSError) as exc:
            raise ProviderError(f"cannot read system counters: {exc}") from exc

        return RawReadings(
            cpu_percent=cpu_percent,
            memory_total=mem.total,
            memory_used=mem.used,
            swap_total=swap.total,
            swap_used=swap.used,
            load_avg=tuple(load_avg),
            uptime_seconds=max(uptime, 0.0),
            temperatures=self._collect_temperatures(),
            disks=self._collect_disks(),
            interfaces=self._collect_interfaces(),
            processes=self._collect_processes(),
        )

    def _collect_temperatures(self) -> list[tuple[str, float]]:
        """Collect (label, celsius) pairs; empty on platforms without sensors."""
        try:
            sensors = psutil.sensors_temperatures(fahrenheit=False)
        except (AttributeError, NotImplementedError, OSError):
            return []

        readings: list[tuple[str, float]] = []
        for chip, entries in sensors.items():
            for entry in entries:
                if entry.current is None:
                    continue
                label = f"{chip} {entry.label or ''}".strip()
                readings.append((label, float(entry.current)))
        return readings

    def _collect_disks(self) -> list[tuple[str, int, int]]:
        """Collect (device, total, available) for each mounted partition."""
        disks: list[tuple[str, int, int]] = []
        try:
            partitions = psutil.disk_partitions(all=False)
        except OSError as exc:
            logger.warning("Cannot list disk partitions: %s", exc)
            return disks

        for part in partitions:
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError:
                # Unmounted media, permission denied, stale network mounts
                continue
            disks.append((part.device or part.mountpoint, usage.total, usage.free))
        return disks

    def _collect_interfaces(self) -> list[tuple[str, int, int]]:
        """Collect cumulative (name, received, transmitted) byte counters."""
        try:
            counters = psutil.net_io_counters(pernic=True)
        except OSError as exc:
            logger.warning("Cannot read network counters: %s", exc)
            return []
        return [(name, nic.bytes_recv, nic.bytes_sent) for name, nic in counters.items()]

    def _collect_processes(self) -> list[tuple[int, str, float, int]]:
        """
        Collect (pid, name, cpu percent, rss) for all running processes.

        Processes that die mid-poll, deny access, or are zombies are skipped.
        """
        processes: list[tuple[int, str, float, int]] = []

        for proc in psutil.process_iter(attrs=self.PROCESS_ATTRS):
            try:
                info = proc.info

                # Get memory RSS, defaulting to 0 if unavailable
                mem_info = info.get("memory_info")
                memory_rss = mem_info.rss if mem_info else 0

                processes.append(
                    (
                        info.get("pid", proc.pid),
                        info.get("name") or "",
                        info.get("cpu_percent") or 0.0,
                        memory_rss,
                    )
                )
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                continue

        return processes
