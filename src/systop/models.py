"""Data models for systop."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class Severity(Enum):
    """Severity bands for thresholded metrics."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(slots=True, frozen=True)
class ProcessSnapshot:
    """Immutable snapshot of a process state."""

    pid: int
    name: str
    cpu_percent: float  # 0.0 - 100.0 * core_count
    memory_rss: int  # Bytes


@dataclass(slots=True, frozen=True)
class TemperatureReading:
    """A single temperature sensor reading."""

    label: str
    celsius: float


@dataclass(slots=True, frozen=True)
class DiskEntry:
    """Space usage of one mounted disk."""

    name: str
    total_bytes: int
    available_bytes: int

    @property
    def used_bytes(self) -> int:
        """Used space, never negative."""
        return max(self.total_bytes - self.available_bytes, 0)

    @property
    def percent(self) -> float | None:
        """Used space as a percentage, or None for a zero-sized disk."""
        if self.total_bytes == 0:
            return None
        return self.used_bytes / self.total_bytes * 100.0


@dataclass(slots=True, frozen=True)
class InterfaceEntry:
    """Cumulative traffic counters of one network interface."""

    name: str
    received_bytes: int
    transmitted_bytes: int

    @property
    def active(self) -> bool:
        """An interface is active once it has seen any traffic."""
        return self.received_bytes > 0 or self.transmitted_bytes > 0


@dataclass(slots=True, frozen=True)
class MemoryUsage:
    """Total/used pair for RAM or swap."""

    total: int
    used: int

    @property
    def configured(self) -> bool:
        return self.total > 0

    @property
    def percent(self) -> float | None:
        """
        Used memory as a percentage of total.

        Returns None ("not configured") when total is 0.
        """
        if self.total == 0:
            return None
        return self.used / self.total * 100.0


@dataclass(slots=True, frozen=True)
class TemperatureSummary:
    """Average/maximum of the CPU-related sensors and their severity band."""

    average: float | None
    maximum: float | None
    severity: Severity | None
    sensor_count: int

    @classmethod
    def unavailable(cls) -> "TemperatureSummary":
        """Summary used when no CPU-related sensor reported a value."""
        return cls(average=None, maximum=None, severity=None, sensor_count=0)

    @property
    def available(self) -> bool:
        return self.sensor_count > 0


@dataclass(slots=True, frozen=True)
class NetworkSummary:
    """Totals across active interfaces plus a few of them for display."""

    active_count: int
    total_received: int
    total_transmitted: int
    interfaces: tuple[InterfaceEntry, ...]


@dataclass(slots=True, frozen=True)
class StorageSummary:
    """Totals across all disks with nonzero capacity plus a few for display."""

    disk_count: int
    total_bytes: int
    used_bytes: int
    disks: tuple[DiskEntry, ...]

    @property
    def percent(self) -> float | None:
        if self.total_bytes == 0:
            return None
        return self.used_bytes / self.total_bytes * 100.0


@dataclass(slots=True, frozen=True)
class Snapshot:
    """
    Immutable point-in-time bundle of all sampled metrics.

    Every field is derived from a single provider read.
    """

    timestamp: float
    cpu_percent: float
    memory: MemoryUsage
    swap: MemoryUsage
    load_avg: tuple[float, float, float]
    uptime_seconds: float
    temperatures: tuple[TemperatureReading, ...]
    disks: tuple[DiskEntry, ...]
    interfaces: tuple[InterfaceEntry, ...]
    processes: tuple[ProcessSnapshot, ...]
    temperature: TemperatureSummary
    swap_severity: Severity | None
    network: NetworkSummary
    storage: StorageSummary


RankedProcessList = tuple[ProcessSnapshot, ...]


@dataclass(slots=True, frozen=True)
class DirectoryEntry:
    """Name and immediate-file size of a scanned subdirectory."""

    name: str
    size_bytes: int


@dataclass(slots=True, frozen=True)
class DirectorySizeReport:
    """Result of scanning a directory and its well-known subdirectories."""

    path: Path
    total_bytes: int | None
    subdirectories: tuple[DirectoryEntry, ...] = ()
    error: str | None = None
