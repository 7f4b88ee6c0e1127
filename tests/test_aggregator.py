"""Tests for snapshot aggregation."""

import dataclasses
import math

import pytest

from systop.aggregator import (
    build_snapshot,
    is_cpu_sensor,
    summarize_network,
    summarize_storage,
    summarize_temperatures,
)
from systop.models import DiskEntry, InterfaceEntry, Severity, Snapshot, TemperatureReading


class TestBuildSnapshot:
    """Tests for build_snapshot."""

    def test_passes_through_raw_values(self, make_readings):
        snapshot = build_snapshot(make_readings(), timestamp=1234.5)

        assert isinstance(snapshot, Snapshot)
        assert snapshot.timestamp == 1234.5
        assert snapshot.cpu_percent == 25.0
        assert snapshot.load_avg == (1.0, 0.5, 0.25)
        assert snapshot.uptime_seconds == 90061.0
        assert [p.pid for p in snapshot.processes] == [1, 200, 300]
        assert len(snapshot.temperatures) == 3
        assert len(snapshot.disks) == 1
        assert len(snapshot.interfaces) == 2

    def test_memory_percent(self, make_readings):
        snapshot = build_snapshot(make_readings(memory_total=1000, memory_used=333))
        assert snapshot.memory.percent == pytest.approx(33.3)

    @pytest.mark.parametrize("used", [0, 1, 512, 1023, 1024])
    def test_memory_percent_exact(self, make_readings, used):
        snapshot = build_snapshot(make_readings(memory_total=1024, memory_used=used))
        assert snapshot.memory.percent == pytest.approx(100.0 * used / 1024)

    def test_swap_not_configured(self, make_readings):
        """Test zero swap total is reported as not configured."""
        snapshot = build_snapshot(make_readings(swap_total=0, swap_used=0))

        assert not snapshot.swap.configured
        assert snapshot.swap.percent is None
        assert snapshot.swap_severity is None

    def test_memory_zero_total(self, make_readings):
        snapshot = build_snapshot(make_readings(memory_total=0, memory_used=0))
        assert snapshot.memory.percent is None

    def test_swap_severity(self, make_readings):
        """Test the swap band follows the used percentage."""
        low = build_snapshot(make_readings(swap_total=100, swap_used=5))
        mid = build_snapshot(make_readings(swap_total=100, swap_used=30))
        high = build_snapshot(make_readings(swap_total=100, swap_used=75))

        assert low.swap_severity is Severity.NORMAL
        assert mid.swap_severity is Severity.WARNING
        assert high.swap_severity is Severity.CRITICAL

    def test_snapshot_is_frozen(self, make_readings):
        snapshot = build_snapshot(make_readings())
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.cpu_percent = 99.0

    def test_consumes_generators_once(self, make_readings):
        """Test one-shot iterables from a provider are read correctly."""
        readings = make_readings(
            temperatures=(t for t in [("cpu", 75.0)]),
            disks=(d for d in [("/dev/sda", 10, 5)]),
            interfaces=(i for i in [("eth0", 1, 1)]),
            processes=(p for p in [(7, "x", 1.0, 1)]),
        )
        snapshot = build_snapshot(readings)

        assert snapshot.temperature.average == 75.0
        assert snapshot.storage.disk_count == 1
        assert snapshot.network.active_count == 1
        assert len(snapshot.processes) == 1

    def test_empty_readings(self, make_readings):
        """Test sparse input never fails."""
        snapshot = build_snapshot(
            make_readings(
                memory_total=0,
                memory_used=0,
                swap_total=0,
                swap_used=0,
                temperatures=[],
                disks=[],
                interfaces=[],
                processes=[],
            )
        )

        assert not snapshot.temperature.available
        assert snapshot.network.active_count == 0
        assert snapshot.storage.disk_count == 0
        assert snapshot.storage.percent is None
        assert snapshot.processes == ()

    def test_default_timestamp(self, make_readings):
        snapshot = build_snapshot(make_readings())
        assert snapshot.timestamp > 0

    def test_detail_limits(self, make_readings):
        interfaces = [(f"eth{i}", 1, 1) for i in range(6)]
        disks = [(f"/dev/sd{i}", 10, 5) for i in range(6)]
        snapshot = build_snapshot(
            make_readings(interfaces=interfaces, disks=disks), max_interfaces=2, max_disks=3
        )

        assert len(snapshot.network.interfaces) == 2
        assert snapshot.network.active_count == 6
        assert len(snapshot.storage.disks) == 3
        assert snapshot.storage.disk_count == 6


class TestTemperatures:
    """Tests for CPU temperature summarizing."""

    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("CPU", True),
            ("coretemp Core 0", True),
            ("Processor Die", True),
            ("k10temp Tctl", False),
            ("nvme Composite", False),
            ("acpitz", False),
        ],
    )
    def test_is_cpu_sensor(self, label, expected):
        assert is_cpu_sensor(label) is expected

    def test_average_and_max(self):
        summary = summarize_temperatures(
            [
                TemperatureReading("Core 0", 70.0),
                TemperatureReading("Core 1", 80.0),
                TemperatureReading("GPU", 95.0),
            ]
        )

        assert summary.available
        assert summary.sensor_count == 2
        assert summary.average == pytest.approx(75.0)
        assert summary.maximum == pytest.approx(80.0)
        assert summary.severity is Severity.WARNING

    def test_band_uses_average_not_maximum(self):
        summary = summarize_temperatures(
            [TemperatureReading("Core 0", 40.0), TemperatureReading("Core 1", 90.0)]
        )
        assert summary.average == pytest.approx(65.0)
        assert summary.severity is Severity.NORMAL

    def test_non_positive_readings_skipped(self):
        summary = summarize_temperatures(
            [TemperatureReading("Core 0", 0.0), TemperatureReading("Core 1", -5.0)]
        )
        assert not summary.available

    def test_no_cpu_sensors_not_available(self):
        """Test no qualifying sensors yields an explicit unavailable summary."""
        summary = summarize_temperatures([TemperatureReading("nvme Composite", 45.0)])

        assert not summary.available
        assert summary.average is None
        assert not (isinstance(summary.average, float) and math.isnan(summary.average))

    def test_critical(self):
        summary = summarize_temperatures([TemperatureReading("cpu", 85.0)])
        assert summary.severity is Severity.CRITICAL


class TestNetwork:
    """Tests for network summarizing."""

    def test_totals_over_active_interfaces(self):
        summary = summarize_network(
            [
                InterfaceEntry("lo", 0, 0),
                InterfaceEntry("eth0", 100, 50),
                InterfaceEntry("wlan0", 10, 0),
            ]
        )

        assert summary.active_count == 2
        assert summary.total_received == 110
        assert summary.total_transmitted == 50
        assert [i.name for i in summary.interfaces] == ["eth0", "wlan0"]

    def test_first_seen_wins(self):
        """Test detail entries keep provider order without sorting."""
        interfaces = [InterfaceEntry(f"if{i}", i + 1, 0) for i in range(6)]
        summary = summarize_network(interfaces, max_entries=4)

        assert [i.name for i in summary.interfaces] == ["if0", "if1", "if2", "if3"]
        assert summary.total_received == sum(range(1, 7))


class TestStorage:
    """Tests for storage summarizing."""

    def test_totals_skip_zero_sized_disks(self):
        summary = summarize_storage(
            [
                DiskEntry("/dev/loop0", 0, 0),
                DiskEntry("/dev/sda1", 1000, 400),
                DiskEntry("/dev/sdb1", 3000, 1000),
            ]
        )

        assert summary.disk_count == 2
        assert summary.total_bytes == 4000
        assert summary.used_bytes == 2600
        assert summary.percent == pytest.approx(65.0)
        assert [d.name for d in summary.disks] == ["/dev/sda1", "/dev/sdb1"]

    def test_first_four_kept(self):
        disks = [DiskEntry(f"d{i}", 10, 5) for i in range(6)]
        summary = summarize_storage(disks)

        assert [d.name for d in summary.disks] == ["d0", "d1", "d2", "d3"]
        assert summary.total_bytes == 60
