"""Shared fixtures for systop tests."""

import pytest

from systop.provider import RawReadings


def _readings(**overrides) -> RawReadings:
    values = dict(
        cpu_percent=25.0,
        memory_total=16 * 1024**3,
        memory_used=8 * 1024**3,
        swap_total=4 * 1024**3,
        swap_used=1024**3,
        load_avg=(1.0, 0.5, 0.25),
        uptime_seconds=90061.0,
        temperatures=[("coretemp Core 0", 50.0), ("coretemp Core 1", 60.0), ("nvme Composite", 40.0)],
        disks=[("/dev/sda1", 100 * 1024**3, 40 * 1024**3)],
        interfaces=[("lo", 0, 0), ("eth0", 2048, 1024)],
        processes=[
            (1, "init", 0.5, 10 * 1024**2),
            (200, "python", 42.0, 300 * 1024**2),
            (300, "firefox", 12.5, 900 * 1024**2),
        ],
    )
    values.update(overrides)
    return RawReadings(**values)


class FakeProvider:
    """Provider returning canned readings and counting calls."""

    def __init__(self, readings: RawReadings | None = None, error: Exception | None = None) -> None:
        self.readings = readings or _readings()
        self.error = error
        self.calls = 0

    def read(self) -> RawReadings:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.readings


@pytest.fixture
def make_readings():
    """Factory for RawReadings with sensible defaults."""
    return _readings


@pytest.fixture
def fake_provider():
    """Factory for providers returning canned readings."""
    return FakeProvider
