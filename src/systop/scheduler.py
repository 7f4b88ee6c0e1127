"""Refresh gating for systop."""

import time
from collections.abc import Callable

MIN_INTERVAL = 1.0


class RefreshScheduler:
    """
    Decide when the raw-reading provider may be queried again.

    The scheduler allows at most one refresh per interval, measured from the
    last call to mark_refreshed(). Calls to should_refresh() inside the window
    have no side effects, so the UI may poll it at any cadence.
    """

    def __init__(
        self,
        interval: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the RefreshScheduler.

        Args:
            interval: Minimum seconds between refreshes, at least 1.0s.
            clock: Monotonic time source, injectable for tests.
        """
        self._interval = max(MIN_INTERVAL, interval)
        self._clock = clock
        self._last_refresh: float | None = None

    @property
    def interval(self) -> float:
        """Get the minimum refresh interval."""
        return self._interval

    @property
    def last_refresh(self) -> float | None:
        """Clock value of the last completed refresh, if any."""
        return self._last_refresh

    def should_refresh(self, now: float | None = None) -> bool:
        """Return True if a refresh is due at `now`."""
        if self._last_refresh is None:
            return True
        if now is None:
            now = self._clock()
        return now - self._last_refresh >= self._interval

    def mark_refreshed(self, now: float | None = None) -> None:
        """Record that a refresh completed at `now`."""
        self._last_refresh = self._clock() if now is None else now
