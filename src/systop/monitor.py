"""System monitoring engine for systop."""

import logging
import time
from collections.abc import Callable

from systop.aggregator import MAX_DISKS, MAX_INTERFACES, build_snapshot
from systop.models import Snapshot
from systop.provider import ProviderError, ReadingProvider
from systop.scheduler import RefreshScheduler

logger = logging.getLogger(__name__)


class SystemMonitor:
    """
    System monitor that turns provider readings into Snapshots.

    Runs on the caller's thread: poll() may be called at any cadence, the
    provider is queried at most once per scheduler interval and the most
    recent completed snapshot is returned. Only one snapshot is held; it is
    replaced wholesale on each refresh.
    """

    def __init__(
        self,
        provider: ReadingProvider,
        scheduler: RefreshScheduler | None = None,
        *,
        max_interfaces: int = MAX_INTERFACES,
        max_disks: int = MAX_DISKS,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the SystemMonitor.

        Args:
            provider: Source of raw readings.
            scheduler: Refresh gate. Defaults to a 1 second RefreshScheduler.
            max_interfaces: Active interfaces kept for display.
            max_disks: Disks kept for display.
            wall_clock: Time source for snapshot timestamps.
        """
        self._provider = provider
        self._scheduler = scheduler or RefreshScheduler()
        self._max_interfaces = max_interfaces
        self._max_disks = max_disks
        self._wall_clock = wall_clock
        self._snapshot: Snapshot | None = None

    @property
    def snapshot(self) -> Snapshot | None:
        """Get the most recent completed snapshot."""
        return self._snapshot

    @property
    def scheduler(self) -> RefreshScheduler:
        return self._scheduler

    def poll(self, now: float | None = None) -> Snapshot | None:
        """Refresh if the scheduler allows it and return the latest snapshot."""
        if self._scheduler.should_refresh(now):
            self._refresh_if_possible(now)
        return self._snapshot

    def refresh(self, now: float | None = None) -> Snapshot:
        """
        Query the provider unconditionally and replace the snapshot.

        Raises:
            ProviderError: If the provider cannot produce readings.
        """
        try:
            readings = self._provider.read()
        finally:
            # Mark even on failure so a broken provider is not hammered
            self._scheduler.mark_refreshed(now)

        self._snapshot = build_snapshot(
            readings,
            timestamp=self._wall_clock(),
            max_interfaces=self._max_interfaces,
            max_disks=self._max_disks,
        )
        return self._snapshot

    def _refresh_if_possible(self, now: float | None) -> None:
        if self._snapshot is None:
            # Nothing to fall back to yet: let the caller see the failure
            self.refresh(now)
            return
        try:
            self.refresh(now)
        except ProviderError:
            logger.exception("Refresh failed, keeping the previous snapshot")
