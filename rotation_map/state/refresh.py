"""
Refresh coordination for the polling dashboard.

This module handles refresh sequencing, last-write-wins snapshot replacement
and the background polling loop around the pure rotation engine.
"""

import threading
from typing import Callable, Optional

import structlog

from ..engine import RotationMapEngine
from ..errors import DataQualityError, ProviderFetchError
from ..logging.config import log_refresh_outcome
from ..models.scores import DashboardSnapshot
from ..provider.base import BaseMarketDataProvider

logger = structlog.get_logger(__name__)


class SnapshotHolder:
    """Thread-safe holder of the latest applied dashboard snapshot."""

    def __init__(self):
        self._lock = threading.Lock()
        self._snapshot: Optional[DashboardSnapshot] = None

    @property
    def current(self) -> Optional[DashboardSnapshot]:
        with self._lock:
            return self._snapshot

    def offer(self, snapshot: DashboardSnapshot) -> bool:
        """
        Apply a snapshot if it is newer than the current one.

        Returns:
            True if the snapshot replaced the current one
        """
        with self._lock:
            if self._snapshot is not None and snapshot.refresh_id <= self._snapshot.refresh_id:
                return False
            self._snapshot = snapshot
            return True


class RefreshCoordinator:
    """
    Runs one fetch-and-evaluate cycle per tick.

    Refresh ids increase monotonically. A result is applied only while its id
    is still the latest issued, so a slow refresh overtaken by a newer one is
    dropped.
    """

    def __init__(
        self,
        engine: RotationMapEngine,
        provider: BaseMarketDataProvider,
        holder: Optional[SnapshotHolder] = None,
        on_snapshot: Optional[Callable[[DashboardSnapshot], None]] = None
    ):
        self.engine = engine
        self.provider = provider
        self.holder = holder or SnapshotHolder()
        self.on_snapshot = on_snapshot

        self._lock = threading.Lock()
        self._latest_issued = 0

    def begin(self) -> int:
        """Issue the next refresh id."""
        with self._lock:
            self._latest_issued += 1
            return self._latest_issued

    def is_latest(self, refresh_id: int) -> bool:
        with self._lock:
            return refresh_id == self._latest_issued

    def run_once(self) -> Optional[DashboardSnapshot]:
        """
        Fetch, evaluate and apply one refresh.

        Returns:
            The applied snapshot, or None if the fetch failed, the payload was
            rejected, or a newer refresh was issued meanwhile
        """
        refresh_id = self.begin()

        try:
            payload = self.provider.fetch_markets(self.engine.coin_ids)

        except (ProviderFetchError, DataQualityError) as e:
            log_refresh_outcome(logger, refresh_id, "fetch_failed", {
                "error": str(e),
                "error_type": type(e).__name__,
                "retryable": getattr(e, "retryable", None),
            })
            return None

        snapshot = self.engine.evaluate(payload, refresh_id=refresh_id)
        if snapshot is None:
            log_refresh_outcome(logger, refresh_id, "rejected")
            return None

        if not self.is_latest(refresh_id) or not self.holder.offer(snapshot):
            log_refresh_outcome(logger, refresh_id, "stale")
            return None

        log_refresh_outcome(logger, refresh_id, "applied", {
            "signal_count": len(snapshot.signals),
        })

        if self.on_snapshot is not None:
            self.on_snapshot(snapshot)

        return snapshot


class RefreshScheduler:
    """Background thread calling ``RefreshCoordinator.run_once`` on an interval."""

    def __init__(self, coordinator: RefreshCoordinator, interval_seconds: float = 60.0):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self.coordinator = coordinator
        self.interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start polling; the first refresh runs immediately."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="rotation-map-refresh",
            daemon=True
        )
        self._thread.start()

        logger.info("Refresh scheduler started", interval_seconds=self.interval_seconds)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop polling and wait for the loop to exit."""
        self._stop_event.set()

        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

        logger.info("Refresh scheduler stopped")

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.coordinator.run_once()
            except Exception as e:
                logger.error(
                    "Unexpected error during refresh",
                    error=str(e),
                    error_type=type(e).__name__
                )

            self._stop_event.wait(self.interval_seconds)
