"""Live flight data source.

``LiveFlightSource`` keeps the current set of simulated flights and the
telemetry summary up to date by polling the backend on two independent
schedules. It knows nothing about the page that shows it: views read
``snapshot`` (or ``subscribe`` to changes) and call ``start``/``stop``.

Responses are tagged with a per-kind generation number. A response is only
applied if it is newer than the last one applied, so a slow poll can never
overwrite a fresher one, and ``stop`` retires every request still in flight.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional

from ubicair import config
from ubicair.errors import ApiError
from ubicair.models import TelemetryRecord, TelemetryStats

logger = logging.getLogger(__name__)

FLIGHTS = "flights"
STATS = "stats"
FLIGHTS_ERROR = "Error loading flight data"


@dataclass(frozen=True)
class LiveSnapshot:
    flights: Mapping[str, TelemetryRecord] = field(default_factory=lambda: MappingProxyType({}))
    stats: Optional[TelemetryStats] = None
    loading: bool = True
    error: Optional[str] = None
    updated_at: Optional[datetime] = None


class _Schedule(threading.Thread):
    """Calls ``action`` every ``interval`` seconds until cancelled."""

    def __init__(self, interval: float, action: Callable[[], None], name: str):
        super().__init__(name=name, daemon=True)
        self.interval = interval
        self.action = action
        self._cancelled = threading.Event()

    def run(self):
        while not self._cancelled.wait(self.interval):
            self.action()

    def cancel(self):
        self._cancelled.set()


class LiveFlightSource:
    def __init__(self, client, flights_interval: float = config.FLIGHTS_POLL_INTERVAL_S,
                 stats_interval: float = config.STATS_POLL_INTERVAL_S, executor=None,
                 idle_timeout: Optional[float] = config.LIVE_IDLE_TIMEOUT_S):
        self._client = client
        self.flights_interval = flights_interval
        self.stats_interval = stats_interval
        # stop polling when nobody has read the snapshot for this long
        self.idle_timeout = idle_timeout
        self._last_read = time.monotonic()
        self._executor = executor
        self._owns_executor = executor is None

        self._lock = threading.Lock()
        self._snapshot = LiveSnapshot()
        self._issued = {FLIGHTS: 0, STATS: 0}
        self._applied = {FLIGHTS: 0, STATS: 0}
        self._running = False
        self._schedules: List[_Schedule] = []
        self._listeners: List[Callable[[LiveSnapshot], None]] = []

    # ======================================================
    # Observable state
    # ======================================================
    @property
    def snapshot(self) -> LiveSnapshot:
        self._last_read = time.monotonic()
        return self._snapshot

    @property
    def running(self) -> bool:
        return self._running

    def subscribe(self, callback: Callable[[LiveSnapshot], None]) -> Callable[[], None]:
        """Call ``callback`` with every new snapshot. Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return unsubscribe

    # ======================================================
    # Lifecycle
    # ======================================================
    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._last_read = time.monotonic()
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=config.POLL_WORKERS, thread_name_prefix="ubicair-poll"
                )
            self._schedules = [
                _Schedule(self.flights_interval, self._flights_tick, "ubicair-flights"),
                _Schedule(self.stats_interval, lambda: self._submit(STATS, self.refresh_stats), "ubicair-stats"),
            ]
            schedules = list(self._schedules)

        logger.info("live flight polling started (%ss / %ss)", self.flights_interval, self.stats_interval)
        self._submit(FLIGHTS, self.refresh)
        self._submit(STATS, self.refresh_stats)
        for schedule in schedules:
            schedule.start()

    def stop(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._running = False
            schedules, self._schedules = self._schedules, []
            # anything still in flight is now stale
            self._applied = dict(self._issued)
            executor = self._executor
            if self._owns_executor:
                self._executor = None

        for schedule in schedules:
            schedule.cancel()
        if self._owns_executor and executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)
        logger.info("live flight polling stopped")

    def _flights_tick(self) -> None:
        idle = time.monotonic() - self._last_read
        if self.idle_timeout is not None and idle > self.idle_timeout:
            logger.info("no reader for %.0fs, pausing live polling", idle)
            self.stop()
            return
        self._submit(FLIGHTS, self.refresh)

    def _submit(self, kind: str, action: Callable[[int], bool]) -> None:
        # generation is fixed when scheduled; stop() retires queued polls
        with self._lock:
            if not self._running or self._executor is None:
                return
            executor = self._executor
            self._issued[kind] += 1
            generation = self._issued[kind]
        try:
            executor.submit(action, generation)
        except RuntimeError as e:
            # executor shut down between the check and the submit
            logger.debug("poll not scheduled: %s", e)

    # ======================================================
    # Fetching
    # ======================================================
    def refresh(self, generation: Optional[int] = None) -> bool:
        """Fetch active flights now. Returns True if the snapshot changed."""
        if generation is None:
            generation = self._issue(FLIGHTS)
        try:
            flights = self._client.active_flights()
        except ApiError as e:
            logger.warning("active flights fetch failed: %s", e)
            return self._apply(FLIGHTS, generation, loading=False, error=FLIGHTS_ERROR)

        by_id = {f.flight_id: f for f in flights}
        return self._apply(
            FLIGHTS, generation,
            flights=MappingProxyType(by_id),
            loading=False,
            error=None,
            updated_at=datetime.now(timezone.utc),
        )

    def refresh_stats(self, generation: Optional[int] = None) -> bool:
        if generation is None:
            generation = self._issue(STATS)
        try:
            stats = self._client.telemetry_stats()
        except ApiError as e:
            logger.warning("telemetry stats fetch failed: %s", e)
            return False
        return self._apply(STATS, generation, stats=stats)

    def _issue(self, kind: str) -> int:
        with self._lock:
            self._issued[kind] += 1
            return self._issued[kind]

    def _apply(self, kind: str, generation: int, **changes) -> bool:
        with self._lock:
            if generation <= self._applied[kind]:
                logger.debug("dropping stale %s response #%d", kind, generation)
                return False
            self._applied[kind] = generation
            self._snapshot = replace(self._snapshot, **changes)
            snapshot = self._snapshot
            listeners = list(self._listeners)

        for listener in listeners:
            listener(snapshot)
        return True
