"""Periodic refresh of the active catalog.

The worker runs in a background thread: every interval it runs the collection
step (bounded by the collector's own deadline, with no lock held) and then
asks the store to reload. A failed collection skips that tick's reload; there
is no retry before the next tick.
"""

from __future__ import annotations

import logging
import threading

from statscope.catalog.store import CatalogStore
from statscope.collection.base import BaseCollector
from statscope.core.exceptions import CollectionError

logger = logging.getLogger(__name__)


class RefreshWorker:
    """Background thread driving collection and catalog reloads.

    Example:
        ```python
        worker = RefreshWorker(store, collector, interval_seconds=300)
        worker.start()
        ...
        worker.stop()
        ```
    """

    def __init__(
        self,
        store: CatalogStore,
        collector: BaseCollector | None = None,
        interval_seconds: float = 300,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.store = store
        self.collector = collector
        self.interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the refresh loop in a daemon thread."""
        if self.is_running:
            logger.warning("RefreshWorker already running")
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="statscope-refresh", daemon=True)
        self._thread.start()
        logger.debug(f"Started refresh worker (every {self.interval_seconds}s)")

    def stop(self, timeout: float | None = 5.0) -> None:
        """Signal the loop to stop and wait for the thread to exit."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def run_once(self) -> bool:
        """Run one collection + reload cycle.

        Returns:
            True if a new catalog was published
        """
        if self.collector is not None:
            try:
                self.collector.collect()
            except CollectionError as e:
                logger.warning(f"Collection with {self.collector.name} failed: {e}")
                return False

        logger.info("Refreshing snapshot files...")
        return self.store.refresh()

    def _loop(self) -> None:
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.run_once()
            except Exception:
                logger.exception("Unexpected error during refresh")
