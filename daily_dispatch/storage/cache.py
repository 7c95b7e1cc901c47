"""Article cache - the single published snapshot and its refresh trigger."""

import asyncio
import threading
from typing import Callable, Iterable, Optional

import structlog

from ..config.settings import settings
from ..config.sites import SiteStore
from ..ingestion.interfaces import CacheSnapshot, Site
from ..pipeline.aggregator import FeedAggregator
from .snapshot_file import SnapshotFile

logger = structlog.get_logger()


class ArticleCache:
    """Holds the current CacheSnapshot and refreshes it in the background.

    Readers never wait on the network: ``get()`` returns whatever snapshot is
    current, and ``publish()`` swaps in a complete new one with a single
    assignment. Only one pass runs at a time; refresh requests that arrive
    while a pass is in flight are acknowledged without starting another.
    """

    def __init__(
        self,
        aggregator: FeedAggregator = None,
        site_source: Callable[[], Iterable[Site]] = None,
        snapshot_file: SnapshotFile = None,
    ):
        self.aggregator = aggregator or FeedAggregator()
        self.site_source = site_source or SiteStore().load_sites
        self.snapshot_file = snapshot_file
        self._snapshot = CacheSnapshot()
        self._refresh_task: Optional[asyncio.Task] = None
        self._initial_task: Optional[asyncio.Task] = None
        self._refresh_thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

        if snapshot_file:
            restored = snapshot_file.load()
            if restored is not None:
                self._snapshot = restored

    def get(self) -> CacheSnapshot:
        """Return the current snapshot. Never blocks, never fetches."""
        return self._snapshot

    def publish(self, snapshot: CacheSnapshot) -> None:
        """Replace the current snapshot wholesale."""
        self._snapshot = snapshot
        logger.info(
            "snapshot_published",
            items=len(snapshot.items),
            errors=len(snapshot.errors),
            fetched_at=snapshot.fetched_at.isoformat() if snapshot.fetched_at else None
        )
        if self.snapshot_file:
            self.snapshot_file.save(snapshot)

    @property
    def is_refreshing(self) -> bool:
        if self._refresh_thread is not None and self._refresh_thread.is_alive():
            return True
        return self._refresh_task is not None and not self._refresh_task.done()

    def refresh(self) -> dict:
        """Start a background aggregation pass and return immediately.

        Inside a running event loop the pass is a task on that loop. From
        synchronous code it runs on a daemon thread with its own loop.
        """
        with self._lock:
            if self.is_refreshing:
                logger.info("refresh_already_running")
                return {"ok": True, "message": "Refresh already in progress", "already_running": True}

            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = None

            if loop is not None:
                self._refresh_task = loop.create_task(self._run_refresh())
                logger.info("refresh_started")
            else:
                self._refresh_thread = threading.Thread(
                    target=asyncio.run,
                    args=(self._run_refresh(),),
                    name="article-refresh",
                    daemon=True,
                )
                self._refresh_thread.start()
                logger.info("refresh_started", thread=self._refresh_thread.name)

        return {"ok": True, "message": "Refresh started", "already_running": False}

    async def _run_refresh(self) -> None:
        try:
            sites = list(self.site_source())
            snapshot = await self.aggregator.run(sites)
        except Exception as e:
            logger.error("refresh_failed", error=str(e))
            return

        if snapshot is None:
            return
        self.publish(snapshot)

    def schedule_initial_refresh(self, delay_seconds: float = None) -> asyncio.Task:
        """Run one refresh shortly after start-up. There is no periodic timer."""
        delay = settings.initial_refresh_delay_seconds if delay_seconds is None else delay_seconds

        async def _delayed_refresh():
            await asyncio.sleep(delay)
            self.refresh()

        self._initial_task = asyncio.get_running_loop().create_task(_delayed_refresh())
        logger.info("initial_refresh_scheduled", delay_seconds=delay)
        return self._initial_task

    async def wait_idle(self) -> None:
        """Wait for the in-flight pass, if any, to finish."""
        if self._refresh_thread is not None:
            await asyncio.get_running_loop().run_in_executor(None, self._refresh_thread.join)
        if self._refresh_task is not None:
            await self._refresh_task

    async def close(self) -> None:
        """Cancel pending background work."""
        for task in (self._initial_task, self._refresh_task):
            if task is not None and not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass
