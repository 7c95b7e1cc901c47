"""Feed aggregation - one pass over every configured site."""

import asyncio
import time
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

import structlog

from ..config.settings import settings
from ..config.sites import SiteStore
from ..ingestion.errors import TransportError
from ..ingestion.fetcher import FeedTransport
from ..ingestion.interfaces import (
    Article, CacheSnapshot, FeedCandidate, FetchError, Site, TransportInterface,
)
from ..ingestion.locator import locate_feeds
from ..ingestion.parser import parse_feed
from ..ingestion.recency import is_recent

logger = structlog.get_logger()


def deduplicate(articles: Iterable[Article]) -> List[Article]:
    """Drop articles whose exact title was already seen; first one wins."""
    seen_titles = set()
    unique = []
    for article in articles:
        if article.title in seen_titles:
            continue
        seen_titles.add(article.title)
        unique.append(article)
    return unique


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FeedAggregator:
    """Fetches, parses and merges the feeds of all configured sites.

    Feeds are processed concurrently and each one is capped by its own
    timeout, so a pass takes roughly as long as the slowest feed up to that
    cap. Articles are collected in the order feeds finish, which makes the
    surviving duplicate and the final order vary between runs.
    """

    def __init__(
        self,
        transport: TransportInterface = None,
        locator: Callable[[Site], List[FeedCandidate]] = locate_feeds,
        feed_timeout_seconds: float = None,
        max_articles: int = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.transport = transport
        self.locator = locator
        self.feed_timeout_seconds = feed_timeout_seconds or settings.feed_timeout_seconds
        self.max_articles = max_articles or settings.max_articles
        self.clock = clock

    async def run(self, sites: Iterable[Site]) -> Optional[CacheSnapshot]:
        """Run one aggregation pass. Returns None when no sites are configured."""
        sites = list(sites)
        if not sites:
            logger.warning("no_sites_configured")
            return None

        candidates = [candidate for site in sites for candidate in self.locator(site)]

        if self.transport is not None:
            return await self._run(candidates, self.transport)
        async with FeedTransport() as transport:
            return await self._run(candidates, transport)

    async def _run(
        self,
        candidates: List[FeedCandidate],
        transport: TransportInterface,
    ) -> CacheSnapshot:
        start = time.time()
        collected: List[Article] = []
        errors: List[FetchError] = []

        await asyncio.gather(*[
            self._fetch_with_timeout(transport, candidate, collected, errors)
            for candidate in candidates
        ])

        unique = deduplicate(collected)
        snapshot = CacheSnapshot(
            items=unique[:self.max_articles],
            fetched_at=self.clock(),
            errors=errors,
        )

        logger.info(
            "aggregation_complete",
            feeds=len(candidates),
            collected=len(collected),
            unique=len(unique),
            published=len(snapshot.items),
            errors=len(errors),
            elapsed_seconds=round(time.time() - start, 2)
        )
        return snapshot

    async def _fetch_with_timeout(
        self,
        transport: TransportInterface,
        candidate: FeedCandidate,
        collected: List[Article],
        errors: List[FetchError],
    ) -> None:
        # Hitting this cap drops the feed silently; only transport failures are reported
        try:
            await asyncio.wait_for(
                self._process_feed(transport, candidate, collected, errors),
                timeout=self.feed_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "feed_timed_out",
                site=candidate.site,
                feed=candidate.feed_url,
                timeout_seconds=self.feed_timeout_seconds
            )

    async def _process_feed(
        self,
        transport: TransportInterface,
        candidate: FeedCandidate,
        collected: List[Article],
        errors: List[FetchError],
    ) -> None:
        try:
            text = await transport.fetch_text(candidate.feed_url)
            parsed = parse_feed(text)
        except TransportError as e:
            logger.warning("feed_fetch_failed", feed=candidate.feed_url, error=str(e))
            errors.append(FetchError(feed_url=candidate.feed_url, message=str(e)))
            return
        except Exception as e:
            logger.error("feed_processing_failed", feed=candidate.feed_url, error=str(e))
            errors.append(FetchError(feed_url=candidate.feed_url, message=str(e) or repr(e)))
            return

        now = self.clock()
        recent = [
            replace(article, source=candidate.site)
            for article in parsed
            if is_recent(article.pub_date, now=now)
        ]
        collected.extend(recent)

        logger.info(
            "feed_fetched",
            site=candidate.site,
            feed=candidate.feed_url,
            articles=len(parsed),
            recent=len(recent)
        )


async def run_aggregation(sites: Iterable[Site] = None) -> Optional[CacheSnapshot]:
    """Convenience function to run one aggregation pass over the stored site list."""
    if sites is None:
        sites = SiteStore().load_sites()
    return await FeedAggregator().run(sites)
