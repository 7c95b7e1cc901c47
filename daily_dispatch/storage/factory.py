"""Factory functions for the process-wide cache and site store."""

from functools import lru_cache

import structlog

from ..config.settings import settings
from ..config.sites import SiteStore
from ..ingestion.interfaces import CacheSnapshot
from .cache import ArticleCache
from .snapshot_file import SnapshotFile

logger = structlog.get_logger()


@lru_cache(maxsize=1)
def get_site_store() -> SiteStore:
    return SiteStore(settings.sites_file)


@lru_cache(maxsize=1)
def get_article_cache() -> ArticleCache:
    """Get the shared ArticleCache, restoring the last snapshot if one was saved."""
    snapshot_file = SnapshotFile(settings.snapshot_file) if settings.snapshot_file else None
    logger.info(
        "using_article_cache",
        sites_file=str(settings.sites_file),
        snapshot_file=str(settings.snapshot_file) if snapshot_file else None
    )
    return ArticleCache(
        site_source=get_site_store().load_sites,
        snapshot_file=snapshot_file,
    )


def get_cached_articles() -> CacheSnapshot:
    """Current snapshot; the empty default if no pass has completed."""
    return get_article_cache().get()


def request_refresh() -> dict:
    """Fire-and-forget refresh; outcomes show up in the next read."""
    return get_article_cache().refresh()


def clear_cache():
    """Clear cached instances (useful for testing)."""
    get_site_store.cache_clear()
    get_article_cache.cache_clear()
