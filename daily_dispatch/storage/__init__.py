"""Snapshot cache and its on-disk copy."""

from .cache import ArticleCache
from .snapshot_file import SnapshotFile
from .factory import get_article_cache, get_site_store, get_cached_articles, request_refresh

__all__ = [
    "ArticleCache", "SnapshotFile",
    "get_article_cache", "get_site_store", "get_cached_articles", "request_refresh",
]
