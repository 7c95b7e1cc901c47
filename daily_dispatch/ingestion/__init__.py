"""Feed ingestion - locating, fetching and parsing RSS/Atom feeds."""

from .interfaces import Site, FeedCandidate, Article, FetchError, CacheSnapshot, TransportInterface
from .errors import TransportError, FeedTimeoutError, RedirectLoopError
from .locator import locate_feeds
from .fetcher import FeedTransport
from .parser import parse_feed
from .recency import is_recent

__all__ = [
    "Site", "FeedCandidate", "Article", "FetchError", "CacheSnapshot",
    "TransportInterface", "TransportError", "FeedTimeoutError", "RedirectLoopError",
    "locate_feeds", "FeedTransport", "parse_feed", "is_recent",
]
