"""Feed locator - maps a site to the feed URLs worth trying."""

from typing import List, Sequence, Tuple

from .interfaces import FeedCandidate, Site
from ..config.feeds import KNOWN_FEEDS

GUESSED_PATHS = ("/feed/", "/rss")


def locate_feeds(
    site: Site,
    known_feeds: Sequence[Tuple[str, str]] = KNOWN_FEEDS,
) -> List[FeedCandidate]:
    """Return candidate feeds for a site.

    A known feed wins outright; first matching key in table order. Otherwise
    the common WordPress-style ``/feed/`` and generic ``/rss`` paths are
    guessed off the site's base URL.
    """
    for key, feed_url in known_feeds:
        if key in site:
            return [FeedCandidate(site=site, feed_url=feed_url)]

    base = site.rstrip("/")
    if not base.startswith(("http://", "https://")):
        base = f"https://{base}"
    return [FeedCandidate(site=site, feed_url=base + path) for path in GUESSED_PATHS]
