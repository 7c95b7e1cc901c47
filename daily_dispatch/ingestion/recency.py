"""Recency filter - keeps articles published inside the freshness window."""

import calendar
from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from feedparser.datetimes import _parse_date

from ..config.settings import settings

logger = structlog.get_logger()


def parse_pub_date(pub_date: str) -> Optional[datetime]:
    """Parse a feed date string into an aware UTC datetime.

    feedparser's date handlers cover RFC 822 (RSS), W3CDTF/ISO 8601 (Atom)
    and the usual malformed variants. Returns None when nothing matches.
    """
    if not pub_date or not pub_date.strip():
        return None
    parsed = _parse_date(pub_date.strip())
    if parsed is None:
        return None
    return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)


def is_recent(
    pub_date: str,
    now: datetime = None,
    window_hours: float = None,
) -> bool:
    """True if the article should be shown.

    Missing or unparseable dates fail open. The window is slightly wider than
    a day to absorb clock skew and feeds that publish late.
    """
    window = timedelta(hours=window_hours or settings.recency_window_hours)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        # naive clocks are taken to be UTC, like dates without an offset
        now = now.replace(tzinfo=timezone.utc)

    try:
        published = parse_pub_date(pub_date)
        if published is None:
            return True
        return now - published < window
    except Exception as e:
        logger.debug("pub_date_unparseable", pub_date=pub_date, error=str(e))
        return True
