"""Pytest configuration and shared fixtures."""

import asyncio
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

import pytest

# Add project root to path
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from daily_dispatch.ingestion.errors import TransportError
from daily_dispatch.ingestion.interfaces import TransportInterface

NOW = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


def hours_ago(hours: float, now: datetime = NOW) -> str:
    """RFC 822 date string, as RSS feeds publish them."""
    return format_datetime(now - timedelta(hours=hours))


def rss_item(title: str, description: str = "", link: str = "", pub_date: str = "") -> str:
    parts = [f"<title>{title}</title>"]
    if description:
        parts.append(f"<description>{description}</description>")
    if link:
        parts.append(f"<link>{link}</link>")
    if pub_date:
        parts.append(f"<pubDate>{pub_date}</pubDate>")
    return "<item>" + "".join(parts) + "</item>"


def rss_feed(*items: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel><title>Test Feed</title>'
        + "".join(items)
        + "</channel></rss>"
    )


class FakeTransport(TransportInterface):
    """In-memory transport: url -> body, exception, or missing (connection refused)."""

    def __init__(self, responses: dict = None, delays: dict = None):
        self.responses = responses or {}
        self.delays = delays or {}
        self.requested = []

    async def fetch_text(self, url: str) -> str:
        self.requested.append(url)
        delay = self.delays.get(url)
        if delay:
            await asyncio.sleep(delay)
        result = self.responses.get(url)
        if result is None:
            raise TransportError(f"Cannot connect to host for {url}")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def fake_transport():
    return FakeTransport()


@pytest.fixture
def sample_rss():
    """An RSS feed with two fresh items and one stale one."""
    return rss_feed(
        rss_item("City council passes budget", "The vote was 9-2.",
                 "https://example.org/budget", hours_ago(2)),
        rss_item("Harbor tunnel reopens", "<![CDATA[<p>Traffic is <b>flowing</b> again.</p>]]>",
                 "https://example.org/tunnel", hours_ago(10)),
        rss_item("Last week's storm recap", "Old news.",
                 "https://example.org/storm", hours_ago(24 * 7)),
    )


@pytest.fixture
def sample_atom():
    """An Atom feed with a link given only as an href attribute."""
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<feed xmlns="http://www.w3.org/2005/Atom"><title>Atom Test</title>'
        '<entry><title type="text">Orioles clinch division</title>'
        '<link rel="alternate" href="https://example.com/orioles"/>'
        '<summary>A walk-off homer sealed it.</summary>'
        '<published>2026-10-19T09:00:00Z</published></entry>'
        '<entry><title>Ravens injury report</title>'
        '<link href="https://example.com/ravens"/>'
        '<content type="html">&lt;p&gt;Two starters are questionable.&lt;/p&gt;</content>'
        '<updated>2026-10-19T08:30:00Z</updated></entry>'
        '</feed>'
    )


@pytest.fixture
def temp_dir(tmp_path):
    """Directory for site and snapshot files."""
    return tmp_path
