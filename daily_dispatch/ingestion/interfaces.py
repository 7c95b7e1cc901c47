"""Interface definitions for feed ingestion."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List

# A site is whatever the user typed into the site list: a hostname or URL fragment
Site = str


@dataclass(frozen=True)
class FeedCandidate:
    """A feed URL worth trying for a site."""
    site: Site
    feed_url: str


@dataclass(frozen=True)
class Article:
    """An article extracted from a feed."""
    title: str
    description: str = ""
    link: str = ""
    pub_date: str = ""  # Raw, as found in the feed
    source: Site = ""

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "description": self.description,
            "link": self.link,
            "pubDate": self.pub_date,
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Article":
        return cls(
            title=data.get("title", ""),
            description=data.get("description", ""),
            link=data.get("link", ""),
            pub_date=data.get("pubDate", ""),
            source=data.get("source", ""),
        )


@dataclass(frozen=True)
class FetchError:
    """A feed that could not be fetched during an aggregation pass."""
    feed_url: str
    message: str

    def to_dict(self) -> dict:
        return {"feedUrl": self.feed_url, "message": self.message}


@dataclass(frozen=True)
class CacheSnapshot:
    """One complete aggregation result."""
    items: List[Article] = field(default_factory=list)
    fetched_at: Optional[datetime] = None
    errors: List[FetchError] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.fetched_at is None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "items": [a.to_dict() for a in self.items],
            "fetchedAt": self.fetched_at.isoformat() if self.fetched_at else None,
            "errors": [e.to_dict() for e in self.errors],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CacheSnapshot":
        fetched_at = data.get("fetchedAt")
        return cls(
            items=[Article.from_dict(a) for a in data.get("items", [])],
            fetched_at=datetime.fromisoformat(fetched_at) if fetched_at else None,
            errors=[
                FetchError(feed_url=e.get("feedUrl", ""), message=e.get("message", ""))
                for e in data.get("errors", [])
            ],
        )


class TransportInterface:
    """Interface for feed transport."""

    async def fetch_text(self, url: str) -> str:
        """Fetch a URL and return the response body as text."""
        raise NotImplementedError
