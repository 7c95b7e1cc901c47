"""Feed transport - async HTTP(S) retrieval of raw feed documents."""

import asyncio
import time
from typing import Optional
from urllib.parse import urljoin

import aiohttp
import structlog

from .errors import TransportError, FeedTimeoutError, RedirectLoopError
from .interfaces import TransportInterface
from ..config.settings import settings

logger = structlog.get_logger()

REDIRECT_STATUSES = range(300, 400)


class FeedTransport(TransportInterface):
    """Fetches feed documents over HTTP or HTTPS.

    Redirects are followed by hand so every hop gets its own timeout and the
    chain length can be capped. No retries: a feed that fails is reported and
    the next refresh tries again.
    """

    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        max_redirects: Optional[int] = None,
        user_agent: Optional[str] = None,
    ):
        self.session: Optional[aiohttp.ClientSession] = None
        self.timeout_seconds = timeout_seconds or settings.fetch_timeout_seconds
        self.max_redirects = settings.max_redirects if max_redirects is None else max_redirects
        self.user_agent = user_agent or settings.user_agent

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            headers={"User-Agent": self.user_agent}
        )
        return self

    async def __aexit__(self, *args):
        if self.session:
            await self.session.close()
            self.session = None

    async def fetch_text(self, url: str) -> str:
        """Fetch a URL, following redirects, and return the body as text."""
        if self.session is None:
            raise RuntimeError("FeedTransport must be entered with 'async with'")
        return await self._fetch(url, redirects=0)

    async def _fetch(self, url: str, redirects: int) -> str:
        if not url.startswith(("http://", "https://")):
            raise TransportError(f"Unsupported URL scheme: {url}")

        start_time = time.time()
        try:
            async with self.session.get(url, allow_redirects=False) as response:
                location = response.headers.get("Location")
                if response.status in REDIRECT_STATUSES and location:
                    target = urljoin(url, location)
                elif response.status >= 400:
                    raise TransportError(f"HTTP {response.status}")
                else:
                    body = await response.text(errors="replace")
                    logger.debug(
                        "feed_downloaded",
                        url=url,
                        status=response.status,
                        bytes=len(body),
                        time_ms=int((time.time() - start_time) * 1000)
                    )
                    return body
        except asyncio.TimeoutError as e:
            raise FeedTimeoutError(f"Timeout after {self.timeout_seconds:g}s") from e
        except aiohttp.ClientError as e:
            raise TransportError(str(e) or e.__class__.__name__) from e

        if redirects >= self.max_redirects:
            raise RedirectLoopError(f"Too many redirects (>{self.max_redirects})")

        logger.debug("feed_redirected", url=url, target=target, hop=redirects + 1)
        return await self._fetch(target, redirects + 1)
