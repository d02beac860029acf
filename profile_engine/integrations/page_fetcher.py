"""Single-page HTTP fetcher feeding the profile engine.

The fetcher never raises for network problems: timeouts, connection
errors and non-2xx responses all come back as a failed
:class:`FetchResult` so the caller can fall back to the empty profile.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import aiohttp

from profile_engine.utils.helpers import normalise_input_url, origin_of

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; ProfileEngineBot/1.0)"
DEFAULT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


@dataclass(frozen=True)
class FetchResult:
    """Outcome of fetching one page."""
    requested_url: str
    final_url: str
    status: int = 0
    html: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status < 300

    @property
    def origin(self) -> str:
        return origin_of(self.final_url or self.requested_url)

    @property
    def scheme(self) -> str:
        scheme, sep, _ = (self.final_url or self.requested_url).partition("://")
        return scheme.lower() if sep else ""


class PageFetcher:
    """Fetch the raw HTML of a page with aiohttp."""

    def __init__(
        self,
        request_timeout: float = 20,
        user_agent: str = DEFAULT_USER_AGENT,
        accept_language: str = "en-US,en;q=0.5",
    ) -> None:
        self._timeout = aiohttp.ClientTimeout(total=request_timeout)
        self._headers = {
            "User-Agent": user_agent,
            "Accept": DEFAULT_ACCEPT,
            "Accept-Language": accept_language,
        }

    async def fetch(self, url: str) -> FetchResult:
        """Fetch *url* (a bare domain gets ``https://``) following redirects."""
        url = normalise_input_url(url)
        logger.info("Fetching %s", url)
        try:
            async with aiohttp.ClientSession(timeout=self._timeout, headers=self._headers) as session:
                async with session.get(url, allow_redirects=True) as resp:
                    final_url = str(resp.url)
                    html = await resp.text(errors="replace")
                    status = resp.status
        except asyncio.TimeoutError:
            logger.warning("Timeout fetching %s", url)
            return FetchResult(requested_url=url, final_url=url, error="timeout")
        except (aiohttp.ClientError, ValueError) as exc:
            logger.warning("Error fetching %s: %s", url, exc)
            return FetchResult(requested_url=url, final_url=url, error=str(exc) or type(exc).__name__)

        if not 200 <= status < 300:
            logger.warning("Failed to fetch %s: HTTP %d", url, status)
            return FetchResult(
                requested_url=url, final_url=final_url, status=status,
                error=f"HTTP {status}",
            )
        logger.info("Fetched %s (%d bytes, status=%d)", final_url, len(html), status)
        return FetchResult(requested_url=url, final_url=final_url, status=status, html=html)
