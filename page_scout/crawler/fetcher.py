"""
Fetcher module: one bounded HTTP GET per URL, HTML only, no retries.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from page_scout.config import CrawlerConfig
from page_scout.crawler.models import FetchedPage, FetchOutcome, SkipReason
from page_scout.logger import get_logger

log = get_logger("fetcher")


class PageFetcher:
    """Fetches HTML pages with identifying headers and a per-request timeout.

    Every failure is converted into a skipped :class:`FetchOutcome`; callers
    never see network exceptions.
    """

    def __init__(self, config: CrawlerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> PageFetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent, "Accept": self.config.accept},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str) -> FetchOutcome:
        """
        GET *url*, following redirects.

        Success needs a 2xx status and a Content-Type containing text/html.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url, allow_redirects=True) as resp:
                if not 200 <= resp.status < 300:
                    log.warning("Failed to fetch %s: HTTP %d", url, resp.status)
                    return FetchOutcome.skipped(url, SkipReason.HTTP_STATUS, f"HTTP {resp.status}")
                ctype = resp.headers.get("Content-Type", "")
                if "text/html" not in ctype.lower():
                    log.info("Skipping %s: content-type %r", url, ctype)
                    return FetchOutcome.skipped(url, SkipReason.NOT_HTML, ctype)
                html = await resp.text(errors="replace")
                return FetchOutcome.success(FetchedPage(url, html, resp.status, ctype))
        except asyncio.TimeoutError:
            log.warning("Timed out fetching %s after %.1f s", url, self.config.timeout)
            return FetchOutcome.skipped(url, SkipReason.NETWORK_ERROR, "timeout")
        except (ClientError, UnicodeDecodeError, LookupError) as e:
            log.warning("Error fetching %s: %s", url, e)
            return FetchOutcome.skipped(url, SkipReason.NETWORK_ERROR, str(e))
