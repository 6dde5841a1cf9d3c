from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import Awaitable, Callable, Deque, Optional, Set

from page_scout.config import CrawlerConfig, CrawlOptions
from page_scout.crawler.fetcher import PageFetcher
from page_scout.crawler.link_extractor import hostname_of, normalize_url
from page_scout.crawler.models import CrawlSummary, SinglePageResult, SkipReason
from page_scout.errors import StoreError
from page_scout.logger import get_logger
from page_scout.parser.html_parser import parse_page
from page_scout.store.base import PageStatus, PageStore

__all__ = ("CrawlFrontier", "CrawlEngine")

log = get_logger("crawler")

Sleep = Callable[[float], Awaitable[None]]


class CrawlFrontier:
    """FIFO queue plus visited set for one crawl call.

    A URL is never queued twice and never queued once it has been visited.
    """

    def __init__(self, seed: str) -> None:
        self.visited: Set[str] = set()
        self.queue: Deque[str] = deque()
        self._queued: Set[str] = set()
        self.enqueue(seed)

    def __bool__(self) -> bool:
        return bool(self.queue)

    def __len__(self) -> int:
        return len(self.queue)

    def enqueue(self, url: str) -> bool:
        if url in self.visited or url in self._queued:
            return False
        self.queue.append(url)
        self._queued.add(url)
        return True

    def pop(self) -> str:
        url = self.queue.popleft()
        self._queued.discard(url)
        return url

    def mark_visited(self, url: str) -> bool:
        """False when *url* was visited already."""
        if url in self.visited:
            return False
        self.visited.add(url)
        return True


class CrawlEngine:
    """Breadth-first, strictly sequential same-host crawler."""

    def __init__(
        self,
        fetcher: PageFetcher,
        store: PageStore,
        config: Optional[CrawlerConfig] = None,
        *,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.fetcher = fetcher
        self.store = store
        self.config = config or CrawlerConfig()
        self._sleep = sleep

    async def crawl(
        self,
        customer_id: str,
        homepage_url: str,
        options: Optional[CrawlOptions] = None,
        stop: Optional[asyncio.Event] = None,
    ) -> CrawlSummary:
        opts = options or self.config.crawl
        home = normalize_url(homepage_url)
        home_host = hostname_of(home)
        frontier = CrawlFrontier(home)
        summary = CrawlSummary()
        start = time.monotonic()
        log.info("Start crawl for %s: %s (max_pages=%d)", customer_id, home, opts.max_pages)

        while frontier and summary.pages_crawled < opts.max_pages:
            if stop is not None and stop.is_set():
                log.info("Crawl of %s cancelled", home)
                break

            url = frontier.pop()
            if not frontier.mark_visited(url):
                continue

            log.info("Crawling (%d/%d): %s", summary.pages_crawled + 1, opts.max_pages, url)
            outcome = await self.fetcher.fetch(url)
            if outcome.page is not None:
                result = parse_page(outcome.page.html, url)
                if len(result.content) < self.config.min_content_length:
                    log.info("Discarding %s: %d chars of content", url, len(result.content))
                    summary.skipped[SkipReason.INSUFFICIENT_CONTENT] += 1
                else:
                    try:
                        await self.store.upsert_page(
                            customer_id, result.url, result.title, result.content, PageStatus.PENDING
                        )
                    except StoreError as e:
                        log.error("Error storing page %s: %s", url, e)
                        summary.skipped[SkipReason.STORE_ERROR] += 1
                    else:
                        summary.pages_crawled += 1

                    for link in sorted(result.links):
                        if hostname_of(link) == home_host:
                            frontier.enqueue(link)
            else:
                summary.skipped[outcome.reason] += 1

            if frontier and summary.pages_crawled < opts.max_pages and not (stop is not None and stop.is_set()):
                await self._sleep(opts.delay_seconds)

        summary.pages_found = len(frontier.visited)
        duration = time.monotonic() - start
        log.info(
            "Crawl finished: %d found, %d stored in %.2f s", summary.pages_found, summary.pages_crawled, duration
        )
        return summary

    async def add_single_page(self, customer_id: str, url: str) -> SinglePageResult:
        """Fetch and store one URL outside any frontier; failures are reported, not skipped."""
        outcome = await self.fetcher.fetch(url)
        if outcome.page is None:
            return SinglePageResult(False, "failed to fetch page")

        result = parse_page(outcome.page.html, url)
        if len(result.content) < self.config.min_content_length:
            return SinglePageResult(False, "insufficient content")

        try:
            await self.store.upsert_page(customer_id, result.url, result.title, result.content, PageStatus.PENDING)
        except StoreError as e:
            log.error("Error storing page %s: %s", url, e)
            return SinglePageResult(False, str(e))
        log.info("Added single page %s for %s", result.url, customer_id)
        return SinglePageResult(True)
