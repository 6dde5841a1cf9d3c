# File: page_scout/engine.py
"""page_scout.engine: Фасад для CLI и внешних вызовов: проверка запроса, хранилище, запуск обхода."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from page_scout.config import CrawlerConfig, CrawlOptions
from page_scout.crawler.crawler import CrawlEngine
from page_scout.crawler.fetcher import PageFetcher
from page_scout.crawler.models import CrawlSummary, SinglePageResult
from page_scout.errors import InvalidURLError
from page_scout.logger import logger
from page_scout.store import Page, PageStore, create_store

__all__ = ["CrawlService", "validate_homepage_url", "start_crawl", "add_page", "fetch_pages", "MODES"]

MODES = ("crawl", "single")


def validate_homepage_url(url: Optional[str]) -> str:
    """Возвращает URL без изменений или бросает InvalidURLError."""
    if not url:
        raise InvalidURLError(url or "", "URL is required")
    try:
        parsed = urlsplit(url)
        host = parsed.hostname
    except ValueError as exc:
        raise InvalidURLError(url) from exc
    if parsed.scheme not in ("http", "https"):
        raise InvalidURLError(url, "Invalid protocol")
    if not host:
        raise InvalidURLError(url)
    return url


class CrawlService:
    """Открывает хранилище и HTTP-сессию на время вызова и делегирует CrawlEngine.

    Ошибка открытия хранилища (StoreError) всплывает до первого запроса.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        store: Optional[PageStore] = None,
        fetcher: Optional[PageFetcher] = None,
    ) -> None:
        self.config = config
        self.store = store if store is not None else create_store(config)
        self.fetcher = fetcher if fetcher is not None else PageFetcher(config)
        self.engine = CrawlEngine(self.fetcher, self.store, config)

    async def __aenter__(self) -> CrawlService:
        await self.store.open()
        try:
            await self.fetcher.__aenter__()
        except BaseException:
            await self.store.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            await self.fetcher.__aexit__(exc_type, exc, tb)
        finally:
            await self.store.close()

    async def crawl(
        self,
        customer_id: str,
        homepage_url: str,
        options: Optional[CrawlOptions] = None,
        stop: Optional[asyncio.Event] = None,
    ) -> CrawlSummary:
        validate_homepage_url(homepage_url)
        return await self.engine.crawl(customer_id, homepage_url, options, stop)

    async def add_single_page(self, customer_id: str, url: str) -> SinglePageResult:
        validate_homepage_url(url)
        return await self.engine.add_single_page(customer_id, url)

    async def list_pages(self, customer_id: str) -> List[Page]:
        return await self.store.list_pages(customer_id)

    async def handle(self, customer_id: str, url: str, mode: str = "crawl") -> Dict[str, Any]:
        """Обрабатывает запрос вида {customerId, homepageUrl, mode} и возвращает ответ в wire-формате."""
        if mode not in MODES:
            raise ValueError(f"Unknown mode {mode!r}, expected one of {MODES}")
        validate_homepage_url(url)
        if mode == "single":
            return (await self.engine.add_single_page(customer_id, url)).to_dict()
        return (await self.engine.crawl(customer_id, url)).to_dict()


async def start_crawl(
    config: CrawlerConfig, customer_id: str, url: str, options: Optional[CrawlOptions] = None
) -> CrawlSummary:
    """Полный обход сайта; используется CLI."""
    validate_homepage_url(url)
    async with CrawlService(config) as service:
        summary = await service.crawl(customer_id, url, options)
    skipped = {reason.value: n for reason, n in summary.skipped.items()}
    logger.info("Crawl summary: %s, skipped=%s", summary.to_dict(), skipped)
    return summary


async def add_page(config: CrawlerConfig, customer_id: str, url: str) -> SinglePageResult:
    validate_homepage_url(url)
    async with CrawlService(config) as service:
        return await service.add_single_page(customer_id, url)


async def fetch_pages(config: CrawlerConfig, customer_id: str) -> List[Page]:
    async with CrawlService(config) as service:
        return await service.list_pages(customer_id)
