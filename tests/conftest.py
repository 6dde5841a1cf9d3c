# File: tests/conftest.py
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Tuple

import pytest
import pytest_asyncio
from aiohttp import web

from page_scout.config import CrawlerConfig, CrawlOptions
from page_scout.crawler.models import FetchedPage, FetchOutcome, SkipReason
from page_scout.store.memory import InMemoryPageStore

#: comfortably above the 100-character content floor
FILLER = (
    "Our team helps local families find reliable information about services, "
    "opening hours and accessibility options in plain, friendly language."
)


def build_page(
    title: str = "Page",
    links: Iterable[str] = (),
    body: Optional[str] = None,
) -> str:
    """HTML document with a nav of *links* and a <main> holding *body*."""
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in links)
    text = FILLER if body is None else body
    return (
        f"<html><head><title>{title}</title></head><body>"
        f"<nav>{anchors}</nav><main><p>{text}</p></main>"
        "</body></html>"
    )


@pytest.fixture()
def make_page() -> Callable[..., str]:
    return build_page


@pytest.fixture()
def fast_options() -> CrawlOptions:
    """No politeness delay, generous budget."""
    return CrawlOptions(max_pages=50, delay_ms=0)


@pytest.fixture()
def memory_config() -> CrawlerConfig:
    return CrawlerConfig(store="memory", timeout=2.0, user_agent="TestAgent/1.0")


@pytest.fixture()
def memory_store() -> InMemoryPageStore:
    return InMemoryPageStore()


class FakeFetcher:
    """Serves a fixed site graph {url: (status, html)} without network."""

    def __init__(self, site: Dict[str, Tuple[int, str]]) -> None:
        self.site = site
        self.fetched: list[str] = []

    async def fetch(self, url: str) -> FetchOutcome:
        self.fetched.append(url)
        if url not in self.site:
            return FetchOutcome.skipped(url, SkipReason.NETWORK_ERROR, "connection refused")
        status, html = self.site[url]
        if not 200 <= status < 300:
            return FetchOutcome.skipped(url, SkipReason.HTTP_STATUS, f"HTTP {status}")
        return FetchOutcome.success(FetchedPage(url, html, status, "text/html"))

    async def __aenter__(self) -> "FakeFetcher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None


@pytest.fixture()
def fake_fetcher_factory() -> Callable[[Dict[str, Tuple[int, str]]], FakeFetcher]:
    return FakeFetcher


@asynccontextmanager
async def serve_app(app: web.Application) -> AsyncIterator[str]:
    """Start *app* on a free port, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    host, port = runner.addresses[0][:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def sample_site(make_page) -> AsyncIterator[str]:
    """
    /        -> /about, /contact, /guide.pdf, external link
    /about   -> /, /contact
    /contact -> 404
    /short   -> too little content
    /data    -> application/json
    """
    app = web.Application()

    async def root(_):
        html = make_page(
            "Home",
            ["/about", "/contact", "/guide.pdf", "http://external.test/x", "/short", "/data"],
        )
        return web.Response(text=html, content_type="text/html")

    async def about(_):
        return web.Response(text=make_page("About", ["/", "/contact"]), content_type="text/html")

    async def short(_):
        return web.Response(text=make_page("Short", body="Hi"), content_type="text/html")

    async def data(_):
        return web.json_response({"ok": True})

    app.router.add_get("/", root)
    app.router.add_get("/about", about)
    app.router.add_get("/short", short)
    app.router.add_get("/data", data)

    async with serve_app(app) as url:
        yield url


@pytest.fixture()
def serve():
    """``async with serve(app) as base_url: ...``"""
    return serve_app


@pytest.fixture()
def config_file(tmp_path) -> Callable[..., Path]:
    def _write(content: str, suffix: str = ".yaml") -> Path:
        path = tmp_path / f"config{suffix}"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
