# File: tests/test_engine.py
import pytest

from page_scout.config import CrawlerConfig, CrawlOptions
from page_scout.engine import CrawlService, fetch_pages, start_crawl, validate_homepage_url
from page_scout.errors import InvalidURLError, StoreError
from page_scout.store.memory import InMemoryPageStore
from page_scout.store.sqlite import SQLitePageStore

HOME = "https://shop.test"


@pytest.mark.parametrize("url", ["https://example.com", "http://example.com/path?q=1"])
def test_validate_accepts_http_urls(url):
    assert validate_homepage_url(url) == url


@pytest.mark.parametrize("url", [None, "", "example.com", "ftp://example.com", "https://", "http://[::1"])
def test_validate_rejects_bad_urls(url):
    with pytest.raises(InvalidURLError):
        validate_homepage_url(url)


def test_invalid_url_error_is_value_error():
    assert issubclass(InvalidURLError, ValueError)


@pytest.mark.asyncio()
async def test_handle_dispatches_modes(make_page, fake_fetcher_factory):
    site = {
        HOME: (200, make_page("home", ["/a"])),
        f"{HOME}/a": (200, make_page("a")),
        f"{HOME}/orphan": (200, make_page("orphan", body="tiny")),
    }
    config = CrawlerConfig(store="memory", crawl=CrawlOptions(max_pages=10, delay_ms=0))
    store = InMemoryPageStore()

    async with CrawlService(config, store=store, fetcher=fake_fetcher_factory(site)) as service:
        crawled = await service.handle("cust", HOME, "crawl")
        single = await service.handle("cust", f"{HOME}/orphan", "single")
        pages = await service.list_pages("cust")

    assert crawled == {"pagesFound": 2, "pagesCrawled": 2}
    assert single == {"success": False, "error": "insufficient content"}
    assert {p.url for p in pages} == {HOME, f"{HOME}/a"}


@pytest.mark.asyncio()
async def test_handle_rejects_before_fetching(fake_fetcher_factory):
    fetcher = fake_fetcher_factory({})
    async with CrawlService(CrawlerConfig(store="memory"), fetcher=fetcher) as service:
        with pytest.raises(InvalidURLError):
            await service.handle("cust", "notaurl", "crawl")
        with pytest.raises(ValueError):
            await service.handle("cust", HOME, "sitemap")
    assert fetcher.fetched == []


@pytest.mark.asyncio()
async def test_unreachable_store_aborts_invocation(tmp_path, fake_fetcher_factory):
    fetcher = fake_fetcher_factory({})
    config = CrawlerConfig(database=tmp_path / "no-such-dir" / "pages.db")
    with pytest.raises(StoreError):
        async with CrawlService(config, store=SQLitePageStore(config.database), fetcher=fetcher):
            pass
    assert fetcher.fetched == []


@pytest.mark.asyncio()
async def test_start_crawl_and_fetch_pages_against_live_site(sample_site, tmp_path):
    config = CrawlerConfig(
        database=tmp_path / "pages.db",
        timeout=2.0,
        crawl=CrawlOptions(max_pages=10, delay_ms=0),
    )

    summary = await start_crawl(config, "cust", sample_site)
    again = await start_crawl(config, "cust", sample_site)
    pages = await fetch_pages(config, "cust")

    assert summary.to_dict() == {"pagesFound": 5, "pagesCrawled": 2}
    assert again.to_dict() == summary.to_dict()
    assert sorted(p.url for p in pages) == sorted([sample_site, f"{sample_site}/about"])


@pytest.mark.asyncio()
async def test_start_crawl_invalid_url_raises():
    with pytest.raises(InvalidURLError):
        await start_crawl(CrawlerConfig(store="memory"), "cust", "javascript:alert(1)")
