"""HTML parsing utilities for PageScout.

Turns a fetched HTML document into the pieces the crawl engine persists:

* title:   ``<title>`` text, else the first ``<h1>``, else ``None``.
* content: main visible text with page chrome (navigation, banners,
  footers, sidebars, ads, scripts) removed and whitespace collapsed.
* links:   same-host page links, see :mod:`page_scout.crawler.link_extractor`.

Paragraph structure is intentionally flattened to single spaces; the
downstream content-generation stage rebuilds it.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Optional, Union

from bs4 import BeautifulSoup

from page_scout.crawler.link_extractor import extract_links, normalize_url
from page_scout.crawler.models import CrawlResult

__all__: Sequence[str] = ("extract_content", "extract_title", "parse_page", "MAIN_CONTENT_SELECTORS")

#: subtrees that never hold page content
STRIP_SELECTORS: Sequence[str] = (
    "script", "style", "nav", "header", "footer", "aside", "iframe", "noscript",
    '[role="navigation"]', '[role="banner"]', '[role="contentinfo"]',
    ".nav", ".navbar", ".header", ".footer", ".sidebar", ".menu", ".advertisement",
)

#: tried in order, first selector with at least one match wins
MAIN_CONTENT_SELECTORS: Sequence[str] = (
    "main", "article", '[role="main"]', ".content", ".main-content", "#content", "#main",
)

_WS_RE = re.compile(r"\s+")


def _soup(html: Union[str, BeautifulSoup]) -> BeautifulSoup:
    if isinstance(html, BeautifulSoup):
        return html
    return BeautifulSoup(html or "", "html.parser")


def _collapse(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def extract_title(html: Union[str, BeautifulSoup]) -> Optional[str]:
    soup = _soup(html)
    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""
    if not title:
        h1 = soup.find("h1")
        title = h1.get_text().strip() if h1 else ""
    return title or None


def extract_content(html: Union[str, BeautifulSoup]) -> str:
    """Return the main textual content of *html*, never raises.

    A ``BeautifulSoup`` argument is modified in place (chrome is decomposed).
    """
    soup = _soup(html)
    for selector in STRIP_SELECTORS:
        for element in soup.select(selector):
            # nested matches are already gone with their ancestor
            if not element.decomposed:
                element.decompose()

    content = ""
    for selector in MAIN_CONTENT_SELECTORS:
        matches = soup.select(selector)
        if matches:
            content = "".join(m.get_text() for m in matches)
            break

    if not _collapse(content):
        root = soup.body or soup
        content = root.get_text()

    return _collapse(content)


def parse_page(html: str, url: str) -> CrawlResult:
    """Parse once, read title and links, then strip chrome for the content.

    Links are taken from the full document before any subtree is removed,
    so navigation menus still feed the frontier.
    """
    soup = _soup(html)
    title = extract_title(soup)
    links = extract_links(soup, url)
    content = extract_content(soup)
    return CrawlResult(url=normalize_url(url), title=title, content=content, links=links)
