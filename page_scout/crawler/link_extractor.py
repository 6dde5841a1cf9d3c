"""
Link extraction and URL normalization utilities for PageScout.
"""
from __future__ import annotations

import re
from typing import Optional, Set, Union
from urllib.parse import quote, unquote_to_bytes, urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from page_scout.logger import get_logger

__all__ = ("extract_links", "normalize_url", "hostname_of", "EXCLUDED_EXTENSIONS")

log = get_logger("links")

EXCLUDED_EXTENSIONS = (
    "pdf", "jpg", "jpeg", "png", "gif", "svg", "css", "js",
    "xml", "json", "zip", "mp4", "mp3",
)
_EXCLUDED_RE = re.compile(r"\.(%s)$" % "|".join(EXCLUDED_EXTENSIONS), re.IGNORECASE)

_DEFAULT_PORTS = {"http": 80, "https": 443}
#: path characters left literal after re-quoting
_PATH_SAFE = "/:@!$&'()*+,;=~"


def normalize_url(url: str) -> str:
    """
    Canonical key for frontier, visited set and page store.

    Lowercases scheme and host, drops the default port and the fragment,
    re-quotes the path and strips one trailing slash, so
    ``http://Example.com:80/caf%C3%A9/#team`` and ``http://example.com/café``
    both become ``http://example.com/caf%C3%A9``.
    """
    parsed = urlsplit(url.strip())
    scheme = parsed.scheme.lower()
    netloc = parsed.netloc.lower()
    try:
        port = parsed.port
    except ValueError:
        port = None
    if port is not None and _DEFAULT_PORTS.get(scheme) == port:
        netloc = netloc.rsplit(":", 1)[0]
    path = quote(unquote_to_bytes(parsed.path or "/"), safe=_PATH_SAFE)
    normalized = urlunsplit((scheme, netloc, path, parsed.query, ""))
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized


def hostname_of(url: str) -> Optional[str]:
    """Hostname without port, lowercased; None for unparsable URLs."""
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def _origin(url: str) -> str:
    parsed = urlsplit(url)
    return urlunsplit((parsed.scheme, parsed.netloc, "/", "", ""))


def extract_links(html: Union[str, BeautifulSoup], base_url: str) -> Set[str]:
    """
    Extract same-host page links from HTML.

    Hrefs are resolved against the origin of *base_url*; anything on another
    host, with a non-http(s) scheme or pointing at a static asset is dropped.
    """
    soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "html.parser")
    base_host = hostname_of(base_url)
    origin = _origin(base_url)
    links: Set[str] = set()
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        try:
            parsed = urlsplit(urljoin(origin, href.strip()))
            host = parsed.hostname
        except ValueError:
            log.debug("Malformed href skipped: %r", href)
            continue
        if host != base_host:
            continue
        if parsed.scheme not in ("http", "https"):
            continue
        if _EXCLUDED_RE.search(parsed.path):
            continue
        links.add(normalize_url(urlunsplit(parsed)))
    return links
