"""
Data models for the PageScout crawler.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Set


class SkipReason(str, Enum):
    """Why a URL was dropped from a crawl without being counted."""

    NETWORK_ERROR = "network_error"
    HTTP_STATUS = "http_status"
    NOT_HTML = "not_html"
    INSUFFICIENT_CONTENT = "insufficient_content"
    STORE_ERROR = "store_error"


@dataclass(slots=True)
class FetchedPage:
    """Raw HTML response accepted by the fetcher."""

    url: str
    html: str
    status: int
    content_type: str


@dataclass(slots=True)
class FetchOutcome:
    """Either a fetched page or the reason the URL was skipped."""

    url: str
    page: Optional[FetchedPage] = None
    reason: Optional[SkipReason] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.page is not None

    @classmethod
    def success(cls, page: FetchedPage) -> FetchOutcome:
        return cls(url=page.url, page=page)

    @classmethod
    def skipped(cls, url: str, reason: SkipReason, detail: str = "") -> FetchOutcome:
        return cls(url=url, reason=reason, detail=detail)


@dataclass(slots=True)
class CrawlResult:
    """Extraction result for one page; lives for a single loop iteration."""

    url: str
    title: Optional[str]
    content: str
    links: Set[str] = field(default_factory=set)


@dataclass(slots=True)
class CrawlSummary:
    pages_found: int = 0
    pages_crawled: int = 0
    skipped: Counter = field(default_factory=Counter)

    def to_dict(self) -> Dict[str, int]:
        return {"pagesFound": self.pages_found, "pagesCrawled": self.pages_crawled}


@dataclass(slots=True)
class SinglePageResult:
    success: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {"success": self.success}
        if self.error is not None:
            data["error"] = self.error
        return data
