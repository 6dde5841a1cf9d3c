"""
Page store contract: one row per (customer_id, url), upsert semantics.
"""
from __future__ import annotations

import abc
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

__all__ = ["Page", "PageStatus", "PageStore", "utcnow"]


class PageStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class Page:
    """Stored page row."""

    id: str
    customer_id: str
    url: str
    title: Optional[str]
    raw_content: Optional[str]
    status: PageStatus
    created_at: datetime
    updated_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        data["created_at"] = self.created_at.isoformat()
        data["updated_at"] = self.updated_at.isoformat()
        return data


class PageStore(abc.ABC):
    """Persistence collaborator of the crawl engine.

    Implementations raise :class:`page_scout.errors.StoreError` on failure.
    ``upsert_page`` on an existing (customer_id, url) overwrites title,
    content and status but keeps ``id`` and ``created_at``.
    """

    async def open(self) -> None:
        """Acquire connections; a failure here aborts the whole invocation."""

    async def close(self) -> None:
        """Release connections."""

    async def __aenter__(self) -> PageStore:
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @abc.abstractmethod
    async def upsert_page(
        self,
        customer_id: str,
        url: str,
        title: Optional[str],
        raw_content: str,
        status: PageStatus = PageStatus.PENDING,
    ) -> Page:
        ...

    @abc.abstractmethod
    async def list_pages(self, customer_id: str) -> List[Page]:
        """All pages of a customer, newest first."""
