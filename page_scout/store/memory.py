"""
In-process page store, used for dry runs and tests.
"""
from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from page_scout.store.base import Page, PageStatus, PageStore, utcnow


class InMemoryPageStore(PageStore):
    def __init__(self) -> None:
        self._rows: Dict[Tuple[str, str], Page] = {}

    async def upsert_page(
        self,
        customer_id: str,
        url: str,
        title: Optional[str],
        raw_content: str,
        status: PageStatus = PageStatus.PENDING,
    ) -> Page:
        key = (customer_id, url)
        now = utcnow()
        existing = self._rows.get(key)
        if existing is None:
            page = Page(
                id=str(uuid.uuid4()),
                customer_id=customer_id,
                url=url,
                title=title,
                raw_content=raw_content,
                status=PageStatus(status),
                created_at=now,
                updated_at=now,
            )
        else:
            page = replace(
                existing, title=title, raw_content=raw_content, status=PageStatus(status), updated_at=now
            )
        self._rows[key] = page
        return page

    async def list_pages(self, customer_id: str) -> List[Page]:
        pages = [p for (cid, _), p in self._rows.items() if cid == customer_id]
        return sorted(pages, key=lambda p: p.created_at, reverse=True)

    def __len__(self) -> int:
        return len(self._rows)
