"""
SQLite page store on top of aiosqlite.

Schema mirrors the hosted ``pages`` table: UNIQUE(customer_id, url) is what
makes repeated or concurrent crawls of one site idempotent.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

import aiosqlite

from page_scout.errors import StoreError
from page_scout.logger import get_logger
from page_scout.store.base import Page, PageStatus, PageStore, utcnow

log = get_logger("store")

PAGES_SCHEMA = """
CREATE TABLE IF NOT EXISTS pages (
  id TEXT PRIMARY KEY,
  customer_id TEXT NOT NULL,
  url TEXT NOT NULL,
  title TEXT,
  raw_content TEXT,
  status TEXT NOT NULL DEFAULT 'pending'
    CHECK (status IN ('pending','processing','completed','failed')),
  created_at TEXT NOT NULL,
  updated_at TEXT NOT NULL,
  UNIQUE(customer_id, url)
);
CREATE INDEX IF NOT EXISTS idx_pages_customer ON pages(customer_id, created_at);
"""

_UPSERT = """
INSERT INTO pages (id, customer_id, url, title, raw_content, status, created_at, updated_at)
VALUES (?, ?, ?, ?, ?, ?, ?, ?)
ON CONFLICT(customer_id, url) DO UPDATE SET
  title = excluded.title,
  raw_content = excluded.raw_content,
  status = excluded.status,
  updated_at = excluded.updated_at
"""

_COLUMNS = "id, customer_id, url, title, raw_content, status, created_at, updated_at"


def _row_to_page(row: aiosqlite.Row) -> Page:
    return Page(
        id=row["id"],
        customer_id=row["customer_id"],
        url=row["url"],
        title=row["title"],
        raw_content=row["raw_content"],
        status=PageStatus(row["status"]),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


class SQLitePageStore(PageStore):
    def __init__(self, db_path: Union[str, Path]) -> None:
        self.db_path = str(db_path)
        self._conn: Optional[aiosqlite.Connection] = None

    async def open(self) -> None:
        if self._conn is not None:
            return
        try:
            conn = await aiosqlite.connect(self.db_path)
            conn.row_factory = aiosqlite.Row
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.executescript(PAGES_SCHEMA)
            await conn.commit()
        except (aiosqlite.Error, OSError) as e:
            raise StoreError(f"Cannot open page store {self.db_path}: {e}") from e
        self._conn = conn
        log.debug("Opened page store %s", self.db_path)

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None

    def _require_conn(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise StoreError("Page store is not open")
        return self._conn

    async def upsert_page(
        self,
        customer_id: str,
        url: str,
        title: Optional[str],
        raw_content: str,
        status: PageStatus = PageStatus.PENDING,
    ) -> Page:
        conn = self._require_conn()
        now = utcnow().isoformat()
        try:
            await conn.execute(
                _UPSERT,
                (str(uuid.uuid4()), customer_id, url, title, raw_content, PageStatus(status).value, now, now),
            )
            await conn.commit()
            cursor = await conn.execute(
                f"SELECT {_COLUMNS} FROM pages WHERE customer_id = ? AND url = ?",
                (customer_id, url),
            )
            row = await cursor.fetchone()
            await cursor.close()
        except aiosqlite.Error as e:
            raise StoreError(f"Upsert failed for {url}: {e}") from e
        if row is None:
            raise StoreError(f"Upsert did not persist {url}")
        return _row_to_page(row)

    async def list_pages(self, customer_id: str) -> List[Page]:
        conn = self._require_conn()
        try:
            cursor = await conn.execute(
                f"SELECT {_COLUMNS} FROM pages WHERE customer_id = ? ORDER BY created_at DESC, rowid DESC",
                (customer_id,),
            )
            rows = await cursor.fetchall()
            await cursor.close()
        except aiosqlite.Error as e:
            raise StoreError(f"Listing pages failed for customer {customer_id}: {e}") from e
        return [_row_to_page(r) for r in rows]
