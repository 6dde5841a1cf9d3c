"""page_scout.store: Хранилища страниц (upsert по (customer_id, url))."""

from __future__ import annotations

from page_scout.store.base import Page, PageStatus, PageStore
from page_scout.store.memory import InMemoryPageStore
from page_scout.store.sqlite import SQLitePageStore


def create_store(config) -> PageStore:
    """Строит хранилище по полю ``store`` конфигурации."""
    if config.store == "memory":
        return InMemoryPageStore()
    return SQLitePageStore(config.database)


__all__ = ["Page", "PageStatus", "PageStore", "InMemoryPageStore", "SQLitePageStore", "create_store"]
