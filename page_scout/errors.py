"""page_scout.errors: Иерархия исключений уровня вызова."""

from __future__ import annotations

__all__ = ["PageScoutError", "InvalidURLError", "StoreError"]


class PageScoutError(Exception):
    """Базовое исключение PageScout."""


class InvalidURLError(PageScoutError, ValueError):
    """Стартовый URL не является абсолютным http(s) URL."""

    def __init__(self, url: str, reason: str = "Invalid URL") -> None:
        super().__init__(f"{reason}: {url!r}")
        self.url = url
        self.reason = reason


class StoreError(PageScoutError):
    """Ошибка хранилища страниц (upsert, чтение или подключение)."""
