"""
Модуль для загрузки и валидации конфигурации краулера PageScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_MAX_PAGES = 5
DEFAULT_DELAY_MS = 1000
MIN_CONTENT_LENGTH = 100
DEFAULT_USER_AGENT = "SimplifySummarize/1.0 (Content Accessibility Bot)"
DEFAULT_ACCEPT = "text/html,application/xhtml+xml"


class CrawlOptions(BaseModel):
    """Параметры одного обхода: бюджет страниц и пауза между запросами."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_pages: int = Field(DEFAULT_MAX_PAGES, ge=0, description="Жесткий лимит сохранённых страниц.")
    delay_ms: int = Field(DEFAULT_DELAY_MS, ge=0, description="Пауза между запросами (мс).")

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000


class CrawlerConfig(BaseModel):
    """Конфигурация краулера и хранилища страниц."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    accept: str = Field(DEFAULT_ACCEPT, min_length=1, description="Заголовок Accept.")
    timeout: float = Field(30.0, gt=0, description="Таймаут на один запрос (секунд).")
    min_content_length: int = Field(
        MIN_CONTENT_LENGTH, ge=0, description="Минимальная длина извлечённого текста."
    )
    store: Literal["sqlite", "memory"] = Field("sqlite", description="Бэкенд хранилища страниц.")
    database: Path = Field(Path("pages.db"), description="Путь к файлу SQLite.")
    crawl: CrawlOptions = Field(default_factory=CrawlOptions)

    @field_validator("accept")
    def _accept_must_allow_html(cls, v: str) -> str:
        if "text/html" not in v:
            raise ValueError("accept must include text/html")
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.

    Без явного пути используется configs/default.yaml, а если его нет,
    значения по умолчанию. Явно указанный, но отсутствующий файл даёт
    FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)


__all__ = [
    "CrawlOptions",
    "CrawlerConfig",
    "load_config",
    "DEFAULT_MAX_PAGES",
    "DEFAULT_DELAY_MS",
    "MIN_CONTENT_LENGTH",
    "DEFAULT_USER_AGENT",
]
