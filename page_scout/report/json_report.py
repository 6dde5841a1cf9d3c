# page_scout/report/json_report.py

"""
Генерация JSON-отчёта со списком страниц клиента.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from page_scout.store.base import Page


def render_json(pages: Iterable[Page], output_path: Path | str) -> Path:
    """
    Сохраняет список страниц в формате JSON по указанному пути.

    :param pages: страницы из хранилища
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from page_scout.report.json_report import render_json
    report_path = render_json(pages, 'reports/pages.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {"pages": [p.to_dict() for p in pages]}

    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
