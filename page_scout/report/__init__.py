"""page_scout.report: Отчёты (JSON и HTML) по сохранённым страницам."""

from __future__ import annotations

from page_scout.report.html_report import render_html
from page_scout.report.json_report import render_json

__all__ = ["render_json", "render_html"]
