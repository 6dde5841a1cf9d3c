"""page_scout.report.html_report: Генерация HTML-отчёта по страницам с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from page_scout.store.base import Page

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "pages.html.j2"


def render_html(
    pages: Iterable[Page],
    template_dir: Optional[Union[Path, str]],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        pages: страницы из хранилища.
        template_dir: директория с шаблоном ``pages.html.j2``;
            None означает встроенный шаблон пакета.
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.
    """
    template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    rows = [p.to_dict() for p in pages]
    context: dict[str, Any] = {
        "pages": rows,
        "total": len(rows),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
