#!/usr/bin/env python3
"""
Точка входа для запуска краулера PageScout через командную строку.

Команды:
  crawl CUSTOMER_ID URL   Обойти сайт в ширину и сохранить страницы
  add CUSTOMER_ID URL     Добавить одну страницу, пропущенную обходом
  pages CUSTOMER_ID       Показать/сохранить сохранённые страницы клиента
  config                  Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Дополнительно:
  --version, -v       Показать версию PageScout

Пример:
  page-scout crawl cust_42 https://example.com --max-pages 20 --delay-ms 500
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from page_scout import __version__
from page_scout.config import CrawlOptions, load_config
from page_scout.engine import add_page, fetch_pages, start_crawl
from page_scout.errors import InvalidURLError, StoreError
from page_scout.logger import init_logging
from page_scout.report.html_report import render_html
from page_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='PageScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(name)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд PageScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('customer_id')
@click.argument('url')
@click.option('--max-pages', '-n', 'max_pages', type=click.IntRange(min=0), default=None,
              help='Макс. число сохранённых страниц (override crawl.max_pages)')
@click.option('--delay-ms', '-d', 'delay_ms', type=click.IntRange(min=0), default=None,
              help='Пауза между запросами, мс (override crawl.delay_ms)')
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None,
              help='Таймаут всего обхода (секунд)')
@click.pass_context
def crawl(ctx, customer_id, url, max_pages, delay_ms, crawl_timeout):
    """Обойти сайт начиная с URL и сохранить страницы клиента."""
    cfg = ctx.obj['config']
    overrides = {k: v for k, v in (('max_pages', max_pages), ('delay_ms', delay_ms)) if v is not None}
    options = CrawlOptions(**{**cfg.crawl.model_dump(), **overrides})
    try:
        if crawl_timeout:
            summary = asyncio.run(
                asyncio.wait_for(start_crawl(cfg, customer_id, url, options), timeout=crawl_timeout)
            )
        else:
            summary = asyncio.run(start_crawl(cfg, customer_id, url, options))
    except InvalidURLError as e:
        print_error(f'Неверный URL: {e}')
    except asyncio.TimeoutError:
        print_error(f'Обход не завершён за {crawl_timeout} секунд')
    except StoreError as e:
        print_error(f'Ошибка хранилища: {e}')
    click.echo(json.dumps(summary.to_dict()))


@cli.command('add', context_settings=CONTEXT_SETTINGS)
@click.argument('customer_id')
@click.argument('url')
@click.pass_context
def add(ctx, customer_id, url):
    """Добавить одну страницу (например, без входящих ссылок)."""
    cfg = ctx.obj['config']
    try:
        result = asyncio.run(add_page(cfg, customer_id, url))
    except InvalidURLError as e:
        print_error(f'Неверный URL: {e}')
    except StoreError as e:
        print_error(f'Ошибка хранилища: {e}')
    click.echo(json.dumps(result.to_dict()))
    if not result.success:
        sys.exit(1)


@cli.command('pages', context_settings=CONTEXT_SETTINGS)
@click.argument('customer_id')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном pages.html.j2'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.pass_context
def pages(ctx, customer_id, json_output, html_output, template_dir, pretty):
    """Показать сохранённые страницы клиента."""
    cfg = ctx.obj['config']
    try:
        stored = asyncio.run(fetch_pages(cfg, customer_id))
    except StoreError as e:
        print_error(f'Ошибка хранилища: {e}')

    # Без файлов отчётов печатаем в stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        click.echo(json.dumps([p.to_dict() for p in stored], ensure_ascii=False, indent=indent))
        return

    if json_output:
        try:
            saved_json = render_json(stored, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(stored, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
