# === FILE: site_harvest/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска SiteHarvest через командную строку.

Команды:
  crawl     Обойти сайт и вывести/сохранить записи
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --url, -u URL       Стартовый URL (обязателен, если не задан в конфиге)
  --selector, -s CSS  CSS-селектор для извлечения текста
  --depth, -d N       Глубина обхода (0 = одна страница)
  --same-origin, -o   Переходить только по ссылкам того же origin
  --delay MS          Пауза между запросами
  --max N             Макс. число страниц
  --ua STRING         Заголовок User-Agent
  --timeout MS        Таймаут одного запроса
  --max-queue N       Макс. длина очереди обхода
  --out PATH          Сохранить результат в файл (stdout, если не указан)
  --format, -f FMT    json (default) или csv
  --csv-errors        Добавить колонку error в CSV

Пример:
  site-harvest crawl --url https://example.com --depth 1 --same-origin --format csv --out out.csv
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from site_harvest import __version__
from site_harvest.config import load_config
from site_harvest.engine import start_crawl
from site_harvest.logger import init_logging, logger
from site_harvest.report import FORMATS, render, write_report

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])

USAGE = (
    "Usage: site-harvest crawl --url https://example.com [--selector '.article'] [--out out.json] "
    "[--depth 1] [--same-origin] [--format json|csv] [--delay ms] [--max 50]"
)


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _build_config(ctx: click.Context, **overrides):
    try:
        return load_config(ctx.obj['config_path'], **overrides)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteHarvest, version %(version)s')
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
    help='Путь к файлу логов (только stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteHarvest CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'url', default=None, help='Стартовый URL')
@click.option('--selector', '-s', 'selector', default=None, help='CSS-селектор для извлечения текста')
@click.option('--depth', '-d', 'depth', type=click.IntRange(min=0), default=None,
              help='Глубина обхода (0 = одна страница)  [default: 0]')
@click.option('--same-origin', '-o', 'same_origin', is_flag=True,
              help='Переходить только по ссылкам того же origin')
@click.option('--delay', 'delay', type=click.IntRange(min=0), default=None,
              help='Пауза между запросами, мс  [default: 200]')
@click.option('--max', 'max_pages', type=click.IntRange(min=1), default=None,
              help='Макс. число страниц  [default: 50]')
@click.option('--ua', 'user_agent', default=None, help='Заголовок User-Agent')
@click.option('--timeout', 'timeout', type=click.IntRange(min=1), default=None,
              help='Таймаут одного запроса, мс  [default: 15000]')
@click.option('--max-queue', 'max_queue', type=click.IntRange(min=1), default=None,
              help='Макс. длина очереди обхода  [default: 10000]')
@click.option(
    '--out', 'out_path',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Сохранить результат в файл (stdout, если не указан)'
)
@click.option('--format', '-f', 'fmt', type=click.Choice(FORMATS, case_sensitive=False),
              default='json', show_default=True, help='Формат вывода')
@click.option('--csv-errors', 'csv_errors', is_flag=True, help='Добавить колонку error в CSV')
@click.pass_context
def crawl(ctx, url, selector, depth, same_origin, delay, max_pages, user_agent, timeout,
          max_queue, out_path, fmt, csv_errors):
    """Обойти сайт и вывести записи в JSON или CSV."""
    if url is None and ctx.obj['config_path'] is None and not Path('configs/default.yaml').is_file():
        click.echo(USAGE, err=True)
        sys.exit(1)

    cfg = _build_config(
        ctx,
        start_url=url,
        selector=selector,
        max_depth=depth,
        same_origin_only=True if same_origin else None,
        delay_ms=delay,
        max_pages=max_pages,
        user_agent=user_agent,
        timeout_ms=timeout,
        max_queue_size=max_queue,
    )

    try:
        records = asyncio.run(start_crawl(cfg))
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    try:
        if out_path:
            saved = write_report(records, out_path, fmt, include_errors=csv_errors)
            click.echo(f'Saved to {saved}', err=True)
        else:
            # csv rows already end with a line terminator
            click.echo(render(records, fmt, include_errors=csv_errors).rstrip("\n"))
    except Exception as e:
        print_error(f'Ошибка при сохранении результата: {e}')
    logger.info("Записей: %d", len(records))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.option('--url', '-u', 'url', default=None, help='Стартовый URL')
@click.pass_context
def show_config(ctx, url):
    """Показать итоговую конфигурацию в JSON."""
    cfg = _build_config(ctx, start_url=url)
    click.echo(json.dumps(cfg.model_dump(mode='json'), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
