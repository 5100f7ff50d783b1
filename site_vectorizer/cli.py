# === FILE: site_vectorizer/cli.py ===
#!/usr/bin/env python3
"""
Точка входа SiteVectorizer для командной строки.

Команды:
  vectorize [URL]   Найти страницы сайта, разбить текст на фрагменты,
                    получить эмбеддинги и сохранить vectors.json
  discover URL      Только найти страницы и вывести их списком JSON
  config            Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только консоль, если не указан)
  --log-format FORMAT Формат логирования

Дополнительно:
  --version, -v       Показать версию SiteVectorizer

Пример:
  site-vectorizer vectorize example.com --choice custom --count 5
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_vectorizer import __version__
from site_vectorizer.config import load_config
from site_vectorizer.crawler.fetcher import Fetcher
from site_vectorizer.discovery import PageDiscovery
from site_vectorizer.embedder import ServiceUnavailable
from site_vectorizer.engine import PAGE_CHOICES, select_pages, start_vectorize
from site_vectorizer.logger import init_logging
from site_vectorizer.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _override(ctx, **overrides):
    try:
        return ctx.obj['config'].with_overrides(**overrides)
    except ValidationError as e:
        print_error(f'Неверные параметры: {e}')


async def _discover(cfg):
    async with Fetcher(cfg.user_agent) as fetcher:
        return await PageDiscovery(fetcher, cfg).discover(cfg.base)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteVectorizer, version %(version)s')
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
    help='Путь к файлу логов (только консоль, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд SiteVectorizer CLI."""
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


@cli.command('vectorize', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option(
    '--choice', 'choice',
    default=None,
    type=click.Choice(PAGE_CHOICES),
    help='Какие страницы индексировать: все, первые N или только главную'
)
@click.option('--count', 'count', type=int, default=None, help='Сколько страниц индексировать (для custom)')
@click.option('--max-pages', 'max_pages', type=int, default=None, help='Лимит страниц при обходе')
@click.option('--max-depth', 'max_depth', type=int, default=None, help='Глубина обхода ссылок')
@click.option('--chunk-tokens', 'chunk_max_tokens', type=int, default=None, help='Бюджет токенов на фрагмент')
@click.option('--model', 'model', default=None, help='Модель эмбеддингов')
@click.option('--ollama-url', 'ollama_url', default=None, help='Адрес сервиса эмбеддингов')
@click.option(
    '--output-dir', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог экспорта'
)
@click.option('--concurrency', 'concurrency', type=int, default=None, help='Параллельно индексируемых страниц')
@click.pass_context
def vectorize(ctx, url, choice, count, **overrides):
    """Векторизовать сайт и сохранить vectors.json."""
    if not url:
        url = click.prompt('Enter the website URL to vectorize', type=str)
    cfg = _override(ctx, base_url=url, **overrides)

    selected = []

    def choose(pages):
        nonlocal choice, count
        click.echo(f'Found {len(pages)} pages.')
        if choice is None:
            choice = click.prompt(
                'Embed ALL pages, choose how many (custom) or ONLY the homepage?',
                type=click.Choice(PAGE_CHOICES),
                default='all',
            )
        if choice == 'custom' and count is None:
            count = click.prompt(
                'How many pages to embed?',
                type=click.IntRange(1, len(pages)),
                default=min(10, len(pages)),
            )
        selected.extend(select_pages(pages, choice, cfg.base, count))
        return selected

    click.echo(f'Discovering pages on {cfg.base}')
    try:
        report = asyncio.run(start_vectorize(cfg, choose))
    except ServiceUnavailable as e:
        print_error(f'Сервис эмбеддингов недоступен ({e}). Запустите `ollama serve`.')
    except Exception as e:
        print_error(f'Ошибка при векторизации: {e}')

    if report is None:
        click.echo('No pages found')
        return

    try:
        result = render_json(report, cfg.output_dir, cfg.split_threshold_bytes)
    except OSError as e:
        print_error(f'Ошибка при сохранении vectors.json: {e}')

    click.echo(f'Vectors: {result.path}')
    click.echo('Summary:')
    click.echo(f'  Pages processed: {len(selected)}')
    click.echo(f'  Total chunks: {report.total_chunks}')
    click.echo(f'  Output size: {result.size_bytes / 1024 / 1024:.2f} MB')


@cli.command('discover', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--max-pages', 'max_pages', type=int, default=None, help='Лимит страниц при обходе')
@click.option('--max-depth', 'max_depth', type=int, default=None, help='Глубина обхода ссылок')
@click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)')
@click.pass_context
def discover(ctx, url, max_pages, max_depth, pretty):
    """Найти страницы сайта и вывести их списком JSON."""
    cfg = _override(ctx, base_url=url, max_pages=max_pages, max_depth=max_depth)
    try:
        pages = asyncio.run(_discover(cfg))
    except Exception as e:
        print_error(f'Ошибка при обнаружении страниц: {e}')
    click.echo(json.dumps(pages, ensure_ascii=False, indent=2 if pretty else None))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
