# File: site_vectorizer/engine.py
"""site_vectorizer.engine: Orchestration layer — обнаружение, выбор страниц, индексация."""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Sequence

from site_vectorizer.aggregator import ChunkRecord, VectorsReport, aggregate_results
from site_vectorizer.chunker import chunk_text
from site_vectorizer.config import VectorizerConfig
from site_vectorizer.crawler.fetcher import Fetcher, FetchError, PageFetcher
from site_vectorizer.discovery import PageDiscovery
from site_vectorizer.embedder import EmbeddingError, OllamaEmbedder, TextEmbedder
from site_vectorizer.logger import logger
from site_vectorizer.parser.html_parser import extract_text
from site_vectorizer.utils import url_slug

__all__ = ["Engine", "select_pages", "start_vectorize", "PAGE_CHOICES"]

PAGE_CHOICES = ("all", "custom", "homepage")

PageChooser = Callable[[List[str]], List[str]]


def select_pages(
    pages: Sequence[str],
    choice: str,
    base_url: str,
    count: Optional[int] = None,
) -> List[str]:
    """Выбор страниц для индексации: все, первые count или только главная."""
    if choice == "all":
        return list(pages)
    if choice == "custom":
        if not pages:
            return []
        n = min(10, len(pages)) if count is None else count
        n = max(1, min(n, len(pages)))
        return list(pages[:n])
    if choice == "homepage":
        return [base_url]
    raise ValueError(f"Unknown page choice: {choice!r} (expected one of {', '.join(PAGE_CHOICES)})")


class Engine:
    """Индексация выбранных страниц: загрузка, текст, фрагменты, эмбеддинги."""

    def __init__(self, config: VectorizerConfig, fetcher: PageFetcher, embedder: TextEmbedder) -> None:
        """Инициализирует Engine с конфигурацией и внешними зависимостями."""
        self.config = config
        self.fetcher = fetcher
        self.embedder = embedder

    async def ingest(self, pages: Sequence[str]) -> List[ChunkRecord]:
        """Обрабатывает страницы и возвращает фрагменты в порядке страниц, затем фрагментов."""
        semaphore = asyncio.Semaphore(self.config.concurrency)
        total = len(pages)

        async def _bounded(position: int, url: str) -> List[ChunkRecord]:
            async with semaphore:
                logger.info("[%d/%d] Processing: %s", position, total, url)
                return await self.ingest_page(url)

        # gather keeps the input order whatever the completion order
        per_page = await asyncio.gather(*(_bounded(i, url) for i, url in enumerate(pages, start=1)))
        return [record for records in per_page for record in records]

    async def ingest_page(self, url: str) -> List[ChunkRecord]:
        """Одна страница; ошибки загрузки пропускают страницу, ошибки эмбеддинга — фрагмент."""
        try:
            html = await self.fetcher.fetch(url, timeout=self.config.page_timeout)
        except FetchError as exc:
            logger.error("Failed to process %s: %s", url, exc.reason)
            return []

        chunks = chunk_text(extract_text(html), self.config.chunk_max_tokens)
        logger.info("Split %s into %d chunks", url, len(chunks))
        slug = url_slug(url, self.config.base)

        records: List[ChunkRecord] = []
        for index, chunk in enumerate(chunks, start=1):
            logger.debug("Embedding chunk %d/%d of %s", index, len(chunks), url)
            try:
                embedding = await self.embedder.embed(chunk.text)
            except EmbeddingError as exc:
                logger.warning("Skipping chunk %d of %s: %s", index, url, exc)
                continue
            records.append(
                ChunkRecord(
                    id=f"{slug}-{index}",
                    url=url,
                    text=chunk.text,
                    embedding=embedding,
                    tokens=chunk.tokens,
                )
            )
        return records


async def start_vectorize(config: VectorizerConfig, choose_pages: PageChooser) -> Optional[VectorsReport]:
    """
    Полный запуск: проверка сервиса эмбеддингов, обнаружение страниц,
    выбор (через choose_pages) и индексация.

    Возвращает None, если на сайте не найдено ни одной страницы.
    ServiceUnavailable пробрасывается вызывающему до начала обнаружения.
    """
    base_url = config.base
    async with Fetcher(config.user_agent) as fetcher, OllamaEmbedder(
        str(config.ollama_url), config.model, timeout=config.embed_timeout
    ) as embedder:
        await embedder.check_available()

        logger.info("Discovering pages on %s", base_url)
        pages = await PageDiscovery(fetcher, config).discover(base_url)
        if not pages:
            logger.warning("No pages found on %s", base_url)
            return None

        selected = choose_pages(pages)
        logger.info("Processing %d pages", len(selected))
        records = await Engine(config, fetcher, embedder).ingest(selected)

    return aggregate_results(base_url, config.model, records)
