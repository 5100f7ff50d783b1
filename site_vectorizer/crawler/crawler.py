from __future__ import annotations

import logging
import time
from typing import List, Optional

from site_vectorizer.config import VectorizerConfig
from site_vectorizer.crawler.fetcher import FetchError, PageFetcher
from site_vectorizer.crawler.link_extractor import build_exclusion, extract_links, is_excluded
from site_vectorizer.crawler.models import CrawlFrontier
from site_vectorizer.logger import LOGGER_NAME
from site_vectorizer.utils import extract_domain, is_same_host, resolve_url

__all__ = ("FrontierCrawler",)


class FrontierCrawler:
    """Breadth-first same-host crawler bounded by page count and link depth."""

    def __init__(self, fetcher: PageFetcher, config: VectorizerConfig) -> None:
        self.fetcher = fetcher
        self.config = config
        self.max_pages: int = config.max_pages
        self.max_depth: int = config.max_depth
        self.timeout: float = config.crawl_timeout
        self._exclusion = build_exclusion(config.exclude_patterns)
        self.logger = logging.getLogger(LOGGER_NAME)
        self.frontier: Optional[CrawlFrontier] = None

    async def crawl(self, seed_url: str) -> List[str]:
        seed = resolve_url(seed_url)
        host = extract_domain(seed)
        self.logger.info("Старт обхода: %s", seed)
        start = time.monotonic()

        frontier = CrawlFrontier()
        self.frontier = frontier
        frontier.push(seed, 0)

        while frontier.queue and len(frontier.visited) < self.max_pages:
            url, depth = frontier.pop()
            if frontier.is_known(url):
                continue
            try:
                html = await self.fetcher.fetch(url, timeout=self.timeout)
            except FetchError as e:
                frontier.failed.add(url)
                self.logger.info("Skip %s: %s", url, e.reason)
                continue
            frontier.mark_visited(url)
            self.logger.debug("Visited [%d/%d] depth=%d %s", len(frontier.visited), self.max_pages, depth, url)
            if depth >= self.max_depth:
                continue
            for link in extract_links(html, url):
                if self._should_enqueue(link, host, frontier):
                    frontier.push(link, depth + 1)

        duration = time.monotonic() - start
        self.logger.info("Обход завершён: %d страниц за %.2f с", len(frontier.discovered), duration)
        return list(frontier.discovered)

    def _should_enqueue(self, url: str, host: str, frontier: CrawlFrontier) -> bool:
        if not is_same_host(url, host):
            return False
        if is_excluded(url, self._exclusion, self.config.exclude_dotted_paths):
            return False
        return not frontier.is_known(url)
