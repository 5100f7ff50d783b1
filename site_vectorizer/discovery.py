# File: site_vectorizer/discovery.py
"""site_vectorizer.discovery: поиск страниц сайта — sitemap.xml, а при неудаче обход ссылок."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional
from urllib.parse import urljoin

from site_vectorizer.config import VectorizerConfig
from site_vectorizer.crawler.crawler import FrontierCrawler
from site_vectorizer.crawler.fetcher import FetchError, PageFetcher
from site_vectorizer.logger import logger
from site_vectorizer.parser.sitemap_parser import SitemapParseError, parse_sitemap

__all__ = ["SitemapStatus", "SitemapResult", "read_sitemap", "PageDiscovery"]


class SitemapStatus(enum.Enum):
    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(slots=True)
class SitemapResult:
    """Итог чтения sitemap.xml: список URL либо причина его отсутствия."""

    status: SitemapStatus
    urls: List[str] = field(default_factory=list)
    error: Optional[str] = None


async def read_sitemap(fetcher: PageFetcher, base_url: str, timeout: float = 5.0) -> SitemapResult:
    """Одна попытка загрузить и разобрать ``<base_url>/sitemap.xml``. Никогда не бросает."""
    sitemap_url = urljoin(base_url, "/sitemap.xml")
    logger.info("Checking for sitemap: %s", sitemap_url)
    try:
        xml = await fetcher.fetch(sitemap_url, timeout=timeout)
        urls = parse_sitemap(xml)
    except (FetchError, SitemapParseError) as exc:
        logger.info("No usable sitemap (%s), falling back to crawler", exc)
        return SitemapResult(SitemapStatus.ERROR, error=str(exc))
    if not urls:
        logger.info("Sitemap has no <urlset> entries, falling back to crawler")
        return SitemapResult(SitemapStatus.EMPTY)
    logger.info("Found %d pages in sitemap", len(urls))
    return SitemapResult(SitemapStatus.OK, urls=urls)


class PageDiscovery:
    """Фасад обнаружения страниц: sitemap первым, FrontierCrawler как запасной путь."""

    def __init__(
        self,
        fetcher: PageFetcher,
        config: VectorizerConfig,
        crawler: Optional[FrontierCrawler] = None,
    ) -> None:
        self.fetcher = fetcher
        self.config = config
        self.crawler = crawler or FrontierCrawler(fetcher, config)

    async def discover(self, base_url: str) -> List[str]:
        """Возвращает упорядоченный список страниц; пустой список — страниц нет."""
        result = await read_sitemap(self.fetcher, base_url, timeout=self.config.sitemap_timeout)
        if result.status is SitemapStatus.OK and result.urls:
            return result.urls
        pages = await self.crawler.crawl(base_url)
        logger.info("Crawled %d pages", len(pages))
        return pages
