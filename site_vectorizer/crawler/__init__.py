"""site_vectorizer.crawler: загрузка страниц и обход ссылок в пределах домена."""

from .crawler import FrontierCrawler
from .fetcher import Fetcher, FetchError, PageFetcher
from .models import CrawlFrontier

__all__ = ["FrontierCrawler", "Fetcher", "FetchError", "PageFetcher", "CrawlFrontier"]
