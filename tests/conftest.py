# File: tests/conftest.py
from collections.abc import AsyncIterator
from typing import Dict, List, Optional, Tuple

import pytest
from aiohttp import web

from site_vectorizer.config import VectorizerConfig
from site_vectorizer.crawler.fetcher import FetchError
from site_vectorizer.embedder import EmbeddingError


class FakeFetcher:
    """In-memory PageFetcher: url -> html, anything else fails."""

    def __init__(self, pages: Dict[str, str], failing: Optional[set] = None) -> None:
        self.pages = pages
        self.failing = failing or set()
        self.calls: List[Tuple[str, Optional[float]]] = []

    async def fetch(self, url: str, timeout: Optional[float] = None) -> str:
        self.calls.append((url, timeout))
        if url in self.failing or url not in self.pages:
            raise FetchError(url, "HTTP 404")
        return self.pages[url]

    @property
    def fetched_urls(self) -> List[str]:
        return [url for url, _ in self.calls]


class FakeEmbedder:
    """Returns a deterministic 3-dim vector; texts listed in *failing* raise EmbeddingError."""

    model = "fake-embed"

    def __init__(self, failing: Optional[set] = None) -> None:
        self.failing = failing or set()
        self.prompts: List[str] = []

    async def embed(self, text: str) -> List[float]:
        self.prompts.append(text)
        if text in self.failing:
            raise EmbeddingError("boom")
        return [float(len(text)), 0.5, -1.0]


def links_page(*hrefs: str) -> str:
    anchors = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><body>{anchors}</body></html>"


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture()
def basic_config() -> VectorizerConfig:
    """
    Return a basic valid VectorizerConfig for crawler and engine tests.
    """
    return VectorizerConfig(
        base_url="https://example.com",
        max_pages=20,
        max_depth=2,
        crawl_timeout=2.0,
        sitemap_timeout=2.0,
        user_agent="TestAgent/1.0",
    )


@pytest.fixture()
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()
