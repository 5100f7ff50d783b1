# site_vectorizer/crawler/fetcher.py
"""
Fetcher module: single-attempt HTTP GET with a per-call timeout.

Any failure (timeout, connection error, non-2xx status) surfaces as
:class:`FetchError`; callers decide whether to skip the page or fall back.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_vectorizer.logger import logger


class FetchError(Exception):
    """The page could not be fetched."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class PageFetcher(Protocol):
    """Anything that can turn a URL into raw text."""

    async def fetch(self, url: str, timeout: Optional[float] = None) -> str:
        ...


class Fetcher:
    """aiohttp-backed :class:`PageFetcher` owning one client session."""

    def __init__(self, user_agent: str, session: Optional[ClientSession] = None) -> None:
        self.user_agent = user_agent
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                headers={"User-Agent": self.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str, timeout: Optional[float] = None) -> str:
        """
        Fetch *url* once and return the decoded body.

        ``timeout=None`` leaves the request unbounded.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}")
                return await resp.text(errors="replace")
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"timed out after {timeout} s") from exc
        except ClientError as exc:
            logger.debug("Fetch %s failed: %r", url, exc)
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
