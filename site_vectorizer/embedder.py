# File: site_vectorizer/embedder.py
"""site_vectorizer.embedder: клиент локального сервиса эмбеддингов (Ollama API)."""

from __future__ import annotations

import asyncio
from typing import List, Optional, Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_vectorizer.logger import logger

# the availability probe must fail fast even when embedding calls are unbounded
_PROBE_TIMEOUT = 5.0


class ServiceUnavailable(RuntimeError):
    """Сервис эмбеддингов недоступен; запуск невозможен."""


class EmbeddingError(RuntimeError):
    """Не удалось получить эмбеддинг для фрагмента."""


class TextEmbedder(Protocol):
    model: str

    async def embed(self, text: str) -> List[float]:
        ...


class OllamaEmbedder:
    """Асинхронный клиент для ``/api/tags`` и ``/api/embeddings``."""

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: Optional[float] = None,
        session: Optional[ClientSession] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> OllamaEmbedder:
        if self.session is None:
            self.session = ClientSession(raise_for_status=False)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def _require_session(self) -> ClientSession:
        if not self.session:
            raise RuntimeError("Session not initialized")
        return self.session

    async def check_available(self) -> None:
        """Проверяет, что сервис отвечает; иначе бросает ServiceUnavailable."""
        url = f"{self.base_url}/api/tags"
        try:
            async with self._require_session().get(url, timeout=ClientTimeout(total=_PROBE_TIMEOUT)) as resp:
                if not 200 <= resp.status < 300:
                    raise ServiceUnavailable(f"{url} -> HTTP {resp.status}")
        except (ClientError, asyncio.TimeoutError) as exc:
            raise ServiceUnavailable(f"Embedding service is not reachable at {self.base_url}: {exc}") from exc
        logger.debug("Embedding service is up: %s", self.base_url)

    async def embed(self, text: str) -> List[float]:
        """Возвращает вектор для text; при ошибке бросает EmbeddingError."""
        url = f"{self.base_url}/api/embeddings"
        payload = {"model": self.model, "prompt": text}
        try:
            async with self._require_session().post(
                url, json=payload, timeout=ClientTimeout(total=self.timeout)
            ) as resp:
                if not 200 <= resp.status < 300:
                    body = await resp.text()
                    raise EmbeddingError(f"HTTP {resp.status}: {body[:200]}")
                data = await resp.json(content_type=None)
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise EmbeddingError(f"Embedding request failed: {exc}") from exc

        embedding = data.get("embedding") if isinstance(data, dict) else None
        if not isinstance(embedding, list) or not embedding:
            raise EmbeddingError("Response has no embedding")
        try:
            return [float(x) for x in embedding]
        except (TypeError, ValueError) as exc:
            raise EmbeddingError(f"Malformed embedding: {exc}") from exc
