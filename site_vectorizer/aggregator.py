# File: site_vectorizer/aggregator.py
"""site_vectorizer.aggregator: Модуль сборки итогового набора векторов."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


@dataclass(slots=True)
class ChunkRecord:
    """Фрагмент страницы с эмбеддингом и происхождением."""

    id: str
    url: str
    text: str
    embedding: List[float]
    tokens: int


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(slots=True)
class VectorsReport:
    """Результат векторизации сайта: все фрагменты в порядке страниц."""

    source: str
    model: str
    chunks: List[ChunkRecord] = field(default_factory=list)
    last_updated: str = field(default_factory=_utc_now)

    @property
    def total_chunks(self) -> int:
        return len(self.chunks)

    def to_dict(self) -> Dict[str, Any]:
        """Словарь в формате vectors.json."""
        return {
            "source": self.source,
            "lastUpdated": self.last_updated,
            "model": self.model,
            "totalChunks": self.total_chunks,
            "chunks": [asdict(c) for c in self.chunks],
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)

    def serialized_size(self) -> int:
        """Размер компактного JSON в байтах UTF-8."""
        return len(self.json().encode("utf-8"))

    def chunks_by_url(self) -> Dict[str, List[ChunkRecord]]:
        """Группирует фрагменты по URL, сохраняя порядок первого появления."""
        grouped: Dict[str, List[ChunkRecord]] = {}
        for chunk in self.chunks:
            grouped.setdefault(chunk.url, []).append(chunk)
        return grouped

    @property
    def page_count(self) -> int:
        return len(self.chunks_by_url())


def aggregate_results(source: str, model: str, records: List[ChunkRecord]) -> VectorsReport:
    """Собирает все фрагменты в VectorsReport."""
    return VectorsReport(source=source, model=model, chunks=list(records))
