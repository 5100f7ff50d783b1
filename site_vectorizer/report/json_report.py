# site_vectorizer/report/json_report.py

"""
Запись vectors.json для проекта SiteVectorizer.

Небольшой результат сохраняется одним файлом
``<output_dir>/<host>/.well-known/vectors.json``. Если компактный JSON больше
порога, фрагменты раскладываются по файлам страниц в ``.well-known/vectors/``,
а ``vectors.json`` становится индексом этих файлов.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from site_vectorizer.aggregator import VectorsReport
from site_vectorizer.config import SPLIT_THRESHOLD_BYTES
from site_vectorizer.logger import logger
from site_vectorizer.utils import extract_domain, url_slug


@dataclass(slots=True)
class ExportResult:
    """Куда и как был записан отчёт."""

    path: Path
    size_bytes: int
    split: bool
    files: int = 1


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def render_json(
    report: VectorsReport,
    output_dir: Union[Path, str],
    split_threshold: int = SPLIT_THRESHOLD_BYTES,
) -> ExportResult:
    """
    Сохраняет report в ``<output_dir>/<host>/.well-known``.

    :param report: объект VectorsReport
    :param output_dir: корневая папка экспорта
    :param split_threshold: порог размера (байт) для разбиения по страницам
    :return: ExportResult с путём к vectors.json

    Пример:
    ```python
    from site_vectorizer.report.json_report import render_json
    result = render_json(report, 'exports')
    print(f"vectors.json saved to: {result.path}")
    ```
    """
    well_known = Path(output_dir) / extract_domain(report.source) / ".well-known"
    index_path = well_known / "vectors.json"
    size = report.serialized_size()

    if size <= split_threshold:
        _write_json(index_path, report.to_dict())
        logger.info("Saved %d chunks to %s", report.total_chunks, index_path)
        return ExportResult(path=index_path, size_bytes=size, split=False)

    logger.info("Output too large (%d bytes), splitting by page", size)
    vectors_dir = well_known / "vectors"
    files: List[Dict[str, Any]] = []
    used: Dict[str, int] = {}
    for url, chunks in report.chunks_by_url().items():
        slug = url_slug(url, report.source)
        used[slug] = used.get(slug, 0) + 1
        if used[slug] > 1:
            # "/a-b" and "/a/b" share a slug
            slug = f"{slug}-{used[slug]}"
        filename = f"{slug}.json"
        _write_json(vectors_dir / filename, {"url": url, "chunks": [asdict(c) for c in chunks]})
        files.append({"url": url, "file": f"/vectors/{filename}", "chunks": len(chunks)})

    index = {
        "source": report.source,
        "lastUpdated": report.last_updated,
        "model": report.model,
        "files": files,
    }
    _write_json(index_path, index)
    logger.info("Created vectors index at %s (%d page files)", index_path, len(files))
    return ExportResult(path=index_path, size_bytes=size, split=True, files=len(files) + 1)
