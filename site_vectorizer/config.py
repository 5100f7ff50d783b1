# === FILE: site_vectorizer/config.py ===
"""
Модуль для загрузки и валидации конфигурации SiteVectorizer.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
)

DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_MODEL = "nomic-embed-text"
SPLIT_THRESHOLD_BYTES = 10 * 1024 * 1024


class VectorizerConfig(BaseModel):
    """Конфигурация одного запуска векторизации сайта."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: Optional[HttpUrl] = Field(None, description="Корневой URL сайта.")
    max_pages: int = Field(20, ge=1, description="Жесткий лимит страниц при обходе.")
    max_depth: int = Field(2, ge=0, description="Максимальная глубина обхода ссылок.")
    crawl_timeout: float = Field(5.0, gt=0, description="Таймаут запроса страницы при обходе (секунд).")
    sitemap_timeout: float = Field(5.0, gt=0, description="Таймаут запроса sitemap.xml (секунд).")
    page_timeout: Optional[float] = Field(None, gt=0, description="Таймаут загрузки страницы при индексации.")
    embed_timeout: Optional[float] = Field(None, gt=0, description="Таймаут запроса к сервису эмбеддингов.")
    chunk_max_tokens: int = Field(400, ge=1, description="Бюджет токенов на один фрагмент.")
    model: str = Field(DEFAULT_MODEL, min_length=1, description="Модель эмбеддингов.")
    ollama_url: HttpUrl = Field(DEFAULT_OLLAMA_URL, validate_default=True, description="Адрес сервиса эмбеддингов.")
    user_agent: str = Field("SiteVectorizer/0.1", min_length=1, description="Заголовок User-Agent.")
    output_dir: Path = Field(Path("exports"), description="Каталог для экспорта векторов.")
    split_threshold_bytes: int = Field(
        SPLIT_THRESHOLD_BYTES, ge=1, description="Порог размера, после которого экспорт делится по страницам."
    )
    concurrency: int = Field(1, ge=1, description="Число страниц, индексируемых параллельно.")
    exclude_patterns: List[str] = Field(
        default_factory=lambda: ["login", "admin", "auth", "api"],
        description="Сегменты путей, которые не обходятся.",
    )
    exclude_dotted_paths: bool = Field(True, description="Пропускать пути с точкой (статические файлы).")

    @field_validator("base_url", mode="before")
    def _ensure_scheme(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if v and not v.startswith(("http://", "https://")):
                return f"https://{v}"
        return v

    @field_validator("exclude_patterns")
    def _drop_blank_patterns(cls, v: List[str]) -> List[str]:
        return [p.strip() for p in v if p.strip()]

    def with_overrides(self, **overrides: Any) -> VectorizerConfig:
        """Возвращает проверенную копию конфига; значения None игнорируются."""
        data = self.model_dump(mode="json")
        data.update({k: v for k, v in overrides.items() if v is not None})
        return VectorizerConfig(**data)

    @property
    def base(self) -> str:
        """Корневой URL строкой; бросает ValueError, если он не задан."""
        if self.base_url is None:
            raise ValueError("base_url is not configured")
        return str(self.base_url)


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> VectorizerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект VectorizerConfig.
    Без пути использует configs/default.yaml, а если его нет — значения по умолчанию.
    При отсутствии явно указанного файла бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return VectorizerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    try:
        return VectorizerConfig(**data)
    except ValidationError:
        raise
