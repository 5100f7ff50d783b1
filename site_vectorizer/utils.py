# File: site_vectorizer/utils.py
"""site_vectorizer.utils: Утилитарные функции для обработки URL."""

from __future__ import annotations

import re
from typing import Collection, List, Sequence
from urllib.parse import urljoin, urlparse, urlunparse

from site_vectorizer.logger import logger

__all__: Sequence[str] = (
    "resolve_url",
    "extract_domain",
    "is_same_host",
    "url_slug",
    "remove_duplicates",
)

_SLUG_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def resolve_url(href: str, base: str = "") -> str:
    """Разрешает href относительно base; пустой путь превращается в "/"."""
    absolute = urljoin(base, href.strip())
    parsed = urlparse(absolute)
    if parsed.scheme in ("http", "https") and parsed.netloc and not parsed.path:
        absolute = urlunparse(parsed._replace(path="/"))
    return absolute


def extract_domain(url: str) -> str:
    """Возвращает hostname из URL; если его нет, сам URL."""
    try:
        host = urlparse(url).hostname
    except ValueError:  # pragma: no cover
        return url
    return host or url


def is_same_host(url: str, host: str) -> bool:
    """Проверяет, что URL использует http(s) и указывает на host."""
    try:
        parsed = urlparse(url)
        valid = parsed.scheme in ("http", "https") and parsed.hostname == host
    except ValueError as exc:
        logger.debug("URL validation error %s: %s", url, exc)
        return False
    return valid


def url_slug(url: str, base_url: str) -> str:
    """Имя-слаг страницы: URL без base_url, все не-алфавитно-цифровые символы -> "-"."""
    slug = _SLUG_RE.sub("-", url.replace(base_url, ""))
    return slug or "home"


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
