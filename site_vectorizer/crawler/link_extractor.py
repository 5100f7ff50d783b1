# site_vectorizer/crawler/link_extractor.py
"""
Link extraction and crawl filtering utilities for SiteVectorizer.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Pattern
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_vectorizer.utils import resolve_url

_SKIPPED_SCHEMES = ("mailto:", "javascript:", "tel:")


def extract_links(html: str, page_url: str) -> List[str]:
    """
    Return absolute URLs of every ``<a href>`` in document order.

    Relative hrefs are resolved against *page_url*; mailto:, javascript: and
    tel: links are skipped. Duplicates are kept, the crawler filters them.
    """
    soup = BeautifulSoup(html, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.lower().startswith(_SKIPPED_SCHEMES):
            continue
        try:
            links.append(resolve_url(raw, page_url))
        except ValueError:
            continue
    return links


def build_exclusion(words: Iterable[str]) -> Pattern[str]:
    """Compile a case-insensitive matcher for path segments starting with any of *words*."""
    escaped = [re.escape(w) for w in words]
    if not escaped:
        return re.compile(r"(?!)")
    return re.compile(r"/(?:" + "|".join(escaped) + ")", re.IGNORECASE)


def is_excluded(url: str, pattern: Pattern[str], skip_dotted: bool = True) -> bool:
    """
    True if the URL path hits the exclusion *pattern* or, with *skip_dotted*,
    contains a literal dot (static assets such as ``/logo.png`` or ``/page.html``).
    """
    path = urlparse(url).path
    if pattern.search(path):
        return True
    return skip_dotted and "." in path
