# === FILE: site_vectorizer/parser/html_parser.py ===
"""HTML-to-text extraction for SiteVectorizer.

Only the visible body text matters for chunking: ``<script>``, ``<style>``,
``<noscript>`` and ``<template>`` are dropped and runs of whitespace collapse
to a single space.
"""
from __future__ import annotations

import re
from collections.abc import Sequence

from bs4 import BeautifulSoup

__all__: Sequence[str] = ("extract_text",)

_WS_RE = re.compile(r"\s+")


def extract_text(html: str) -> str:
    """Return the visible text of *html* (body only when present)."""
    soup = BeautifulSoup(html, "html.parser")
    for element in soup(["script", "style", "noscript", "template"]):
        element.decompose()
    root = soup.body or soup
    text = " ".join(t.strip() for t in root.stripped_strings)
    return _WS_RE.sub(" ", text).strip()
