"""site_vectorizer.parser: разбор HTML-страниц и sitemap.xml."""

from .html_parser import extract_text
from .sitemap_parser import SitemapParseError, parse_sitemap

__all__ = ["extract_text", "parse_sitemap", "SitemapParseError"]
