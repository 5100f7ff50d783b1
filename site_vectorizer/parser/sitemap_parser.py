# File: site_vectorizer/parser/sitemap_parser.py
"""site_vectorizer.parser.sitemap_parser: Модуль для парсинга sitemap.xml и извлечения URL."""

from __future__ import annotations

from typing import List, Union

from lxml import etree

from site_vectorizer.utils import remove_duplicates


class SitemapParseError(ValueError):
    """Документ sitemap не является корректным XML."""


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return etree.QName(tag).localname


def parse_sitemap(xml_content: Union[str, bytes]) -> List[str]:
    """Разбирает XML sitemap и возвращает URL из первого <loc> каждого <url> в <urlset>.

    Повторяющиеся URL схлопываются с сохранением порядка. Если корень не
    ``urlset`` (например, ``sitemapindex``), возвращается пустой список.

    Args:
        xml_content: строка или байты с содержимым sitemap.xml.

    Raises:
        SitemapParseError: документ не разбирается как XML.

    Пример:
    ```python
    from site_vectorizer.parser.sitemap_parser import parse_sitemap

    urls = parse_sitemap('<urlset><url><loc>https://x.com/a</loc></url></urlset>')
    print(urls)  # ['https://x.com/a']
    ```
    """
    raw = xml_content.encode("utf-8") if isinstance(xml_content, str) else xml_content
    raw = raw.strip()
    if not raw:
        raise SitemapParseError("Пустой документ sitemap")
    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)
    try:
        root = etree.fromstring(raw, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise SitemapParseError(f"Неправильный XML sitemap: {exc}") from exc
    if root is None or _local_name(root.tag) != "urlset":
        return []

    urls: List[str] = []
    for entry in root:
        if _local_name(entry.tag) != "url":
            continue
        loc = next((child for child in entry if _local_name(child.tag) == "loc"), None)
        if loc is not None and loc.text and loc.text.strip():
            urls.append(loc.text.strip())
    return remove_duplicates(urls)
