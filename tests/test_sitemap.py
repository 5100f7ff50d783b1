# File: tests/test_sitemap.py
import pytest
from conftest import FakeFetcher

from site_vectorizer.discovery import SitemapStatus, read_sitemap
from site_vectorizer.parser.sitemap_parser import SitemapParseError, parse_sitemap

NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def test_duplicate_locs_collapse():
    xml = (
        "<urlset><url><loc>https://x.com/a</loc></url>"
        "<url><loc>https://x.com/a</loc></url></urlset>"
    )
    assert parse_sitemap(xml) == ["https://x.com/a"]


def test_namespaced_sitemap_keeps_order():
    xml = f"""<?xml version="1.0" encoding="UTF-8"?>
    <urlset xmlns="{NS}">
      <url><loc> https://x.com/b </loc><lastmod>2024-01-01</lastmod></url>
      <url><loc>https://x.com/a</loc></url>
      <url><lastmod>2024-01-01</lastmod></url>
      <url><loc>https://x.com/c</loc><loc>https://x.com/ignored</loc></url>
    </urlset>"""
    assert parse_sitemap(xml) == ["https://x.com/b", "https://x.com/a", "https://x.com/c"]


def test_sitemap_index_is_not_a_urlset():
    xml = f'<sitemapindex xmlns="{NS}"><sitemap><loc>https://x.com/s1.xml</loc></sitemap></sitemapindex>'
    assert parse_sitemap(xml) == []


@pytest.mark.parametrize("xml", ["", "<urlset><url>", "not xml at all"])
def test_malformed_xml_raises(xml):
    with pytest.raises(SitemapParseError):
        parse_sitemap(xml)


@pytest.mark.asyncio()
async def test_read_sitemap_ok():
    fetcher = FakeFetcher({"https://x.com/sitemap.xml": "<urlset><url><loc>https://x.com/a</loc></url></urlset>"})
    result = await read_sitemap(fetcher, "https://x.com/docs/", timeout=5.0)
    assert result.status is SitemapStatus.OK
    assert result.urls == ["https://x.com/a"]
    assert fetcher.calls == [("https://x.com/sitemap.xml", 5.0)]


@pytest.mark.asyncio()
async def test_read_sitemap_missing_is_error_not_exception():
    result = await read_sitemap(FakeFetcher({}), "https://x.com/")
    assert result.status is SitemapStatus.ERROR
    assert result.urls == []
    assert result.error


@pytest.mark.asyncio()
async def test_read_sitemap_bad_xml_is_error():
    fetcher = FakeFetcher({"https://x.com/sitemap.xml": "<html><body>oops"})
    result = await read_sitemap(fetcher, "https://x.com/")
    assert result.status is SitemapStatus.ERROR


@pytest.mark.asyncio()
async def test_read_sitemap_empty_urlset():
    fetcher = FakeFetcher({"https://x.com/sitemap.xml": f'<urlset xmlns="{NS}"></urlset>'})
    result = await read_sitemap(fetcher, "https://x.com/")
    assert result.status is SitemapStatus.EMPTY
