# File: tests/test_config.py
import json
import warnings
from pathlib import Path

import pytest
from pydantic import HttpUrl, ValidationError

from site_vectorizer.config import VectorizerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,expect_exc",
    [
        ("base_url: http://example.com\nmax_pages: 5", None),
        (json.dumps({"base_url": "http://example.com", "max_pages": 5}), None),
        ("{\"max_pages\": 0}", ValidationError),
        ("unknown_key: 1", ValidationError),
        ("not: a: mapping", ValueError),
        ("- just\n- a list", TypeError),
    ],
)
def test_load_config_variants(tmp_path, content, expect_exc):
    suffix = ".yaml" if not content.strip().startswith("{") else ".json"
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, VectorizerConfig)
        assert cfg.base.rstrip("/") == "http://example.com"
        assert cfg.max_pages == 5


def test_defaults_without_any_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = load_config(None)
    assert cfg.base_url is None
    assert (cfg.max_pages, cfg.max_depth, cfg.chunk_max_tokens) == (20, 2, 400)
    assert cfg.crawl_timeout == cfg.sitemap_timeout == 5.0
    assert cfg.page_timeout is None
    assert cfg.split_threshold_bytes == 10 * 1024 * 1024
    assert cfg.exclude_patterns == ["login", "admin", "auth", "api"]
    with pytest.raises(ValueError):
        cfg.base


def test_default_file_is_picked_up(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("max_pages: 7\n", encoding="utf-8")
    assert load_config(None).max_pages == 7


def test_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_unsupported_suffix(tmp_path):
    with pytest.raises(ValueError):
        load_config(write_file(tmp_path, "max_pages = 3", ".toml"))


def test_scheme_is_added_and_overrides_validate():
    cfg = VectorizerConfig(base_url="example.com/docs")
    assert cfg.base == "https://example.com/docs"

    updated = cfg.with_overrides(max_pages=3, model=None)
    assert updated.max_pages == 3
    assert updated.model == cfg.model
    with pytest.raises(ValidationError):
        cfg.with_overrides(max_depth=-1)


def test_default_ollama_url_is_validated():
    cfg = VectorizerConfig()
    assert isinstance(cfg.ollama_url, HttpUrl)
    assert str(cfg.ollama_url) == "http://localhost:11434/"

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        cfg.model_dump_json()
        updated = cfg.with_overrides(max_pages=3)
    assert updated.ollama_url == cfg.ollama_url
