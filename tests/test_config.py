# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_tree.config import CrawlerConfig, CrawlRequest, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("max_depth: 3\nconcurrency: 4", ".yaml", None),
        (json.dumps({"max_depth": 3, "concurrency": 4}), ".json", None),
        ("max_depth: 0", ".yaml", ValidationError),
        ("unknown_key: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{broken", ".json", ValueError),
        ("max_depth = 3", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert cfg.max_depth == 3
        assert cfg.concurrency == 4
        assert cfg.exclude_substring == "#main"


def test_nested_storage_section(tmp_path):
    cfg_path = write_file(tmp_path, "storage:\n  backend: memory\n  database: pages", ".yml")
    cfg = load_config(cfg_path)
    assert cfg.storage.backend == "memory"
    assert cfg.storage.database == "pages"


def test_load_config_defaults_when_default_file_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config(None) == CrawlerConfig()


def test_load_config_uses_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("max_depth: 5", encoding="utf-8")
    assert load_config(None).max_depth == 5


def test_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_config_is_frozen():
    cfg = CrawlerConfig()
    with pytest.raises(ValidationError):
        cfg.max_depth = 4


@pytest.mark.parametrize(
    "kwargs",
    [
        {"url": "ftp://example.com", "depth": 2, "namespace": "x"},
        {"url": "example.com", "depth": 2, "namespace": "x"},
        {"url": "http://example.com", "depth": 0, "namespace": "x"},
        {"url": "http://example.com", "depth": 11, "namespace": "x"},
        {"url": "http://example.com", "depth": 2, "namespace": "   "},
    ],
)
def test_crawl_request_rejects_invalid_input(kwargs):
    with pytest.raises(ValidationError):
        CrawlRequest(**kwargs)


def test_crawl_request_keeps_url_verbatim():
    req = CrawlRequest(url=" http://Example.com/a#b ", depth=1, namespace=" ns ")
    assert req.url == "http://Example.com/a#b"
    assert req.namespace == "ns"
    assert req.keyword == ""
