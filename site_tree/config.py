# === FILE: site_tree/config.py ===
"""
Loading and validation of SiteTree configuration.
Pydantic describes the schema and checks values; files may be YAML or JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ("StorageConfig", "CrawlerConfig", "CrawlRequest", "load_config", "DEFAULT_CONFIG_PATH")


class StorageConfig(BaseModel):
    """Where crawled pages are persisted."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    backend: Literal["mongo", "memory"] = Field("mongo", description="Storage backend.")
    uri: str = Field("mongodb://localhost:27017", min_length=1, description="MongoDB connection URI.")
    database: str = Field("crawler", min_length=1, description="Database holding one collection per crawl.")
    server_selection_timeout_ms: int = Field(2000, gt=0, description="pymongo server selection timeout.")


class CrawlerConfig(BaseModel):
    """Configuration shared by every crawl started from one process."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_depth: int = Field(2, ge=1, le=10, description="Default crawl depth (hops from the root page).")
    fetch_timeout: float = Field(10.0, gt=0, description="Timeout for a single request (seconds).")
    crawl_timeout: Optional[float] = Field(
        None, gt=0, description="After this many seconds no new branches are started."
    )
    concurrency: int = Field(10, ge=1, description="Maximum number of fetches in flight.")
    follow_redirects: bool = Field(True, description="Follow HTTP redirects automatically.")
    exclude_substring: Optional[str] = Field(
        "#main", description="Anchors whose href contains this substring are skipped."
    )
    storage: StorageConfig = Field(default_factory=StorageConfig)


class CrawlRequest(BaseModel):
    """Operator input for a single crawl, validated before anything is fetched."""
    model_config = ConfigDict(frozen=True)

    url: str
    depth: int = Field(..., ge=1, le=10)
    keyword: str = ""
    namespace: str = Field(..., min_length=1)

    @field_validator("url")
    @classmethod
    def _check_http_url(cls, v: str) -> str:
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"not an http(s) URL: {v!r}")
        return v

    @field_validator("namespace", mode="before")
    @classmethod
    def _strip_namespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.

    With ``path=None`` the default ``configs/default.yaml`` is used when present,
    otherwise built-in defaults. An explicit path that does not exist raises
    FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return CrawlerConfig()
        path_obj = DEFAULT_CONFIG_PATH
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
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlerConfig(**data)
