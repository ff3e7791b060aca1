"""
Loading and validation of the DocsLoader crawl configuration.
Pydantic describes the schema and checks the data.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Literal, Optional, Union
from urllib.parse import urljoin

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
    model_validator,
)

from docs_loader.utils import origin_of

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; DocsLoader/1.0)"
DEFAULT_PURPOSE = "This documentation serves as a style and engineering reference."


class LoaderConfig(BaseModel):
    """Configuration of one crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: HttpUrl = Field(..., description="Origin (scheme + host) the crawl is confined to.")
    seeds: List[str] = Field(default_factory=lambda: ["/"], min_length=1, description="Start paths or URLs.")
    max_depth: int = Field(3, ge=0, description="Maximum number of link hops from a seed.")
    max_pages: Optional[int] = Field(None, ge=1, description="Optional hard limit on fetched pages.")
    timeout: float = Field(10.0, gt=0, description="Per-request timeout (seconds).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    output_dir: Path = Field(Path("docs/crawled"), description="Root directory for artifacts.")
    concurrency: int = Field(1, ge=1, description="Number of concurrent fetch workers.")
    traversal: Literal["depth", "breadth"] = Field("depth", description="Traversal order.")
    parser: Literal["lenient", "strict"] = Field("lenient", description="Markup parser variant.")
    run_timeout: Optional[float] = Field(None, gt=0, description="Deadline for the whole run (seconds).")
    title: str = Field("Documentation Index", min_length=1, description="Heading of the index artifact.")
    purpose: str = Field(DEFAULT_PURPOSE, description="Purpose line of the index artifact.")

    @field_validator("base_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @model_validator(mode="after")
    def _check_seeds_in_origin(self) -> LoaderConfig:
        for seed in self.seed_urls:
            if origin_of(seed) != self.origin:
                raise ValueError(f"seed {seed!r} is outside of origin {self.origin}")
        return self

    @property
    def origin(self) -> str:
        """Scheme and host (with a non-default port) of ``base_url``, without trailing slash."""
        return origin_of(str(self.base_url))

    @property
    def seed_urls(self) -> List[str]:
        """Seeds as absolute URLs; relative seeds are resolved against the origin root."""
        return [urljoin(self.origin + "/", seed.strip()) for seed in self.seeds]


_DEFAULT_CFG = Path("configs/default.yaml")


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


def load_config(path: Union[str, Path, None]) -> LoaderConfig:
    """
    Read a YAML or JSON file and return a validated LoaderConfig.
    Raises FileNotFoundError when the config file is missing.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
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
        raise ValueError(f"Unsupported config format: {suffix}")

    return LoaderConfig(**data)


__all__ = ["LoaderConfig", "load_config", "ValidationError"]
