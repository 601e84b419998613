"""YAML configuration file plus environment overlay.

Lookup order for the file: explicit `path`, then `$A1S_CONFIG`, then
`~/.config/a1s/config.yaml`. A missing file is not an error. Recognized keys:

    refreshRate: 5          # seconds between refreshes
    apiTimeout: 30s         # seconds, or a compact duration ("30s", "1m")
    readOnly: false
    defaultView: ec2
    defaultRegion: us-east-1
    cache:
      ttl: 5                # seconds
      maxEntries: 1000

A local `.env` is loaded first (python-dotenv, existing variables win), then
any `A1S_*` variable present in the environment overrides the file value.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import yaml
from dotenv import load_dotenv

from ..cache.resource_cache import CacheConfig
from ..model1.sorting import duration_to_seconds
from ..utils.exceptions import ConfigError
from ..utils.logging_utils import DEFAULT_LOG_FILE, setup_logging
from .env_config import (
    DEFAULT_API_TIMEOUT_SEC,
    DEFAULT_CACHE_MAX,
    DEFAULT_CACHE_TTL_SEC,
    DEFAULT_REFRESH_SEC,
    load_a1s_env,
)

logger = logging.getLogger(__name__)

DEFAULT_VIEW = "ec2"
DEFAULT_CONFIG_PATH = os.path.join(os.path.expanduser("~"), ".config", "a1s", "config.yaml")


@dataclass(slots=True)
class A1sConfig:
    refresh_rate: float = DEFAULT_REFRESH_SEC
    api_timeout: float = DEFAULT_API_TIMEOUT_SEC
    read_only: bool = False
    default_view: str = DEFAULT_VIEW
    default_region: str = ""
    cache_ttl: float = DEFAULT_CACHE_TTL_SEC
    cache_max_entries: int = DEFAULT_CACHE_MAX
    disable_cache: bool = False
    log_level: str = "INFO"
    log_file: str = DEFAULT_LOG_FILE
    log_console: bool = False
    json_logs: bool = False
    source: str | None = None  # file the values were read from, if any

    def validate(self) -> A1sConfig:
        """Restore defaults for unusable values; returns self for chaining."""
        if self.refresh_rate <= 0:
            self.refresh_rate = DEFAULT_REFRESH_SEC
        if self.api_timeout <= 0:
            self.api_timeout = DEFAULT_API_TIMEOUT_SEC
        if not self.default_view:
            self.default_view = DEFAULT_VIEW
        if self.cache_ttl <= 0:
            self.cache_ttl = DEFAULT_CACHE_TTL_SEC
        if self.cache_max_entries <= 0:
            self.cache_max_entries = DEFAULT_CACHE_MAX
        return self

    @property
    def refresh_interval(self) -> float:
        return self.refresh_rate

    def cache_config(self) -> CacheConfig:
        return CacheConfig(default_ttl=self.cache_ttl, max_entries=self.cache_max_entries)

    def setup_logging(self) -> None:
        setup_logging(level=self.log_level, log_file=self.log_file,
                      console=self.log_console, json_console=self.json_logs)


def parse_seconds(value: Any, key: str) -> float:
    """Seconds from a number or a compact duration string."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ConfigError(f"{key}: expected seconds or a duration, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value).strip()
    try:
        return float(s)
    except ValueError:
        return float(duration_to_seconds(s))


def _read_yaml(path: str) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return raw


def _apply_file(cfg: A1sConfig, doc: Mapping[str, Any]) -> None:
    if "refreshRate" in doc:
        cfg.refresh_rate = parse_seconds(doc["refreshRate"], "refreshRate")
    if "apiTimeout" in doc:
        cfg.api_timeout = parse_seconds(doc["apiTimeout"], "apiTimeout")
    if "readOnly" in doc:
        cfg.read_only = bool(doc["readOnly"])
    if doc.get("defaultView"):
        cfg.default_view = str(doc["defaultView"])
    if doc.get("defaultRegion"):
        cfg.default_region = str(doc["defaultRegion"])
    cache = doc.get("cache")
    if cache is not None:
        if not isinstance(cache, dict):
            raise ConfigError("cache: expected a mapping")
        if "ttl" in cache:
            cfg.cache_ttl = parse_seconds(cache["ttl"], "cache.ttl")
        if "maxEntries" in cache:
            try:
                cfg.cache_max_entries = int(cache["maxEntries"])
            except (TypeError, ValueError) as e:
                raise ConfigError(f"cache.maxEntries: expected an integer, got {cache['maxEntries']!r}") from e


def load_config(path: str | None = None, environ: Mapping[str, str] | None = None) -> A1sConfig:
    if environ is None:
        load_dotenv()
        environ = os.environ
    path = path or environ.get("A1S_CONFIG") or DEFAULT_CONFIG_PATH
    cfg = A1sConfig()
    doc = _read_yaml(path)
    if doc:
        cfg.source = path
        _apply_file(cfg, doc)
        logger.debug("loaded config from %s", path)

    env = load_a1s_env(environ=environ)
    for name in env.explicit:
        if name == "refresh_sec":
            cfg.refresh_rate = env.refresh_sec
        elif name == "api_timeout_sec":
            cfg.api_timeout = env.api_timeout_sec
        elif name == "cache_ttl_sec":
            cfg.cache_ttl = env.cache_ttl_sec
        elif name == "cache_max":
            cfg.cache_max_entries = env.cache_max
        elif name == "default_view" and env.default_view:
            cfg.default_view = env.default_view
        elif name == "default_region" and env.default_region:
            cfg.default_region = env.default_region
    cfg.disable_cache = env.disable_cache
    cfg.log_level = env.log_level
    cfg.log_file = env.log_file
    cfg.log_console = env.log_console
    cfg.json_logs = env.json_logs
    if env.deprecated_seen:
        logger.warning("deprecated environment variables in use: %s", ", ".join(env.deprecated_seen))
    return cfg.validate()


__all__ = ["A1sConfig", "load_config", "parse_seconds", "DEFAULT_CONFIG_PATH", "DEFAULT_VIEW"]
