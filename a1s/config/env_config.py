"""Centralized environment configuration for a1s.

All `A1S_*` environment lookups route through the typed `A1sEnv` dataclass
so defaults, coercion and clamping live in one place.

Design goals:
  * Single source of truth for default values and parsing rules.
  * Explicit bool/int/float coercion with safe fallbacks.
  * Record which settings were actually present in the environment so the
    YAML loader can let them override file values (and only them).
  * Surface deprecated env vars encountered (for logging / future removal).

Backward compatibility:
  * Legacy `A1S_REFRESH_RATE` is honored ONLY when `A1S_REFRESH_SEC` is
    absent; whenever present it is recorded in `deprecated_seen`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..utils.env_flags import parse_flag
from ..utils.logging_utils import DEFAULT_LOG_FILE

# ---------------------------- Parsing Helpers ---------------------------- #

DEFAULT_REFRESH_SEC = 5.0
DEFAULT_API_TIMEOUT_SEC = 30.0
DEFAULT_CACHE_TTL_SEC = 5.0
DEFAULT_CACHE_MAX = 1000

DEPRECATED_ENV = {
    "A1S_REFRESH_RATE",
}


def _get(environ: Mapping[str, str], key: str) -> str | None:
    v = environ.get(key)
    if v is None:
        return None
    v2 = v.strip()
    return v2 if v2 != "" else None


def _get_bool(environ: Mapping[str, str], key: str, default: bool = False) -> bool:
    return parse_flag(_get(environ, key), default)


def _get_int(
    environ: Mapping[str, str], key: str, default: int, *, min_v: int | None = None, max_v: int | None = None
) -> int:
    v = _get(environ, key)
    if v is None:
        return default
    try:
        iv = int(float(v))  # allow floats like "15.0"
    except ValueError:
        return default
    if min_v is not None and iv < min_v:
        iv = min_v
    if max_v is not None and iv > max_v:
        iv = max_v
    return iv


def _get_float(
    environ: Mapping[str, str], key: str, default: float, *, min_v: float | None = None, max_v: float | None = None
) -> float:
    v = _get(environ, key)
    if v is None:
        return default
    try:
        fv = float(v)
    except ValueError:
        return default
    if min_v is not None and fv < min_v:
        fv = min_v
    if max_v is not None and fv > max_v:
        fv = max_v
    return fv


# env var -> A1sEnv field
_ENV_FIELDS = {
    "A1S_REFRESH_SEC": "refresh_sec",
    "A1S_API_TIMEOUT_SEC": "api_timeout_sec",
    "A1S_CACHE_TTL_SEC": "cache_ttl_sec",
    "A1S_CACHE_MAX": "cache_max",
    "A1S_DISABLE_CACHE": "disable_cache",
    "A1S_DEFAULT_REGION": "default_region",
    "A1S_DEFAULT_VIEW": "default_view",
    "A1S_LOG_LEVEL": "log_level",
    "A1S_LOG_FILE": "log_file",
    "A1S_LOG_CONSOLE": "log_console",
    "A1S_JSON_LOGS": "json_logs",
}


@dataclass(slots=True)
class A1sEnv:
    # Cadence / deadlines
    refresh_sec: float = DEFAULT_REFRESH_SEC
    api_timeout_sec: float = DEFAULT_API_TIMEOUT_SEC

    # Cache
    cache_ttl_sec: float = DEFAULT_CACHE_TTL_SEC
    cache_max: int = DEFAULT_CACHE_MAX
    disable_cache: bool = False

    # Startup view
    default_region: str | None = None
    default_view: str | None = None

    # Output / logging
    log_level: str = "INFO"
    log_file: str = DEFAULT_LOG_FILE
    log_console: bool = False
    json_logs: bool = False

    # Fields whose value came from the environment rather than a default
    explicit: set[str] = field(default_factory=set)

    # Deprecated envs encountered (for diagnostics only)
    deprecated_seen: list[str] = field(default_factory=list)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> A1sEnv:
        deprecated_seen: list[str] = [k for k in environ if k in DEPRECATED_ENV]
        explicit = {f for k, f in _ENV_FIELDS.items() if _get(environ, k) is not None}

        if _get(environ, "A1S_REFRESH_SEC") is not None:
            refresh = _get_float(environ, "A1S_REFRESH_SEC", DEFAULT_REFRESH_SEC, min_v=0.5)
        else:
            refresh = _get_float(environ, "A1S_REFRESH_RATE", DEFAULT_REFRESH_SEC, min_v=0.5)
            if _get(environ, "A1S_REFRESH_RATE") is not None:
                explicit.add("refresh_sec")

        ttl = _get_float(environ, "A1S_CACHE_TTL_SEC", DEFAULT_CACHE_TTL_SEC)
        if ttl <= 0:
            ttl = DEFAULT_CACHE_TTL_SEC

        return cls(
            refresh_sec=refresh,
            api_timeout_sec=_get_float(environ, "A1S_API_TIMEOUT_SEC", DEFAULT_API_TIMEOUT_SEC, min_v=1.0),
            cache_ttl_sec=ttl,
            cache_max=_get_int(environ, "A1S_CACHE_MAX", DEFAULT_CACHE_MAX, min_v=1),
            disable_cache=_get_bool(environ, "A1S_DISABLE_CACHE", False),
            default_region=_get(environ, "A1S_DEFAULT_REGION"),
            default_view=_get(environ, "A1S_DEFAULT_VIEW"),
            log_level=(_get(environ, "A1S_LOG_LEVEL") or "INFO").upper(),
            log_file=_get(environ, "A1S_LOG_FILE") or DEFAULT_LOG_FILE,
            log_console=_get_bool(environ, "A1S_LOG_CONSOLE", False),
            json_logs=_get_bool(environ, "A1S_JSON_LOGS", False),
            explicit=explicit,
            deprecated_seen=deprecated_seen,
        )

    def describe(self) -> dict[str, Any]:
        """Return a JSON-serializable summary (safe for diagnostics)."""
        return {
            "refresh_sec": self.refresh_sec,
            "api_timeout_sec": self.api_timeout_sec,
            "cache_ttl_sec": self.cache_ttl_sec,
            "cache_max": self.cache_max,
            "disable_cache": self.disable_cache,
            "default_region": self.default_region,
            "default_view": self.default_view,
            "log_level": self.log_level,
            "log_console": self.log_console,
            "json_logs": self.json_logs,
            "explicit": sorted(self.explicit),
            "deprecated_seen": self.deprecated_seen,
        }


_CACHED: A1sEnv | None = None


def load_a1s_env(*, force_reload: bool = False, environ: Mapping[str, str] | None = None) -> A1sEnv:
    """Load (and cache) the effective A1sEnv.

    Pass force_reload=True to rebuild the cache (e.g. in tests that
    monkeypatch os.environ). An explicit `environ` mapping bypasses the cache.
    """
    global _CACHED
    if environ is not None:
        return A1sEnv.from_environ(environ)
    if _CACHED is None or force_reload:
        _CACHED = A1sEnv.from_environ(os.environ)
    return _CACHED


__all__ = [
    "A1sEnv",
    "load_a1s_env",
    "DEFAULT_REFRESH_SEC",
    "DEFAULT_API_TIMEOUT_SEC",
    "DEFAULT_CACHE_TTL_SEC",
    "DEFAULT_CACHE_MAX",
]
