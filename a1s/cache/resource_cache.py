"""Bounded TTL cache for remote resource listings.

Entries expire lazily: `get` treats an entry whose expiry is at or before
"now" as absent, there is no background sweep. When the cache is full an
insert first evicts the single entry with the oldest insertion time.

Writers serialise on a lock and publish a fresh dict; readers only load the
current dict reference, so reads never wait on each other or on a writer and
never observe an eviction without its matching insert.
"""
from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NamedTuple

from .. import metrics as m

logger = logging.getLogger(__name__)

DEFAULT_TTL = 5.0
MAX_ENTRIES = 1000


@dataclass(slots=True)
class CacheConfig:
    default_ttl: float = DEFAULT_TTL  # seconds
    max_entries: int = MAX_ENTRIES


class _Entry(NamedTuple):
    value: Any
    inserted: float
    expires: float


class ResourceCache:
    def __init__(self, cfg: CacheConfig | None = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        cfg = cfg or CacheConfig()
        self.cfg = CacheConfig(
            default_ttl=cfg.default_ttl if cfg.default_ttl > 0 else DEFAULT_TTL,
            max_entries=cfg.max_entries if cfg.max_entries > 0 else MAX_ENTRIES,
        )
        self._clock = clock
        self._data: dict[str, _Entry] = {}
        self._write_lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    # ----------------- Reads -----------------
    def get(self, key: str) -> tuple[Any, bool]:
        entry = self._data.get(key)
        if entry is None or entry.expires <= self._clock():
            self._misses += 1
            m.cache_misses_total.inc()
            return None, False
        self._hits += 1
        m.cache_hits_total.inc()
        return entry.value, True

    def __contains__(self, key: str) -> bool:
        entry = self._data.get(key)
        return entry is not None and entry.expires > self._clock()

    def __len__(self) -> int:
        return len(self._data)

    def keys(self) -> list[str]:
        return list(self._data)

    # ----------------- Writes -----------------
    def set(self, key: str, value: Any) -> None:
        self.set_with_ttl(key, value, self.cfg.default_ttl)

    def set_with_ttl(self, key: str, value: Any, ttl: float) -> None:
        with self._write_lock:
            now = self._clock()
            data = dict(self._data)
            if key not in data and len(data) >= self.cfg.max_entries:
                self._evict_oldest(data)
            data[key] = _Entry(value, now, now + ttl)
            self._data = data
            m.cache_size.set(len(data))

    def _evict_oldest(self, data: dict[str, _Entry]) -> None:
        oldest = min(data, key=lambda k: data[k].inserted)
        del data[oldest]
        self._evictions += 1
        m.cache_evictions_total.inc()
        logger.debug("cache evicted %s", oldest)

    def delete(self, key: str) -> bool:
        with self._write_lock:
            if key not in self._data:
                return False
            data = dict(self._data)
            del data[key]
            self._data = data
            m.cache_size.set(len(data))
            return True

    def delete_prefix(self, prefix: str) -> int:
        """Drop every key starting with `prefix`; returns how many were removed."""
        if not prefix:
            return 0
        with self._write_lock:
            data = {k: v for k, v in self._data.items() if not k.startswith(prefix)}
            removed = len(self._data) - len(data)
            if removed:
                self._data = data
                m.cache_size.set(len(data))
        if removed:
            logger.debug("cache invalidated %d entries under %r", removed, prefix)
        return removed

    def clear(self) -> None:
        with self._write_lock:
            self._data = {}
            m.cache_size.set(0)

    invalidate = clear

    def stats(self) -> dict[str, int]:
        return {
            "size": len(self._data),
            "max": self.cfg.max_entries,
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
        }


__all__ = ["CacheConfig", "ResourceCache", "DEFAULT_TTL", "MAX_ENTRIES"]
