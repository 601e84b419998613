"""Read-through cache in front of a `Lister`."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..model.types import FetchContext, Lister
from .resource_cache import ResourceCache

logger = logging.getLogger(__name__)


class CachedLister:
    """Serve listings from `cache` while fresh; key is "<rid>:<region>".

    Only successful listings are stored, so a failing call is retried by the
    next read instead of being pinned for a TTL.
    """

    def __init__(self, lister: Lister, cache: ResourceCache, rid: str, disabled: bool = False) -> None:
        self.lister = lister
        self.cache = cache
        self.rid = rid
        self.disabled = disabled

    def key(self, region: str) -> str:
        return f"{self.rid}:{region}"

    def list(self, ctx: FetchContext, region: str) -> Sequence[Any]:
        if self.disabled:
            return self.lister.list(ctx, region)
        key = self.key(region)
        cached, found = self.cache.get(key)
        if found:
            return cached
        objs = self.lister.list(ctx, region)
        if ctx.cancelled():
            # partial or late result; do not pin it for a whole TTL
            return objs
        self.cache.set(key, objs)
        return objs

    def invalidate(self, region: str | None = None) -> int:
        """Forget one region, or every region of this resource when `region` is None."""
        if region is not None:
            return 1 if self.cache.delete(self.key(region)) else 0
        n = self.cache.delete_prefix(f"{self.rid}:")
        logger.debug("invalidated %d cached listings for %s", n, self.rid)
        return n


__all__ = ["CachedLister"]
