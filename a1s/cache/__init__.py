"""TTL cache and read-through lister wrapper."""
from .cached_lister import CachedLister
from .resource_cache import DEFAULT_TTL, MAX_ENTRIES, CacheConfig, ResourceCache

__all__ = ["CacheConfig", "ResourceCache", "CachedLister", "DEFAULT_TTL", "MAX_ENTRIES"]
