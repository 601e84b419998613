"""Central version metadata for a1s.

Resolution order for get_version():
1. Env override A1S_VERSION (e.g., injected by CI)
2. Installed distribution metadata
3. __version__ constant below (source checkout)
"""
from __future__ import annotations

import os
from importlib import metadata

__version__ = "0.1.0"


def get_version() -> str:
    override = os.environ.get("A1S_VERSION", "").strip()
    if override:
        return override
    try:
        return metadata.version("a1s")
    except metadata.PackageNotFoundError:
        return __version__


__all__ = ["__version__", "get_version"]
