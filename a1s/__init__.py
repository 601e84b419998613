"""a1s - live terminal tables for cloud resources."""

from .version import __version__, get_version

__all__ = ["__version__", "get_version"]
