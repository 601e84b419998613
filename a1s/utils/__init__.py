"""Shared helpers: env flags, exceptions, logging setup."""
from .env_flags import is_truthy, is_truthy_env, parse_flag
from .exceptions import (
    A1sException,
    ConfigError,
    FetchError,
    FetchTimeoutError,
    RenderError,
    RowNotFoundError,
    SnapshotPublishedError,
)

__all__ = [
    "is_truthy", "is_truthy_env", "parse_flag",
    "A1sException", "ConfigError", "FetchError", "FetchTimeoutError",
    "RenderError", "RowNotFoundError", "SnapshotPublishedError",
]
