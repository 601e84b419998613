"""a1s exception hierarchy.

Define a small, clear exception tree for categorizing failures across the
table pipeline. Configuration problems are fatal to the call that hit them;
fetch problems are reported to listeners and retried on the next tick;
render problems only cost the one object that could not be rendered.
"""
from __future__ import annotations


class A1sException(Exception):
    """Base class for all a1s exceptions."""


class ConfigError(A1sException):
    """Configuration-related issues (missing lister/renderer, invalid values)."""


class FetchError(A1sException):
    """A remote listing call failed."""

    def __init__(self, message: str, *, resource: str | None = None, region: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource
        self.region = region


class FetchTimeoutError(FetchError):
    """A remote listing call did not finish before its deadline."""


class RenderError(A1sException):
    """A single provider object could not be converted into a row."""


class SnapshotPublishedError(A1sException):
    """A published TableData was mutated."""


class RowNotFoundError(A1sException, KeyError):
    """Deletion or lookup of a row id that is not in the collection."""

    def __str__(self) -> str:  # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


__all__ = [
    "A1sException",
    "ConfigError",
    "FetchError",
    "FetchTimeoutError",
    "RenderError",
    "RowNotFoundError",
    "SnapshotPublishedError",
]
