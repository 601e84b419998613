"""Core value types shared by the row model.

`ResEvent` tags a row with what happened to it between two snapshots. The
`Renderer` protocol is the per-resource-type capability that turns a
provider object into a `Row` and declares the `Header` it fills.
"""
from __future__ import annotations

import enum
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover
    from .header import Header
    from .row import Row
    from .row_event import RowEvent

NA_VALUE = "n/a"
MISSING_VALUE = "<none>"
UNKNOWN_VALUE = "<unknown>"
ALL_REGIONS = "all"


class ResEvent(enum.IntFlag):
    UNCHANGED = 1 << 0
    ADD = 1 << 1
    UPDATE = 1 << 2
    DELETE = 1 << 3
    CLEAR = 1 << 4


DecoratorFunc = Callable[[str], str]
# (region, header, row_event) -> rich style string
ColorerFunc = Callable[[str, "Header", "RowEvent"], str]


@runtime_checkable
class Renderer(Protocol):
    """Converts provider objects into rows for one resource type."""

    def header(self, region: str) -> Header:
        ...

    def render(self, obj: Any, region: str) -> Row:
        """Return the row for `obj`; raise to have the object skipped."""
        ...


__all__ = [
    "NA_VALUE",
    "MISSING_VALUE",
    "UNKNOWN_VALUE",
    "ALL_REGIONS",
    "ResEvent",
    "DecoratorFunc",
    "ColorerFunc",
    "Renderer",
]
