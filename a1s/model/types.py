"""Engine-facing capabilities: the fetch side (`Lister`) and the observer side (`TableListener`).

A `FetchContext` travels with every listing call. It carries the deadline for
the call and the cancellation signal of the watch loop that issued it, so a
lister that pages through a remote API can stop early once either fires.
"""
from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover
    from ..model1.table_data import TableData


class FetchContext:
    """Deadline plus cancellation for one listing call.

    `cancel()` only affects this call; `parent` is the issuing loop's signal
    and is observed but never set from here.
    """

    def __init__(self, timeout: float | None = None, parent: threading.Event | None = None) -> None:
        self.deadline = time.monotonic() + timeout if timeout is not None else None
        self._parent = parent
        self._cancel = threading.Event()

    def remaining(self) -> float | None:
        """Seconds left before the deadline (never negative); None when unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def cancelled(self) -> bool:
        if self._cancel.is_set() or self.expired():
            return True
        return self._parent is not None and self._parent.is_set()

    def cancel(self) -> None:
        self._cancel.set()


@runtime_checkable
class Lister(Protocol):
    """Lists every provider object of one resource type in `region`."""

    def list(self, ctx: FetchContext, region: str) -> Sequence[Any]:
        ...


@runtime_checkable
class TableListener(Protocol):
    def table_data_changed(self, data: TableData) -> None:
        ...

    def table_no_data(self, data: TableData) -> None:
        ...

    def table_load_failed(self, err: Exception) -> None:
        ...


__all__ = ["FetchContext", "Lister", "TableListener"]
