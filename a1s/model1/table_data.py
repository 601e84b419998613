"""Point-in-time table snapshot.

A `TableData` is filled in (header, rows, namespace, optional error) and then
published. After `publish()` the setters refuse to run; state advances only
by building a new snapshot and swapping it in. `clone()` shares the header
and row collection by reference but yields an independent object, so a
reader can hold a clone steady while the owner swaps in a replacement.
"""
from __future__ import annotations

import threading

from ..utils.exceptions import SnapshotPublishedError
from .header import Header
from .row_event import RowEvents
from .types import ALL_REGIONS


class TableData:
    def __init__(self, header: Header | None = None, row_events: RowEvents | None = None,
                 namespace: str = "", error: str = "") -> None:
        self._header = header if header is not None else Header()
        self._row_events = row_events if row_events is not None else RowEvents()
        self._namespace = namespace
        self._error = error
        self._published = False
        self._lock = threading.Lock()

    def _check_writable(self, what: str) -> None:
        if self._published:
            raise SnapshotPublishedError(f"cannot {what} on a published snapshot")

    def publish(self) -> TableData:
        with self._lock:
            self._published = True
            self._row_events.freeze()
        return self

    @property
    def published(self) -> bool:
        return self._published

    def header(self) -> Header:
        return self._header

    def set_header(self, header: Header) -> None:
        with self._lock:
            self._check_writable("set header")
            self._header = header

    def row_events(self) -> RowEvents:
        return self._row_events

    def set_row_events(self, row_events: RowEvents) -> None:
        with self._lock:
            self._check_writable("set rows")
            self._row_events = row_events

    def namespace(self) -> str:
        return self._namespace

    def set_namespace(self, ns: str) -> None:
        with self._lock:
            self._check_writable("set namespace")
            self._namespace = ns

    def scope_label(self) -> str:
        """Namespace for display; empty and "*" collapse to "all"."""
        ns = self._namespace
        return ns if ns and ns != "*" else ALL_REGIONS

    def error(self) -> str:
        return self._error

    def set_error(self, msg: str) -> None:
        with self._lock:
            self._check_writable("set error")
            self._error = msg

    def has_error(self) -> bool:
        return self._error != ""

    def empty(self) -> bool:
        return self._row_events.empty()

    def row_count(self) -> int:
        return len(self._row_events)

    def clone(self) -> TableData:
        with self._lock:
            out = TableData(self._header, self._row_events, self._namespace, self._error)
            out._published = self._published
        return out

    def __repr__(self) -> str:
        return (f"TableData(ns={self._namespace!r}, rows={self.row_count()}, "
                f"cols={len(self._header)}, error={self._error!r})")


__all__ = ["TableData"]
