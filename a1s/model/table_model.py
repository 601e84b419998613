"""Live table synchronization engine.

One `TableModel` binds a resource type (`rid`) to a `Lister` and a
`Renderer`. `watch()` performs one synchronous refresh, then keeps
refreshing from a daemon thread every `refresh_rate` seconds until `stop()`.

Each refresh lists the whole collection, renders every object into a row,
reconciles the rows against the previous snapshot (add / update /
unchanged), publishes a new `TableData` and swaps it in under the model
lock. Listeners are notified after the swap:

* "no data"      - the new snapshot is empty and the previous one was not
* "data changed" - every other successful refresh, even when nothing moved
* "load failed"  - the listing failed; the previous snapshot is kept

A refresh whose loop was cancelled while the listing was in flight is
dropped without notifying anyone.
"""
from __future__ import annotations

import logging
import threading
import time
from collections.abc import Sequence
from typing import Any

from .. import metrics as m
from ..model1.delta import DeltaRow
from ..model1.header import Header
from ..model1.row_event import RowEvent, RowEvents
from ..model1.table_data import TableData
from ..model1.types import Renderer, ResEvent
from ..utils.exceptions import ConfigError, FetchError, FetchTimeoutError, RenderError
from .types import FetchContext, Lister, TableListener

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_RATE = 5.0  # seconds
DEFAULT_API_TIMEOUT = 30.0  # seconds


class TableModel:
    def __init__(self, rid: str, refresh_rate: float = DEFAULT_REFRESH_RATE,
                 api_timeout: float = DEFAULT_API_TIMEOUT, *,
                 lister: Lister | None = None, renderer: Renderer | None = None,
                 region: str = "") -> None:
        self.rid = rid
        self._refresh_rate = refresh_rate if refresh_rate > 0 else DEFAULT_REFRESH_RATE
        self._api_timeout = api_timeout if api_timeout > 0 else DEFAULT_API_TIMEOUT
        self._lister = lister
        self._renderer = renderer
        self._region = region
        self._data = TableData(namespace=region).publish()
        self._listeners: list[TableListener] = []
        self._lock = threading.Lock()
        self._cancel: threading.Event | None = None
        self._thread: threading.Thread | None = None
        self._inflight: set[FetchContext] = set()

    # ----------------- Configuration -----------------
    def set_lister(self, lister: Lister | None) -> None:
        with self._lock:
            self._lister = lister

    def set_renderer(self, renderer: Renderer | None) -> None:
        with self._lock:
            self._renderer = renderer

    def set_region(self, region: str) -> None:
        with self._lock:
            self._region = region

    def region(self) -> str:
        return self._region

    def set_refresh_rate(self, rate: float) -> None:
        """Takes effect from the next tick of a running loop."""
        with self._lock:
            self._refresh_rate = rate if rate > 0 else DEFAULT_REFRESH_RATE

    @property
    def refresh_rate(self) -> float:
        return self._refresh_rate

    @property
    def api_timeout(self) -> float:
        return self._api_timeout

    def _require(self) -> tuple[Lister, Renderer]:
        lister, renderer = self._lister, self._renderer
        if lister is None:
            raise ConfigError(f"no lister configured for {self.rid!r}")
        if renderer is None:
            raise ConfigError(f"no renderer configured for {self.rid!r}")
        return lister, renderer

    # ----------------- Listeners -----------------
    def add_listener(self, listener: TableListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: TableListener) -> None:
        with self._lock:
            self._listeners = [x for x in self._listeners if x is not listener]

    def _notify(self, listeners: Sequence[TableListener], method: str, arg: Any) -> None:
        for lst in listeners:
            try:
                getattr(lst, method)(arg)
            except Exception:
                logger.exception("listener %r failed in %s", lst, method)

    # ----------------- Snapshot reads -----------------
    def peek(self) -> TableData:
        """Stable copy of the latest published snapshot."""
        return self._data.clone()

    def header(self) -> Header:
        return self._data.header()

    def row_events(self) -> RowEvents:
        return self._data.row_events()

    def row_count(self) -> int:
        return self._data.row_count()

    def empty(self) -> bool:
        return self._data.empty()

    def namespace(self) -> str:
        return self._data.namespace()

    # ----------------- Lifecycle -----------------
    def is_watching(self) -> bool:
        cancel = self._cancel
        return cancel is not None and not cancel.is_set()

    def watch(self, region: str | None = None, parent: threading.Event | None = None) -> None:
        """Refresh now, then keep refreshing in the background.

        Any previous loop of this model is cancelled first. Returns once the
        initial refresh is done. `parent`, when given, stops the loop at its
        next tick once set.
        """
        if region is not None:
            self.set_region(region)
        self._require()
        self._stop_loop()
        cancel = threading.Event()
        with self._lock:
            self._cancel = cancel
        logger.info("watching %s in %s every %.1fs", self.rid, self._region or "default region", self._refresh_rate)
        self._refresh(cancel)
        if cancel.is_set():
            return
        t = threading.Thread(target=self._run, args=(cancel, parent),
                             name=f"a1s-watch-{self.rid}", daemon=True)
        with self._lock:
            if self._cancel is not cancel:
                return
            self._thread = t
        t.start()

    def _run(self, cancel: threading.Event, parent: threading.Event | None) -> None:
        while True:
            if cancel.wait(self._refresh_rate):
                break
            if parent is not None and parent.is_set():
                cancel.set()
                break
            try:
                self._refresh(cancel)
            except ConfigError as e:
                logger.error("refresh of %s skipped: %s", self.rid, e)
            except Exception:
                logger.exception("unexpected refresh failure for %s", self.rid)
        logger.debug("watch loop for %s exited", self.rid)

    def _stop_loop(self) -> bool:
        with self._lock:
            cancel, self._cancel, self._thread = self._cancel, None, None
        if cancel is None or cancel.is_set():
            return False
        cancel.set()
        return True

    def stop(self) -> None:
        """Cancel the background loop; safe to call any number of times."""
        if self._stop_loop():
            logger.info("stopped watching %s", self.rid)

    def close(self) -> None:
        """Stop and cancel every listing still in flight."""
        self.stop()
        with self._lock:
            inflight, self._inflight = self._inflight, set()
        for ctx in inflight:
            ctx.cancel()

    # ----------------- Refresh -----------------
    def refresh(self, region: str | None = None) -> bool:
        """Force an immediate refresh; True when a new snapshot was published.

        Raises ConfigError when no lister or renderer is set. Fetch failures
        are reported to listeners instead of raised.
        """
        if region is not None:
            self.set_region(region)
        with self._lock:
            cancel = self._cancel if self._cancel is not None else threading.Event()
        return self._refresh(cancel)

    def _fetch(self, lister: Lister, region: str, cancel: threading.Event) -> list[Any]:
        """Run one listing on its own daemon thread and wait up to the API timeout.

        A listing that overruns is cancelled through its context and
        abandoned; it never holds up the next tick.
        """
        ctx = FetchContext(self._api_timeout, parent=cancel)
        done = threading.Event()
        result: dict[str, Any] = {}

        def _call() -> None:
            try:
                result["objs"] = lister.list(ctx, region)
            except Exception as e:
                result["err"] = e
            finally:
                with self._lock:
                    self._inflight.discard(ctx)
                done.set()

        with self._lock:
            self._inflight.add(ctx)
        t = threading.Thread(target=_call, name=f"a1s-fetch-{self.rid}", daemon=True)
        t.start()
        if not done.wait(self._api_timeout):
            ctx.cancel()
            with self._lock:
                self._inflight.discard(ctx)
            raise FetchTimeoutError(f"listing {self.rid} in {region or 'default region'} "
                                    f"exceeded {self._api_timeout:g}s",
                                    resource=self.rid, region=region)
        err = result.get("err")
        if isinstance(err, FetchError):
            raise err
        if err is not None:
            raise FetchError(f"listing {self.rid} failed: {err}", resource=self.rid, region=region) from err
        return list(result.get("objs") or ())

    def _reconcile(self, objs: Sequence[Any], renderer: Renderer, header: Header,
                   region: str, prev: TableData) -> RowEvents:
        events = RowEvents()
        same_header = not prev.header().diff(header)
        prev_rows = prev.row_events()
        age_col = header.age_index()
        skipped = 0
        for obj in objs:
            try:
                row = renderer.render(obj, region)
                if len(row.fields) != len(header):
                    raise RenderError(f"row {row.id!r} has {len(row.fields)} fields, header has {len(header)}")
            except Exception as e:
                skipped += 1
                logger.debug("skipping %s object: %s", self.rid, e)
                continue
            old = prev_rows.get(row.id) if same_header else None
            if old is None:
                events.add(RowEvent(ResEvent.ADD, row))
            elif old.row.diff(row, age_col):
                events.add(RowEvent.with_deltas(row, DeltaRow.compute(old.row, row, header)))
            else:
                events.add(RowEvent(ResEvent.UNCHANGED, row))
        if skipped:
            m.render_skipped_total.labels(resource=self.rid).inc(skipped)
        return events

    def _refresh(self, cancel: threading.Event) -> bool:
        lister, renderer = self._require()
        region = self._region
        start = time.perf_counter()
        try:
            objs = self._fetch(lister, region, cancel)
            try:
                header = renderer.header(region)
            except Exception as e:
                raise RenderError(f"header for {self.rid} failed: {e}") from e
        except (FetchError, RenderError) as e:
            if cancel.is_set():
                return self._discard(region)
            m.table_refresh_total.labels(resource=self.rid, outcome="error").inc()
            logger.warning("load of %s in %s failed: %s", self.rid, region or "default region", e)
            with self._lock:
                listeners = list(self._listeners)
            self._notify(listeners, "table_load_failed", e)
            return False

        events = self._reconcile(objs, renderer, header, region, self._data)
        data = TableData(header, events, region).publish()
        with self._lock:
            if cancel.is_set():
                discarded = True
            else:
                discarded = False
                prev, self._data = self._data, data
                listeners = list(self._listeners)
        if discarded:
            return self._discard(region)

        elapsed = time.perf_counter() - start
        m.table_refresh_total.labels(resource=self.rid, outcome="ok").inc()
        m.table_refresh_seconds.labels(resource=self.rid).observe(elapsed)
        m.table_rows.labels(resource=self.rid).set(data.row_count())
        logger.debug("refreshed %s: %d rows in %.3fs", self.rid, data.row_count(), elapsed)
        if data.empty() and not prev.empty():
            self._notify(listeners, "table_no_data", data.clone())
        else:
            self._notify(listeners, "table_data_changed", data.clone())
        return True

    def _discard(self, region: str) -> bool:
        m.table_refresh_total.labels(resource=self.rid, outcome="discarded").inc()
        logger.debug("discarding %s result for %s after cancellation", self.rid, region or "default region")
        return False


__all__ = ["TableModel", "DEFAULT_REFRESH_RATE", "DEFAULT_API_TIMEOUT"]
