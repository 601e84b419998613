"""Filter/sort layer between a `TableModel` and a drawing surface.

`ResourceTable` keeps the last full snapshot delivered by the model and
derives a filtered, sorted view from it on demand, so typing a filter or
changing the sort column never triggers a fetch. The full snapshot is only
replaced by the listener callbacks and is never modified.

Redraws are guarded by a non-blocking lock: a redraw that finds another one
in progress is skipped, the next snapshot or keystroke draws again.
"""
from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from .. import metrics as m
from ..model1.color import ERR_STYLE, MOD_STYLE, cell_style, default_colorer
from ..model1.header import Header
from ..model1.row_event import RowEvent, RowEvents
from ..model1.sorting import sort_row_events
from ..model1.table_data import TableData
from ..model1.types import ColorerFunc
from .surface import Cell, SurfaceRow, TableSurface

if TYPE_CHECKING:  # pragma: no cover
    from ..model.table_model import TableModel

logger = logging.getLogger(__name__)

NO_RESOURCES = "No resources found"
NO_MATCHES = "No matching resources"
MARK_STYLE = "reverse"


def filter_table(data: TableData, text: str) -> TableData:
    """Rows of `data` with any field containing `text` (case-insensitive)."""
    needle = text.lower()
    if not needle:
        return data
    kept = RowEvents(re for re in data.row_events()
                     if any(needle in f.lower() for f in re.row.fields))
    return TableData(data.header(), kept, data.namespace(), data.error()).publish()


class ResourceTable:
    def __init__(self, rid: str, surface: TableSurface, model: TableModel | None = None,
                 colorer: ColorerFunc = default_colorer) -> None:
        self.rid = rid
        self._surface = surface
        self._colorer = colorer
        self._lock = threading.Lock()
        self._render_guard = threading.Lock()
        self._full = TableData().publish()
        self._view = self._full
        self._filter = ""
        self._sort_col = ""
        self._sort_asc = True
        self._wide = False
        self._error = ""
        self._loaded = False
        self._marks: set[str] = set()
        self._model: TableModel | None = None
        surface.set_title(self.title())
        if model is not None:
            self.set_model(model)

    def set_model(self, model: TableModel | None) -> None:
        old = self._model
        if old is not None:
            old.remove_listener(self)
        self._model = model
        if model is not None:
            model.add_listener(self)

    # ----------------- Listener callbacks -----------------
    def table_data_changed(self, data: TableData) -> None:
        self.update_ui(data)

    def table_no_data(self, data: TableData) -> None:
        self.update_ui(data)

    def table_load_failed(self, err: Exception) -> None:
        with self._lock:
            self._error = str(err) or type(err).__name__
        self.update_ui()

    # ----------------- Filter / sort -----------------
    def set_filter(self, text: str) -> None:
        with self._lock:
            self._filter = text
        self.update_ui()

    def clear_filter(self) -> None:
        self.set_filter("")

    @property
    def filter_text(self) -> str:
        return self._filter

    def cycle_sort(self) -> str:
        """Advance the sort column to the next visible column; returns its name."""
        with self._lock:
            header = self._full.header()
            names = [header[i].name for i in header.visible_indices(self._wide)]
            if not names:
                return self._sort_col
            if self._sort_col in names:
                self._sort_col = names[(names.index(self._sort_col) + 1) % len(names)]
            else:
                self._sort_col = names[0]
            chosen = self._sort_col
        self.update_ui()
        return chosen

    def set_sort_column(self, name: str, ascending: bool = True) -> None:
        with self._lock:
            self._sort_col = name
            self._sort_asc = ascending
        self.update_ui()

    def toggle_sort_direction(self) -> None:
        with self._lock:
            self._sort_asc = not self._sort_asc
        self.update_ui()

    @property
    def sort_column(self) -> str:
        return self._sort_col

    @property
    def sort_ascending(self) -> bool:
        return self._sort_asc

    def set_wide(self, wide: bool) -> None:
        with self._lock:
            self._wide = wide
        self.update_ui()

    # ----------------- Marks -----------------
    def toggle_mark(self, row_id: str) -> bool:
        with self._lock:
            if row_id in self._marks:
                self._marks.discard(row_id)
                marked = False
            else:
                self._marks.add(row_id)
                marked = True
        self.update_ui()
        return marked

    def is_marked(self, row_id: str) -> bool:
        return row_id in self._marks

    def clear_marks(self) -> None:
        with self._lock:
            self._marks = set()
        self.update_ui()

    def marked(self) -> list[str]:
        """Marked ids in current view order, then any marked ids no longer visible."""
        with self._lock:
            marks = set(self._marks)
            view = self._view
        ordered = [rid for rid in view.row_events().ids() if rid in marks]
        return ordered + sorted(marks.difference(ordered))

    selected_ids = marked

    # ----------------- Views -----------------
    def full_data(self) -> TableData:
        return self._full

    def view(self) -> TableData:
        """Snapshot most recently derived for display."""
        return self._view

    def title(self) -> str:
        with self._lock:
            full, view, flt, err = self._full, self._view, self._filter, self._error
        region = full.scope_label()
        if self._model is not None:
            ns = self._model.region()
            region = ns if ns and ns != "*" else region
        t = f" {self.rid}({region})[{view.row_count()}] "
        if flt:
            t = f"{t}Filter: {flt} "
        if err:
            t = f" [Error]{t}"
        return t

    def refresh(self) -> None:
        """Redraw from the model's latest snapshot."""
        if self._model is not None:
            self.update_ui(self._model.peek())

    def _derive(self, full: TableData, text: str, col: str, asc: bool) -> TableData:
        data = filter_table(full, text)
        if not col:
            return data
        ordered = sort_row_events(list(data.row_events()), data.header(), col, asc)
        return TableData(data.header(), RowEvents(ordered), data.namespace(), data.error()).publish()

    def update_ui(self, data: TableData | None = None) -> bool:
        """Store `data` (when given) and redraw; False when the redraw was skipped."""
        if data is not None:
            with self._lock:
                self._full = data
                self._loaded = True
                self._error = data.error()
        if not self._render_guard.acquire(blocking=False):
            m.ui_render_skipped_total.labels(resource=self.rid).inc()
            logger.debug("redraw of %s skipped; one already in progress", self.rid)
            return False
        try:
            self._redraw()
        finally:
            self._render_guard.release()
        return True

    def _redraw(self) -> None:
        with self._lock:
            full, flt, col, asc = self._full, self._filter, self._sort_col, self._sort_asc
            wide, err, loaded, marks = self._wide, self._error, self._loaded, set(self._marks)
        view = self._derive(full, flt, col, asc)
        with self._lock:
            self._view = view
        self._surface.set_title(self.title())
        if err and (not loaded or full.empty()):
            self._surface.show_message(f"Error: {err}", ERR_STYLE)
            return
        if full.empty():
            self._surface.show_message(NO_RESOURCES)
            return
        if view.empty():
            self._surface.show_message(NO_MATCHES)
            return
        header = view.header()
        visible = header.visible_indices(wide)
        columns = [header[i] for i in visible]
        rows = [self._surface_row(re, header, visible, full.namespace(), marks) for re in view.row_events()]
        self._surface.render(columns, rows, col, asc)

    def _surface_row(self, re: RowEvent, header: Header, visible: list[int], region: str,
                     marks: set[str]) -> SurfaceRow:
        style = self._colorer(region, header, re)
        if re.id in marks:
            style = f"{style} {MARK_STYLE}".strip()
        changed = not re.deltas.is_blank()
        cells = []
        for i in visible:
            value = re.row.fields[i] if i < len(re.row.fields) else ""
            cs = cell_style(header[i].name, value)
            if changed and i < len(re.deltas) and re.deltas[i] != "":
                cs = MOD_STYLE
            decorate = header[i].attrs.decorator
            cells.append(Cell(decorate(value) if decorate is not None else value, cs))
        return SurfaceRow(re.id, tuple(cells), style)


__all__ = ["ResourceTable", "filter_table", "NO_RESOURCES", "NO_MATCHES"]
