"""Drawing surfaces for the resource table.

`ResourceTable` derives what to show; a `TableSurface` only draws it. The
rich implementation keeps the last frame as a renderable so it can be handed
to `rich.live.Live`, a `Console`, or inspected directly in tests.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any, NamedTuple, Protocol

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..model1.header import HeaderColumn


class Cell(NamedTuple):
    text: str
    style: str = ""


class SurfaceRow(NamedTuple):
    id: str
    cells: tuple[Cell, ...]
    style: str = ""


class TableSurface(Protocol):
    def set_title(self, title: str) -> None:
        ...

    def render(self, columns: Sequence[HeaderColumn], rows: Sequence[SurfaceRow],
               sort_col: str = "", ascending: bool = True) -> None:
        ...

    def show_message(self, text: str, style: str = "") -> None:
        ...


_ALIGN = {"left": "left", "right": "right", "center": "center"}


class RichSurface:
    """Builds a `rich.table.Table` per frame.

    Pass a `rich.live.Live` to push each frame to the terminal as it is built;
    otherwise call `print_to(console)` when needed.
    """

    def __init__(self, live: Any | None = None) -> None:
        self._live = live
        self.title = ""
        self.message = ""
        self.rows: list[SurfaceRow] = []
        self.columns: list[str] = []
        self._renderable: Any = Text("")

    def set_title(self, title: str) -> None:
        self.title = title
        if isinstance(self._renderable, Table):
            self._renderable.title = title

    def render(self, columns: Sequence[HeaderColumn], rows: Sequence[SurfaceRow],
               sort_col: str = "", ascending: bool = True) -> None:
        tbl = Table(box=box.SIMPLE_HEAD, title=self.title, expand=True)
        names: list[str] = []
        for c in columns:
            label = c.name
            if c.name == sort_col:
                label = f"{c.name} {'▲' if ascending else '▼'}"
            tbl.add_column(label, header_style="bold yellow", justify=_ALIGN.get(c.align, "left"), overflow="fold")
            names.append(c.name)
        for r in rows:
            tbl.add_row(*(Text(cell.text, style=cell.style) for cell in r.cells), style=r.style or None)
        self.columns = names
        self.rows = list(rows)
        self.message = ""
        self._show(tbl)

    def show_message(self, text: str, style: str = "") -> None:
        self.message = text
        self.rows = []
        self._show(Text(f"{self.title}\n{text}" if self.title else text, style=style))

    def _show(self, renderable: Any) -> None:
        self._renderable = renderable
        if self._live is not None:
            self._live.update(renderable)

    def __rich__(self) -> Any:
        return self._renderable

    def print_to(self, console: Console) -> None:
        console.print(self._renderable)


__all__ = ["Cell", "SurfaceRow", "TableSurface", "RichSurface"]
