"""Row and cell styling.

Styles are rich style strings so the presentation surface can hand them
straight to `rich.table.Table.add_row(style=...)` / `rich.text.Text`.
"""
from __future__ import annotations

from .header import ColumnRole, Header
from .row import Row
from .row_event import RowEvent
from .types import ResEvent

MOD_STYLE = "yellow"
ADD_STYLE = "blue"
ERR_STYLE = "red"
STD_STYLE = "white"
HIGHLIGHT_STYLE = "aquamarine1"
KILL_STYLE = "grey50"
COMPLETED_STYLE = "green"

_STATE_OK = frozenset({"running", "active", "available", "attached", "enabled", "in-use", "completed"})
_STATE_BAD = frozenset({"stopped", "terminated", "failed", "error", "deleted", "detached"})
_STATE_BUSY = frozenset({"pending", "starting", "stopping", "updating", "creating", "deleting", "modifying"})


def is_valid(region: str, header: Header, row: Row) -> bool:
    """False only when the row has a VALID column that is set to something other than true."""
    if not row.fields:
        return True
    idx = header.role_index(ColumnRole.VALID)
    if idx is None or idx >= len(row.fields):
        return True
    val = row.fields[idx].strip()
    return val == "" or val.lower() == "true"


def default_colorer(region: str, header: Header, re: RowEvent) -> str:
    if not is_valid(region, header, re.row):
        return ERR_STYLE
    if re.kind == ResEvent.ADD:
        return ADD_STYLE
    if re.kind == ResEvent.UPDATE:
        return MOD_STYLE
    if re.kind == ResEvent.DELETE:
        return KILL_STYLE
    return STD_STYLE


def cell_style(col_name: str, value: str) -> str:
    """Style for one cell based on its column role and value."""
    name = col_name.upper()
    val = value.lower()
    if name in (ColumnRole.STATE.value, ColumnRole.STATUS.value):
        if val in _STATE_OK:
            return COMPLETED_STYLE
        if val in _STATE_BAD:
            return ERR_STYLE
        if val in _STATE_BUSY:
            return MOD_STYLE
        if val == "shutting-down":
            return "orange1"
    if name == ColumnRole.NAME.value and value not in ("", "-"):
        return HIGHLIGHT_STYLE
    if name == ColumnRole.ID.value:
        return "steel_blue"
    return ""


__all__ = [
    "MOD_STYLE", "ADD_STYLE", "ERR_STYLE", "STD_STYLE",
    "HIGHLIGHT_STYLE", "KILL_STYLE", "COMPLETED_STYLE",
    "is_valid", "default_colorer", "cell_style",
]
