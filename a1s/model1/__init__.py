"""Row model: headers, rows, deltas, row events, ordering and snapshots."""
from .color import cell_style, default_colorer, is_valid
from .delta import DeltaRow
from .header import Attrs, ColumnRole, Header, HeaderColumn, col
from .row import Row
from .row_event import RowEvent, RowEvents
from .sorting import duration_to_seconds, less, natural_less, sort_row_events
from .table_data import TableData
from .types import ALL_REGIONS, MISSING_VALUE, NA_VALUE, UNKNOWN_VALUE, Renderer, ResEvent

__all__ = [
    "Attrs", "ColumnRole", "Header", "HeaderColumn", "col",
    "Row", "DeltaRow", "RowEvent", "RowEvents", "TableData",
    "ResEvent", "Renderer", "NA_VALUE", "MISSING_VALUE", "UNKNOWN_VALUE", "ALL_REGIONS",
    "less", "natural_less", "duration_to_seconds", "sort_row_events",
    "cell_style", "default_colorer", "is_valid",
]
