"""Presentation layer: filter/sort view over the live table and its surfaces."""
from .resource_table import NO_MATCHES, NO_RESOURCES, ResourceTable, filter_table
from .surface import Cell, RichSurface, SurfaceRow, TableSurface

__all__ = ["ResourceTable", "filter_table", "NO_RESOURCES", "NO_MATCHES",
           "Cell", "SurfaceRow", "TableSurface", "RichSurface"]
