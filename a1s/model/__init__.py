"""Synchronization engine and the capabilities it consumes."""
from .table_model import DEFAULT_API_TIMEOUT, DEFAULT_REFRESH_RATE, TableModel
from .types import FetchContext, Lister, TableListener

__all__ = ["TableModel", "FetchContext", "Lister", "TableListener", "DEFAULT_REFRESH_RATE", "DEFAULT_API_TIMEOUT"]
