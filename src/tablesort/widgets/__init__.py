"""PyQt6 integration: ``QTableWidget`` adapter and a ready-made sortable view."""

from .qt_table_adapter import QtTableAdapter  # noqa: F401
from .sortable_table_view import SortableTableView  # noqa: F401

__all__ = ["QtTableAdapter", "SortableTableView"]
