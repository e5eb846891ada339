"""Sorting service layer.

Responsibilities:
 - Comparators (string, integer, decimal, date) with fail-soft/fail-fast parsing
 - Per-column sort state and the ``SortCoordinator``
 - Host adapter contract (``TableAdapter``) and the ``EventBus``

Nothing here imports Qt; the PyQt6 adapter lives in ``tablesort.widgets``.
"""

from .comparators import (  # noqa: F401
    ColumnComparator,
    ComparisonFailure,
    DateComparator,
    DecimalComparator,
    IntegerComparator,
    ParsingComparator,
    StringComparator,
)
from .column_sort_state import ColumnSortState  # noqa: F401
from .errors import (  # noqa: F401
    ComparisonError,
    InvalidColumnError,
    NoActiveSortError,
    TableSortError,
)
from .event_bus import EventBus, SortEvent  # noqa: F401
from .sort_coordinator import SortCoordinator, SortReport  # noqa: F401
from .table_adapter import ColumnRef, RowAttributes, TableAdapter  # noqa: F401
from tablesort.models import SortDirection  # noqa: F401

__all__ = [
    "ColumnComparator",
    "ComparisonFailure",
    "DateComparator",
    "DecimalComparator",
    "IntegerComparator",
    "ParsingComparator",
    "StringComparator",
    "ColumnSortState",
    "ComparisonError",
    "InvalidColumnError",
    "NoActiveSortError",
    "TableSortError",
    "EventBus",
    "SortEvent",
    "SortCoordinator",
    "SortReport",
    "SortDirection",
    "ColumnRef",
    "RowAttributes",
    "TableAdapter",
]
