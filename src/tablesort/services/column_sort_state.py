"""Per-column sort bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

from tablesort.models import SortDirection

from .comparators import ColumnComparator

__all__ = ["ColumnSortState"]


@dataclass
class ColumnSortState:
    """Binds one column to its stored direction and active comparator.

    Created once per column by the coordinator and kept for its lifetime;
    ``direction`` changes whenever the column is sorted and ``comparator``
    whenever a caller installs a different one.
    """

    column: Hashable
    index: int
    direction: SortDirection
    comparator: ColumnComparator
