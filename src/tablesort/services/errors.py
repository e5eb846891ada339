"""Exception hierarchy for table sorting."""

from __future__ import annotations

__all__ = [
    "TableSortError",
    "InvalidColumnError",
    "NoActiveSortError",
    "ComparisonError",
]


class TableSortError(Exception):
    """Base class for all sorting errors."""


class InvalidColumnError(TableSortError, IndexError):
    """Raised when a column index is outside the coordinator's column set."""

    def __init__(self, index: int, column_count: int) -> None:
        super().__init__(f"Column index {index} out of range (0..{column_count - 1})")
        self.index = index
        self.column_count = column_count


class NoActiveSortError(TableSortError, RuntimeError):
    """Raised when resort or a current-sort accessor runs before any sort."""


class ComparisonError(TableSortError, ValueError):
    """Raised by parsing comparators under the fail-fast policy."""

    def __init__(self, column: int, left: str, right: str, message: str) -> None:
        super().__init__(message)
        self.column = column
        self.left = left
        self.right = right
