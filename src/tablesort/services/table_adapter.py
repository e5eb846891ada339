"""Host widget adapter contract.

The sort coordinator never touches a concrete widget. Everything it needs
(rows, cell text, per-row attributes, selection, redraw suspension, the sort
indicator and header clicks) goes through an object satisfying
``TableAdapter``. ``QtTableAdapter`` in ``tablesort.widgets`` is the PyQt6
implementation; tests use an in-memory one.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Optional, Protocol, Sequence, runtime_checkable

from tablesort.models import ColumnRef, RowAttributes, SortDirection

__all__ = [
    "ColumnRef",
    "RowAttributes",
    "HeaderHandler",
    "TableAdapter",
    "supports_reorder",
]

HeaderHandler = Callable[[int], None]


@runtime_checkable
class TableAdapter(Protocol):
    def columns(self) -> Sequence[Hashable]: ...

    def rows(self) -> Sequence[Any]: ...

    def selection_index(self) -> Optional[int]: ...

    def select(self, index: int) -> None: ...

    def text(self, row: Any, column: int) -> str: ...

    def attributes(self, row: Any) -> RowAttributes: ...

    def append_row(self) -> Any: ...

    def apply_attributes(self, row: Any, attrs: RowAttributes) -> None: ...

    def remove_rows(self, start: int, end_inclusive: int) -> None: ...

    def set_redraw(self, enabled: bool) -> None: ...

    def set_sort_column(self, column: Hashable) -> None: ...

    def set_sort_direction(self, direction: SortDirection) -> None: ...

    def on_header_activated(self, handler: HeaderHandler) -> Callable[[], None]: ...


def supports_reorder(table: Any) -> bool:
    """True if the adapter can apply an index permutation in place.

    ``reorder(order)`` receives the original row positions in their new order.
    """
    return callable(getattr(table, "reorder", None))
