"""PyQt6 ``QTableWidget`` adapter for the sort coordinator.

Row handles are row indices. During a copy rebuild new rows are only
appended, so the original indices stay valid until the old range is removed.

Row-level attributes map onto the items as follows:
 - text: one ``QTableWidgetItem`` per cell
 - background / foreground / font: raw role data of the anchor item
   (column 0), written to every cell of the rebuilt row only when set
 - checked / grayed: anchor check state (``Checked`` / ``PartiallyChecked``)
 - data: anchor ``Qt.ItemDataRole.UserRole``

``reorder`` moves the existing items with ``takeItem``/``setItem`` instead,
so every per-cell property (tooltips, flags, alignment) survives untouched.
Use ``RebuildStrategy.PERMUTE`` when columns 1..n carry their own styling;
the copy rebuild only keeps the row-level styling of the anchor.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QBrush, QColor, QFont
from PyQt6.QtWidgets import QTableWidget, QTableWidgetItem

from tablesort.models import ColumnRef, RowAttributes, SortDirection
from tablesort.services.table_adapter import HeaderHandler

__all__ = ["QtTableAdapter"]

_log = logging.getLogger(__name__)

_ANCHOR = 0
_STYLE_ROLES = (
    ("background", Qt.ItemDataRole.BackgroundRole),
    ("foreground", Qt.ItemDataRole.ForegroundRole),
    ("font", Qt.ItemDataRole.FontRole),
)


def _copied(value):
    # Fresh Qt value objects so rebuilt rows never share the snapshot's.
    for kind in (QBrush, QColor, QFont):
        if isinstance(value, kind):
            return kind(value)
    return value


def _order_for(direction: SortDirection) -> Qt.SortOrder:
    if direction is SortDirection.DESCENDING:
        return Qt.SortOrder.DescendingOrder
    return Qt.SortOrder.AscendingOrder


class QtTableAdapter:
    """Exposes a ``QTableWidget`` through the ``TableAdapter`` protocol.

    Args:
        table: The widget to sort. Its built-in sorting is switched off; the
            header sort indicator is driven by the coordinator instead.
        checkable: When True every rebuilt row gets a check box on its anchor
            item. When False only rows that were checked or grayed get one.
    """

    def __init__(self, table: QTableWidget, *, checkable: bool = False) -> None:
        self._table = table
        self._checkable = checkable
        self._sort_column = 0
        if table.isSortingEnabled():
            _log.debug("Disabling built-in QTableWidget sorting")
            table.setSortingEnabled(False)

    @property
    def widget(self) -> QTableWidget:
        return self._table

    # Structure ---------------------------------------------------------
    def columns(self) -> List[ColumnRef]:
        refs: List[ColumnRef] = []
        for c in range(self._table.columnCount()):
            header = self._table.horizontalHeaderItem(c)
            refs.append(ColumnRef(c, header.text() if header else str(c + 1)))
        return refs

    def rows(self) -> List[int]:
        return list(range(self._table.rowCount()))

    def text(self, row: int, column: int) -> str:
        item = self._table.item(row, column)
        return item.text() if item is not None else ""

    # Selection ---------------------------------------------------------
    def selection_index(self) -> Optional[int]:
        selected = sorted({idx.row() for idx in self._table.selectionModel().selectedIndexes()})
        return selected[0] if selected else None

    def select(self, index: int) -> None:
        self._table.clearSelection()
        self._table.selectRow(index)

    # Row attributes ----------------------------------------------------
    def attributes(self, row: int) -> RowAttributes:
        texts = tuple(self.text(row, c) for c in range(self._table.columnCount()))
        anchor = self._table.item(row, _ANCHOR)
        if anchor is None:
            return RowAttributes(texts=texts)
        state = anchor.checkState()
        return RowAttributes(
            texts=texts,
            background=_copied(anchor.data(Qt.ItemDataRole.BackgroundRole)),
            foreground=_copied(anchor.data(Qt.ItemDataRole.ForegroundRole)),
            font=_copied(anchor.data(Qt.ItemDataRole.FontRole)),
            checked=state == Qt.CheckState.Checked,
            grayed=state == Qt.CheckState.PartiallyChecked,
            data=anchor.data(Qt.ItemDataRole.UserRole),
        )

    def append_row(self) -> int:
        row = self._table.rowCount()
        self._table.insertRow(row)
        return row

    def apply_attributes(self, row: int, attrs: RowAttributes) -> None:
        for column, text in enumerate(attrs.texts):
            item = QTableWidgetItem(text)
            for name, role in _STYLE_ROLES:
                value = getattr(attrs, name)
                if value is not None:
                    item.setData(role, _copied(value))
            self._table.setItem(row, column, item)
        anchor = self._table.item(row, _ANCHOR)
        if anchor is None:
            return
        if attrs.grayed:
            anchor.setCheckState(Qt.CheckState.PartiallyChecked)
        elif attrs.checked:
            anchor.setCheckState(Qt.CheckState.Checked)
        elif self._checkable:
            anchor.setCheckState(Qt.CheckState.Unchecked)
        if attrs.data is not None:
            anchor.setData(Qt.ItemDataRole.UserRole, attrs.data)

    def remove_rows(self, start: int, end_inclusive: int) -> None:
        self._table.model().removeRows(start, end_inclusive - start + 1)

    def reorder(self, order: List[int]) -> None:
        table = self._table
        column_count = table.columnCount()
        taken = [[table.takeItem(r, c) for c in range(column_count)] for r in order]
        for new_row, items in enumerate(taken):
            for column, item in enumerate(items):
                if item is not None:
                    table.setItem(new_row, column, item)

    # Display -----------------------------------------------------------
    def set_redraw(self, enabled: bool) -> None:
        self._table.setUpdatesEnabled(enabled)

    def set_sort_column(self, column: ColumnRef) -> None:
        header = self._table.horizontalHeader()
        self._sort_column = column.index
        header.setSortIndicatorShown(True)
        header.setSortIndicator(self._sort_column, header.sortIndicatorOrder())

    def set_sort_direction(self, direction: SortDirection) -> None:
        self._table.horizontalHeader().setSortIndicator(self._sort_column, _order_for(direction))

    def sort_indicator(self) -> tuple[int, SortDirection]:
        header = self._table.horizontalHeader()
        descending = header.sortIndicatorOrder() == Qt.SortOrder.DescendingOrder
        return header.sortIndicatorSection(), SortDirection.from_reverse(descending)

    def on_header_activated(self, handler: HeaderHandler) -> Callable[[], None]:
        signal = self._table.horizontalHeader().sectionClicked
        signal.connect(handler)  # type: ignore[arg-type]

        def _disconnect() -> None:
            signal.disconnect(handler)  # type: ignore[arg-type]

        return _disconnect
