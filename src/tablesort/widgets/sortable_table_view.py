"""SortableTableView

Small composed widget: a title label above a ``QTableWidget`` whose header
clicks sort the rows through a ``SortCoordinator``. Callers fill it with
plain text rows and may attach a payload object to each row.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QHeaderView,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from tablesort.config.settings import SortSettings
from tablesort.models import SortDirection
from tablesort.services.comparators import ColumnComparator
from tablesort.services.event_bus import EventBus
from tablesort.services.sort_coordinator import SortCoordinator, SortReport

from .qt_table_adapter import QtTableAdapter

__all__ = ["SortableTableView"]


class SortableTableView(QWidget):
    def __init__(
        self,
        headers: Sequence[str],
        parent: Optional[QWidget] = None,
        *,
        title: str = "",
        checkable: bool = False,
        settings: SortSettings | None = None,
        event_bus: EventBus | None = None,
    ):
        super().__init__(parent)
        self._headers = list(headers)
        self._checkable = checkable
        self._build_ui(title)
        self.adapter = QtTableAdapter(self.table, checkable=checkable)
        # Columns must exist before the coordinator reads them.
        self.coordinator = SortCoordinator(self.adapter, settings=settings, event_bus=event_bus)

    def _build_ui(self, title: str) -> None:
        root = QVBoxLayout(self)
        self.title_label = QLabel(title)
        self.title_label.setObjectName("viewTitleLabel")
        self.title_label.setVisible(bool(title))
        root.addWidget(self.title_label)
        self.table = QTableWidget(0, len(self._headers))
        self.table.setHorizontalHeaderLabels(self._headers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.setStretchLastSection(True)
        root.addWidget(self.table)

    def set_rows(
        self, rows: Sequence[Sequence[str]], payloads: Optional[Sequence[Any]] = None
    ) -> None:
        """Replace the table content.

        ``payloads`` (same length as ``rows``) is attached to each row's first
        cell under ``Qt.ItemDataRole.UserRole``.
        """
        if payloads is not None and len(payloads) != len(rows):
            raise ValueError("payloads must match rows in length")
        self.table.setRowCount(len(rows))
        for r, values in enumerate(rows):
            for c in range(len(self._headers)):
                text = str(values[c]) if c < len(values) else ""
                self.table.setItem(r, c, QTableWidgetItem(text))
            anchor = self.table.item(r, 0)
            if self._checkable:
                anchor.setCheckState(Qt.CheckState.Unchecked)
            if payloads is not None:
                anchor.setData(Qt.ItemDataRole.UserRole, payloads[r])

    def set_comparator(self, column: int, comparator: ColumnComparator) -> None:
        self.coordinator.set_comparator(column, comparator)

    def sort_by_column(self, column: int, direction: SortDirection | None = None) -> SortReport:
        return self.coordinator.sort_by_column(column, direction)

    def resort(self) -> SortReport:
        return self.coordinator.resort()

    def column_texts(self, column: int) -> list[str]:
        return [self.adapter.text(r, column) for r in range(self.table.rowCount())]

    def payloads(self) -> list[Any]:
        out = []
        for r in range(self.table.rowCount()):
            anchor = self.table.item(r, 0)
            out.append(anchor.data(Qt.ItemDataRole.UserRole) if anchor else None)
        return out
