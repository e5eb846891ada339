from PyQt6.QtCore import Qt
from PyQt6.QtGui import QBrush, QColor, QFont
from PyQt6.QtWidgets import QAbstractItemView, QTableWidget, QTableWidgetItem

from tablesort.config.settings import RebuildStrategy, SelectionTracking, SortSettings
from tablesort.services.comparators import IntegerComparator
from tablesort.services.sort_coordinator import SortCoordinator
from tablesort.models import SortDirection
from tablesort.services.table_adapter import ColumnRef, TableAdapter
from tablesort.widgets.qt_table_adapter import QtTableAdapter


def _table(qtbot, rows, headers=("Name", "Count")):
    table = QTableWidget(len(rows), len(headers))
    qtbot.addWidget(table)
    table.setHorizontalHeaderLabels(list(headers))
    table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
    for r, values in enumerate(rows):
        for c, text in enumerate(values):
            table.setItem(r, c, QTableWidgetItem(text))
        table.item(r, 0).setData(Qt.ItemDataRole.UserRole, f"p{r}")
    return table


def _column(table, c):
    return [table.item(r, c).text() for r in range(table.rowCount())]


def test_adapter_satisfies_protocol(qtbot):
    adapter = QtTableAdapter(_table(qtbot, [("a", "1")]))
    assert isinstance(adapter, TableAdapter)
    assert adapter.columns() == [ColumnRef(0, "Name"), ColumnRef(1, "Count")]
    assert adapter.rows() == [0]


def test_builtin_sorting_disabled(qtbot):
    table = _table(qtbot, [("a", "1")])
    table.setSortingEnabled(True)
    QtTableAdapter(table)
    assert not table.isSortingEnabled()


def test_missing_item_reads_as_empty_text(qtbot):
    table = QTableWidget(1, 2)
    qtbot.addWidget(table)
    adapter = QtTableAdapter(table)
    assert adapter.text(0, 1) == ""
    assert adapter.attributes(0).texts == ("", "")


def test_scenario_sorts_widget(qtbot):
    table = _table(qtbot, [("b", "2"), ("a", "10"), ("c", "1")])
    coord = SortCoordinator(QtTableAdapter(table))
    coord.sort_by_column(0, SortDirection.ASCENDING)
    assert _column(table, 0) == ["a", "b", "c"]
    coord.set_comparator(1, IntegerComparator(1))
    coord.sort_by_column(1, SortDirection.ASCENDING)
    assert _column(table, 1) == ["1", "2", "10"]
    assert table.rowCount() == 3


def test_row_attributes_survive_copy_rebuild(qtbot):
    table = _table(qtbot, [("b", "2"), ("a", "1")])
    first = table.item(0, 0)
    bold = QFont()
    bold.setBold(True)
    first.setBackground(QBrush(QColor("yellow")))
    first.setForeground(QBrush(QColor("blue")))
    first.setFont(bold)
    first.setCheckState(Qt.CheckState.Checked)
    table.item(1, 0).setCheckState(Qt.CheckState.PartiallyChecked)
    adapter = QtTableAdapter(table)
    before = {adapter.text(r, 0): adapter.attributes(r) for r in adapter.rows()}

    SortCoordinator(adapter).sort_by_column(0, SortDirection.ASCENDING)

    after = {adapter.text(r, 0): adapter.attributes(r) for r in adapter.rows()}
    assert after == before
    assert after["a"].grayed and not after["a"].checked
    assert after["b"].checked
    assert after["b"].data == "p0"
    # row styling is applied across the whole rebuilt row
    assert table.item(1, 1).background().color() == QColor("yellow")


def test_unchecked_rows_get_no_checkbox_unless_checkable(qtbot):
    table = _table(qtbot, [("b", "2"), ("a", "1")])
    SortCoordinator(QtTableAdapter(table)).sort_by_column(0, SortDirection.ASCENDING)
    assert table.item(0, 0).data(Qt.ItemDataRole.CheckStateRole) is None

    table2 = _table(qtbot, [("b", "2"), ("a", "1")])
    SortCoordinator(QtTableAdapter(table2, checkable=True)).sort_by_column(
        0, SortDirection.ASCENDING
    )
    assert table2.item(0, 0).checkState() == Qt.CheckState.Unchecked
    assert table2.item(0, 0).data(Qt.ItemDataRole.CheckStateRole) is not None


def test_selection_by_position(qtbot):
    table = _table(qtbot, [("d", "4"), ("c", "3"), ("b", "2"), ("a", "1")])
    adapter = QtTableAdapter(table)
    adapter.select(3)
    assert adapter.selection_index() == 3
    SortCoordinator(adapter).sort_by_column(0, SortDirection.ASCENDING)
    assert adapter.selection_index() == 3
    assert table.item(3, 0).text() == "d"


def test_selection_by_row(qtbot):
    table = _table(qtbot, [("d", "4"), ("c", "3"), ("b", "2"), ("a", "1")])
    adapter = QtTableAdapter(table)
    adapter.select(3)
    settings = SortSettings(selection_tracking=SelectionTracking.ROW)
    SortCoordinator(adapter, settings=settings).sort_by_column(0, SortDirection.ASCENDING)
    assert adapter.selection_index() == 0
    assert table.item(0, 0).text() == "a"


def test_no_selection(qtbot):
    table = _table(qtbot, [("b", "2"), ("a", "1")])
    adapter = QtTableAdapter(table)
    assert adapter.selection_index() is None
    SortCoordinator(adapter).sort_by_column(0, SortDirection.ASCENDING)
    assert adapter.selection_index() is None


def test_sort_indicator_tracks_direction(qtbot):
    table = _table(qtbot, [("b", "2"), ("a", "1")])
    adapter = QtTableAdapter(table)
    coord = SortCoordinator(adapter)
    coord.sort_by_column(1, SortDirection.DESCENDING)
    assert table.horizontalHeader().isSortIndicatorShown()
    assert adapter.sort_indicator() == (1, SortDirection.DESCENDING)
    coord.sort_by_column(0, SortDirection.ASCENDING)
    assert adapter.sort_indicator() == (0, SortDirection.ASCENDING)


def test_redraw_restored(qtbot):
    table = _table(qtbot, [("b", "2"), ("a", "1")])
    SortCoordinator(QtTableAdapter(table)).sort_by_column(0, SortDirection.ASCENDING)
    assert table.updatesEnabled()


def test_header_click_toggles(qtbot):
    table = _table(qtbot, [("b", "2"), ("a", "1"), ("c", "3")])
    coord = SortCoordinator(QtTableAdapter(table))
    table.horizontalHeader().sectionClicked.emit(0)
    assert _column(table, 0) == ["c", "b", "a"]
    table.horizontalHeader().sectionClicked.emit(0)
    assert _column(table, 0) == ["a", "b", "c"]
    coord.disconnect()
    table.horizontalHeader().sectionClicked.emit(0)
    assert _column(table, 0) == ["a", "b", "c"]


def test_permute_moves_items_in_place(qtbot):
    table = _table(qtbot, [("b", "2"), ("a", "1"), ("c", "3")])
    table.item(0, 1).setToolTip("two")
    moved = table.item(0, 1)
    settings = SortSettings(rebuild_strategy=RebuildStrategy.PERMUTE)
    SortCoordinator(QtTableAdapter(table), settings=settings).sort_by_column(
        0, SortDirection.ASCENDING
    )
    assert _column(table, 0) == ["a", "b", "c"]
    assert table.item(1, 1) is moved
    assert table.item(1, 1).toolTip() == "two"
    assert table.rowCount() == 3


def test_unset_style_roles_stay_unset_after_copy_rebuild(qtbot):
    table = _table(qtbot, [("b", "2"), ("a", "1")])
    roles = (
        Qt.ItemDataRole.FontRole,
        Qt.ItemDataRole.BackgroundRole,
        Qt.ItemDataRole.ForegroundRole,
    )
    SortCoordinator(QtTableAdapter(table)).sort_by_column(0, SortDirection.ASCENDING)
    assert _column(table, 0) == ["a", "b"]
    for r in range(2):
        for c in range(2):
            assert [table.item(r, c).data(role) for role in roles] == [None, None, None]


def test_remove_rows_drops_inclusive_range(qtbot):
    table = _table(qtbot, [("a", "1"), ("b", "2"), ("c", "3"), ("d", "4")])
    QtTableAdapter(table).remove_rows(1, 2)
    assert _column(table, 0) == ["a", "d"]
