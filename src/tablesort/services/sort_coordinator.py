"""Sort coordinator: click-to-sort for any table behind a ``TableAdapter``.

Owns one ``ColumnSortState`` per column, remembers the active sort column and
reorders the host table on request while carrying every row attribute and
the selection across.

Typical wiring::

    coordinator = SortCoordinator(QtTableAdapter(table))
    coordinator.set_comparator(2, IntegerComparator(2))
    # header clicks now toggle-sort; programmatic use:
    coordinator.sort_by_column(0, SortDirection.ASCENDING)
    coordinator.resort()  # after rows changed

Reordering is a single synchronous pass on the calling (UI) thread. Redraw is
suspended for the duration of the rebuild and always resumed, even when a
fail-fast comparator or the adapter raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cmp_to_key
from time import perf_counter
from typing import Any, Callable, List, Optional, Sequence, Tuple

from tablesort.config.settings import RebuildStrategy, SelectionTracking, SortSettings
from tablesort.models import SortDirection

from .column_sort_state import ColumnSortState
from .comparators import ColumnComparator, ComparisonFailure, StringComparator
from .errors import InvalidColumnError, NoActiveSortError
from .event_bus import EventBus, SortEvent
from .table_adapter import TableAdapter, supports_reorder

__all__ = ["SortReport", "SortCoordinator"]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SortReport:
    column: int
    direction: SortDirection
    row_count: int
    failures: Tuple[ComparisonFailure, ...] = field(default_factory=tuple)
    elapsed_ms: float = 0.0

    @property
    def clean(self) -> bool:
        return not self.failures


class SortCoordinator:
    def __init__(
        self,
        table: TableAdapter,
        *,
        settings: SortSettings | None = None,
        event_bus: EventBus | None = None,
        hook_headers: bool = True,
    ) -> None:
        self._table = table
        self._settings = settings or SortSettings.instance
        self._event_bus = event_bus
        self._states: List[ColumnSortState] = []
        self._active: Optional[ColumnSortState] = None
        self._last_report: Optional[SortReport] = None
        self._unhook: Optional[Callable[[], None]] = None
        self._warned_no_reorder = False
        self._hook_columns(hook_headers)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------
    def _hook_columns(self, hook_headers: bool) -> None:
        # Column set is read once; columns added later are not sortable.
        for index, column in enumerate(self._table.columns()):
            self._states.append(
                ColumnSortState(
                    column=column,
                    index=index,
                    direction=self._settings.initial_direction,
                    comparator=StringComparator(index),
                )
            )
        if hook_headers:
            self._unhook = self._table.on_header_activated(self._on_header_activated)

    def _on_header_activated(self, index: int) -> None:
        if not 0 <= index < len(self._states):
            _log.warning("Ignoring header activation for unknown column %s", index)
            return
        self.sort_by_column(index)

    def disconnect(self) -> None:
        """Stop reacting to header activations."""
        if self._unhook is not None:
            self._unhook()
            self._unhook = None

    # ------------------------------------------------------------------
    # Column state
    # ------------------------------------------------------------------
    def _state_at(self, index: int) -> ColumnSortState:
        if not isinstance(index, int) or not 0 <= index < len(self._states):
            raise InvalidColumnError(index, len(self._states))
        return self._states[index]

    def state(self, index: int) -> ColumnSortState:
        return self._state_at(index)

    def states(self) -> Sequence[ColumnSortState]:
        return tuple(self._states)

    @property
    def column_count(self) -> int:
        return len(self._states)

    def comparator(self, index: int) -> ColumnComparator:
        return self._state_at(index).comparator

    def set_comparator(self, index: int, comparator: ColumnComparator) -> None:
        """Bind a different comparator to a column.

        Takes effect on the next sort of that column; nothing is re-sorted.
        """
        self._state_at(index).comparator = comparator
        self._publish(SortEvent.COMPARATOR_CHANGED, {"column": index, "comparator": comparator})

    # ------------------------------------------------------------------
    # Sorting
    # ------------------------------------------------------------------
    def sort_by_column(self, index: int, direction: SortDirection | None = None) -> SortReport:
        """Sort the table by one column.

        With ``direction=None`` the column's stored direction is flipped
        (header click behaviour); otherwise the given direction is used and
        stored.
        """
        state = self._state_at(index)
        if direction is None:
            direction = state.direction.toggled()
        _log.debug(
            "Sorting by column %s, direction %s (%s)",
            index,
            direction.value,
            type(state.comparator).__name__,
        )
        self._publish(SortEvent.SORT_REQUESTED, {"column": index, "direction": direction})

        self._active = state
        state.direction = direction

        started = perf_counter()
        table = self._table
        rows = list(table.rows())
        selected = table.selection_index()
        failures: List[ComparisonFailure] = []
        comparator = state.comparator

        def _cmp(i: int, j: int) -> int:
            return comparator.compare(table, rows[i], rows[j], direction, failures.append)

        # sorted() is stable: tied (including unparseable) rows keep their order
        order = sorted(range(len(rows)), key=cmp_to_key(_cmp))

        table.set_redraw(False)
        try:
            table.set_sort_column(state.column)
            table.set_sort_direction(direction)
            self._rebuild(rows, order)
            self._restore_selection(selected, order)
        finally:
            table.set_redraw(True)

        report = SortReport(
            column=index,
            direction=direction,
            row_count=len(rows),
            failures=tuple(failures),
            elapsed_ms=(perf_counter() - started) * 1000.0,
        )
        if failures:
            _log.info(
                "Sorted %d rows on column %s with %d malformed comparisons",
                report.row_count,
                index,
                len(failures),
            )
        self._last_report = report
        self._publish(SortEvent.SORT_APPLIED, report)
        return report

    def _rebuild(self, rows: Sequence[Any], order: Sequence[int]) -> None:
        table = self._table
        if self._settings.rebuild_strategy is RebuildStrategy.PERMUTE:
            if supports_reorder(table):
                table.reorder(list(order))  # type: ignore[attr-defined]
                return
            if not self._warned_no_reorder:
                _log.warning(
                    "%s cannot reorder rows in place; copying rows instead",
                    type(table).__name__,
                )
                self._warned_no_reorder = True
        # Snapshot first: appended rows must not alias the originals.
        snapshots = [table.attributes(rows[i]) for i in order]
        for attrs in snapshots:
            table.apply_attributes(table.append_row(), attrs)
        if rows:
            table.remove_rows(0, len(rows) - 1)

    def _restore_selection(self, selected: Optional[int], order: Sequence[int]) -> None:
        if selected is None:
            return
        if self._settings.selection_tracking is SelectionTracking.ROW:
            self._table.select(list(order).index(selected))
        else:
            self._table.select(selected)

    def resort(self) -> SortReport:
        """Sort again by the active column in its stored direction."""
        state = self._require_active()
        return self.sort_by_column(state.index, state.direction)

    # ------------------------------------------------------------------
    # Current sort
    # ------------------------------------------------------------------
    def _require_active(self) -> ColumnSortState:
        if self._active is None:
            raise NoActiveSortError("No sort has been performed yet")
        return self._active

    @property
    def is_sorted(self) -> bool:
        return self._active is not None

    def current_sort_column_index(self) -> int:
        return self._require_active().index

    def current_direction(self) -> SortDirection:
        return self._require_active().direction

    def current_reverse_bit(self) -> bool:
        return self._require_active().direction.reverse

    @property
    def last_report(self) -> Optional[SortReport]:
        return self._last_report

    @property
    def table(self) -> TableAdapter:
        return self._table

    @property
    def settings(self) -> SortSettings:
        return self._settings

    # ------------------------------------------------------------------
    def _publish(self, name: SortEvent, payload: Any) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(name, payload)
