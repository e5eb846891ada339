"""Runtime settings for table sorting.

Centralizes the behaviour toggles of the sort coordinator and the parsing
comparators. A module-level singleton (``SortSettings.instance``) provides the
defaults; coordinators accept an explicit instance so tests and embedding
applications can run side by side with different policies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Final

from tablesort.models import SortDirection

__all__ = [
    "DEFAULT_DATE_FORMAT",
    "ParseFailurePolicy",
    "SelectionTracking",
    "RebuildStrategy",
    "SortSettings",
]

DEFAULT_DATE_FORMAT: Final = "%Y-%m-%d"


class ParseFailurePolicy(str, Enum):
    FAIL_SOFT = "fail_soft"  # log, treat the pair as equal, keep sorting
    FAIL_FAST = "fail_fast"  # raise ComparisonError


class SelectionTracking(str, Enum):
    POSITION = "position"  # reselect the same row index after rebuilding
    ROW = "row"  # reselect wherever the previously selected row ended up


class RebuildStrategy(str, Enum):
    COPY = "copy"  # append copies in sorted order, then drop the originals
    PERMUTE = "permute"  # in-place permutation when the adapter supports it


@dataclass
class SortSettings:
    """Sorting behaviour toggles.

    Attributes:
        parse_failure_policy: What numeric/decimal/date comparators do with a
            cell they cannot parse. Default FAIL_SOFT.
        selection_tracking: Whether the selection follows the row index or the
            row itself across a sort. Default POSITION.
        rebuild_strategy: How the host widget is reordered. Default COPY.
        date_format: ``strptime`` format used by date comparators created
            without an explicit format.
        initial_direction: Direction stored on every column before its first
            sort. Toggling sorts flip it, so the first header click on a
            column sorts DESCENDING with the default.
    """

    instance: ClassVar["SortSettings"]

    parse_failure_policy: ParseFailurePolicy = ParseFailurePolicy.FAIL_SOFT
    selection_tracking: SelectionTracking = SelectionTracking.POSITION
    rebuild_strategy: RebuildStrategy = RebuildStrategy.COPY
    date_format: str = DEFAULT_DATE_FORMAT
    initial_direction: SortDirection = SortDirection.ASCENDING


SortSettings.instance = SortSettings()
