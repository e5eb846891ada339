"""Column comparators.

A comparator orders two rows of a table by a single column. Comparators are
immutable values bound to a column index (and, for dates, a format); the sort
direction is supplied on every call and applied as the final step, so turning
a column around never re-parses its cells.

Parsing comparators (integer, decimal, date) share one failure policy:

FAIL_SOFT
    The failure is logged with both raw cell texts and the pair compares as
    equal. A stable sort then leaves the malformed row where it was relative
    to the rows it tied with.
FAIL_FAST
    ``ComparisonError`` is raised and the sort aborts.

Custom comparators subclass ``ColumnComparator`` (implement ``compare_text``)
or ``ParsingComparator`` (implement ``parse``).
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, ClassVar, Optional, Tuple

from tablesort.config.settings import ParseFailurePolicy, SortSettings
from tablesort.models import SortDirection

from .errors import ComparisonError

__all__ = [
    "ComparisonFailure",
    "FailureSink",
    "ColumnComparator",
    "ParsingComparator",
    "StringComparator",
    "IntegerComparator",
    "DecimalComparator",
    "DateComparator",
]

_log = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


@dataclass(frozen=True)
class ComparisonFailure:
    column: int
    left: str
    right: str
    error: str


FailureSink = Callable[[ComparisonFailure], None]


def _sign(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


@dataclass(frozen=True)
class ColumnComparator(ABC):
    """Base comparator reading cell text from one column."""

    column: int

    def compare(
        self,
        table: Any,
        row_a: Any,
        row_b: Any,
        direction: SortDirection = SortDirection.ASCENDING,
        on_failure: Optional[FailureSink] = None,
    ) -> int:
        a = table.text(row_a, self.column)
        b = table.text(row_b, self.column)
        return direction.apply(self.compare_text(a, b, on_failure=on_failure))

    @abstractmethod
    def compare_text(self, a: str, b: str, *, on_failure: Optional[FailureSink] = None) -> int:
        """Three-way compare two raw cell texts, ascending."""


@dataclass(frozen=True)
class StringComparator(ColumnComparator):
    """Plain lexicographic (code point) ordering of the raw cell text."""

    def compare_text(self, a: str, b: str, *, on_failure: Optional[FailureSink] = None) -> int:
        return _sign(a, b)


@dataclass(frozen=True)
class ParsingComparator(ColumnComparator):
    """Comparator that converts both texts before comparing them.

    ``policy=None`` defers to ``SortSettings.instance`` at compare time.
    """

    policy: Optional[ParseFailurePolicy] = None

    kind: ClassVar[str] = "value"
    parse_errors: ClassVar[Tuple[type, ...]] = (ValueError, TypeError, ArithmeticError)

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Convert cell text to a comparable value; raise on malformed input."""

    def effective_policy(self) -> ParseFailurePolicy:
        return self.policy or SortSettings.instance.parse_failure_policy

    def compare_text(self, a: str, b: str, *, on_failure: Optional[FailureSink] = None) -> int:
        try:
            return _sign(self.parse(a), self.parse(b))
        except self.parse_errors as exc:
            message = (
                f"Attempted to use {self.kind} comparison while sorting column "
                f"{self.column} with values: {a!r}, {b!r}"
            )
            if self.effective_policy() is ParseFailurePolicy.FAIL_FAST:
                raise ComparisonError(self.column, a, b, message) from exc
            _log.error(message, exc_info=exc)
            if on_failure is not None:
                on_failure(ComparisonFailure(self.column, a, b, f"{type(exc).__name__}: {exc}"))
            return 0


@dataclass(frozen=True)
class IntegerComparator(ParsingComparator):
    kind: ClassVar[str] = "integer"

    def parse(self, text: str) -> int:
        if not _INTEGER_RE.fullmatch(text):
            raise ValueError(f"not an integer: {text!r}")
        return int(text)


@dataclass(frozen=True)
class DecimalComparator(ParsingComparator):
    """Arbitrary precision ordering for values floats would round."""

    kind: ClassVar[str] = "decimal"

    def parse(self, text: str) -> Decimal:
        # ASCII digits only: no underscores, whitespace, NaN or Infinity
        if not _DECIMAL_RE.fullmatch(text):
            raise ValueError(f"not a decimal: {text!r}")
        return Decimal(text)


@dataclass(frozen=True)
class DateComparator(ParsingComparator):
    """Orders cells holding dates in one ``strptime`` format.

    ``date_format=None`` uses ``SortSettings.instance.date_format``.
    """

    date_format: Optional[str] = None

    kind: ClassVar[str] = "date"
    parse_errors: ClassVar[Tuple[type, ...]] = (
        ValueError,
        TypeError,
        ArithmeticError,
        OverflowError,
    )

    def effective_format(self) -> str:
        return self.date_format or SortSettings.instance.date_format

    def parse(self, text: str) -> datetime:
        return datetime.strptime(text, self.effective_format())
