"""Value types shared by the sorting services and the widget adapters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

__all__ = ["SortDirection", "ColumnRef", "RowAttributes"]


class SortDirection(str, Enum):  # str subclass keeps event payloads JSON friendly
    ASCENDING = "ascending"
    DESCENDING = "descending"

    @property
    def reverse(self) -> bool:
        """Legacy "reverse bit": True when sorting descending."""
        return self is SortDirection.DESCENDING

    @classmethod
    def from_reverse(cls, reverse: bool) -> "SortDirection":
        return cls.DESCENDING if reverse else cls.ASCENDING

    def toggled(self) -> "SortDirection":
        return SortDirection.from_reverse(not self.reverse)

    def apply(self, result: int) -> int:
        # Final sign flip; operands are never swapped or re-parsed.
        return -result if self.reverse else result


@dataclass(frozen=True)
class ColumnRef:
    """Column identity for hosts without native column objects."""

    index: int
    label: str = ""


@dataclass(frozen=True)
class RowAttributes:
    """Snapshot of everything a rebuilt row must carry over."""

    texts: Tuple[str, ...]
    background: Any = None
    foreground: Any = None
    font: Any = None
    checked: bool = False
    grayed: bool = False
    data: Any = None
