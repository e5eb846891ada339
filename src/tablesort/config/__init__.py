"""Configuration for table sorting (settings singleton and defaults)."""

from .settings import (  # noqa: F401
    DEFAULT_DATE_FORMAT,
    ParseFailurePolicy,
    RebuildStrategy,
    SelectionTracking,
    SortSettings,
)

__all__ = [
    "DEFAULT_DATE_FORMAT",
    "ParseFailurePolicy",
    "RebuildStrategy",
    "SelectionTracking",
    "SortSettings",
]
