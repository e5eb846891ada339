"""tablesort: click-to-sort columns for tabular widgets.

``tablesort.services`` holds the Qt-free core; ``tablesort.widgets`` adapts it
to PyQt6's ``QTableWidget``.
"""

__version__ = "0.1.0"
