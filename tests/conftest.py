# Test configuration: headless Qt plus a fallback 'qtbot' fixture when pytest-qt
# is not installed. If pytest-qt is present its fixture wins.

import contextlib
import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from tablesort.config.settings import SortSettings  # noqa: E402

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except Exception:  # pragma: no cover
    try:
        from PyQt6.QtWidgets import QApplication
    except Exception:  # pragma: no cover
        QApplication = None  # type: ignore

    @pytest.fixture
    def qtbot():  # type: ignore
        if QApplication is None:
            pytest.skip("PyQt6 not available")
        QApplication.instance() or QApplication(sys.argv)  # type: ignore
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

            @contextlib.contextmanager
            def waitSignal(self, *args, **kwargs):  # no-op stub
                yield

        return Bot()


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Each test starts from default settings; tests may mutate the singleton."""
    previous = SortSettings.instance
    SortSettings.instance = SortSettings()
    yield SortSettings.instance
    SortSettings.instance = previous
