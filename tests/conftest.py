"""
Shared fixtures: an offscreen QApplication, a manually fired timer,
a recording render surface and a hand-driven load worker.
"""
import os
import sys
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

SRC_DIR = Path(__file__).resolve().parent.parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

import pytest
from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QApplication

from core.models import Track


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


# ---------------------------------------------------------------------------
# Timer
# ---------------------------------------------------------------------------

class FakeTimer:
    """QTimer stand-in; time only moves when a test calls fire()."""

    def __init__(self):
        self._single_shot = False
        self._interval = 0
        self._active = False
        self._callback = None
        self.start_count = 0

    def setSingleShot(self, val):
        self._single_shot = val

    def start(self, ms=None):
        if ms is not None:
            self._interval = ms
        self._active = True
        self.start_count += 1

    def stop(self):
        self._active = False

    def isActive(self):
        return self._active

    def interval(self):
        return self._interval

    def fire(self):
        """Simulate timer expiry."""
        if not self._active:
            return
        if self._single_shot:
            self._active = False
        if self._callback:
            self._callback()

    @property
    def timeout(self):
        parent = self

        class _Sig:
            def connect(self, cb):
                parent._callback = cb

        return _Sig()


class TimerFactory:
    def __init__(self):
        self.timers = []

    def __call__(self):
        timer = FakeTimer()
        self.timers.append(timer)
        return timer


@pytest.fixture
def timers():
    return TimerFactory()


# ---------------------------------------------------------------------------
# Render surface
# ---------------------------------------------------------------------------

class FakeBlock:
    def __init__(self, title, columns=0, total_rows=0, message=None):
        self.title = title
        self.columns = columns
        self.total_rows = total_rows
        self.message = message
        self.badge = None
        self.cells = {}
        self.visible_rows = None
        self.cell_writes = 0
        self.row_updates = 0

    def set_badge(self, text):
        self.badge = text

    def set_cell(self, index, text, tags):
        self.cells[index] = (text, frozenset(tags))
        self.cell_writes += 1

    def set_visible_rows(self, count):
        self.visible_rows = count
        self.row_updates += 1


class FakeSurface:
    def __init__(self):
        self.blocks = []
        self.message = None
        self.created = []
        self.clear_count = 0

    def clear(self):
        self.blocks = []
        self.message = None
        self.clear_count += 1

    def show_message(self, text):
        self.clear()
        self.message = text

    def create_block(self, title, columns, total_rows):
        block = FakeBlock(title, columns, total_rows)
        self.created.append(block)
        return block

    def create_empty_block(self, title, message):
        block = FakeBlock(title, message=message)
        self.created.append(block)
        return block

    def set_blocks(self, blocks):
        self.clear()
        self.blocks = list(blocks)


@pytest.fixture
def surface():
    return FakeSurface()


# ---------------------------------------------------------------------------
# Load worker
# ---------------------------------------------------------------------------

class FakeWorker(QObject):
    loaded = Signal(object)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.started = False
        self.waited = False

    def start(self):
        self.started = True

    def wait(self):
        self.waited = True
        return True

    def finish(self, result):
        self.loaded.emit(result)


class WorkerFactory:
    def __init__(self):
        self.workers = []

    def __call__(self, parent=None):
        worker = FakeWorker(parent)
        self.workers.append(worker)
        return worker


@pytest.fixture
def workers():
    return WorkerFactory()


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------

def make_track(track_id, rows, title=None):
    return Track(id=track_id, title=title or track_id, rows=tuple(tuple(r) for r in rows))


def track_of_length(track_id, length, width=1):
    return make_track(track_id, [[f"t{i}"] * width for i in range(length)])
