# ui/workers/track_load_worker.py
import logging

from PySide6.QtCore import QThread, Signal

from core.models import LoadResult
from tracks.loader import load_track_set
from tracks.source import TrackSource

log = logging.getLogger(__name__)


class TrackLoadWorker(QThread):
    loaded = Signal(object)     # LoadResult

    def __init__(self, source: TrackSource, parent=None):
        super().__init__(parent)
        self.source = source
        # Qt owns the thread object through its parent; drop it once run() returns
        self.finished.connect(self.deleteLater)

    def run(self):
        try:
            result = load_track_set(self.source)
        except Exception as e:
            log.exception("Track load crashed")
            result = LoadResult(error=f"Load failed: {e}")
        self.loaded.emit(result)
