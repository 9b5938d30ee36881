# playback/controller.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from PySide6.QtCore import QObject, QTimer, Signal

from core.config import COLUMNS, DEFAULT_SPEED_MS, RENDER_DEBOUNCE_MS
from core.models import LoadResult, Track
from playback.completion import CompletionDetector
from playback.cursor import PlaybackCursor
from playback.scheduler import RenderScheduler
from playback.surface import RenderSurface
from playback.timer import PlaybackTimer

log = logging.getLogger(__name__)

LOADING_MESSAGE = "Loading tracks…"
NO_TRACKS_MESSAGE = "No tracks could be loaded."


@dataclass(frozen=True)
class ControlState:
    step: int
    last_index: int
    can_prev: bool
    can_next: bool
    can_play: bool
    can_pause: bool


class PlaybackController(QObject):
    """
    One viewing session: the loaded track set, the step cursor, the
    completion memo, the autoplay timer and the render scheduler.

    Loads run on a worker created by `worker_factory(parent)`; the worker must
    expose a `loaded` signal carrying a LoadResult, plus start()/wait().
    At most one worker runs at a time; a load() issued meanwhile is queued
    and supersedes the in-flight result.
    """
    stepChanged = Signal(int, int)          # step, last step index
    playingChanged = Signal(bool)
    controlsChanged = Signal(object)        # ControlState
    questionChanged = Signal(str)
    loadStarted = Signal()
    loadFinished = Signal(object)           # LoadResult

    def __init__(self, surface: RenderSurface, worker_factory: Optional[Callable] = None,
                 speed_ms=DEFAULT_SPEED_MS, columns: int = COLUMNS,
                 debounce_ms: int = RENDER_DEBOUNCE_MS, timer_factory=QTimer, parent=None):
        super().__init__(parent)
        self.worker_factory = worker_factory

        self.tracks: Tuple[Track, ...] = ()
        self.cursor = PlaybackCursor()
        self.detector = CompletionDetector()
        self.timer = PlaybackTimer(self.step_next, speed_ms, timer_factory=timer_factory)
        self.scheduler = RenderScheduler(surface, self.detector, columns=columns,
                                         debounce_ms=debounce_ms, timer_factory=timer_factory)

        self._worker = None
        self._load_queued = False

    # ----------------------------
    # State
    # ----------------------------

    @property
    def step(self) -> int:
        return self.cursor.step

    @property
    def last_index(self) -> int:
        return self.cursor.last_index

    def has_tracks(self) -> bool:
        return bool(self.tracks)

    def is_playing(self) -> bool:
        return self.timer.is_active()

    def is_loading(self) -> bool:
        return self._worker is not None

    def control_state(self) -> ControlState:
        has = self.has_tracks()
        playing = self.is_playing()
        return ControlState(
            step=min(self.cursor.step, self.cursor.last_index),
            last_index=self.cursor.last_index,
            can_prev=has and not self.cursor.at_start,
            can_next=has and not self.cursor.at_end,
            can_play=has and not playing,
            can_pause=has and playing,
        )

    # ----------------------------
    # Stepping
    # ----------------------------

    def set_step(self, step) -> None:
        self.cursor.set(step)
        self._render()

    def step_next(self) -> None:
        if not self.tracks:
            return
        if self.cursor.step < self.cursor.last_index:
            self.set_step(self.cursor.step + 1)
        else:
            self.set_step(self.cursor.last_index)
            self.stop()

    def step_previous(self) -> None:
        if not self.tracks:
            return
        if self.cursor.step > 0:
            self.set_step(self.cursor.step - 1)

    def _render(self) -> None:
        self.scheduler.render(self.cursor.step)
        self.stepChanged.emit(min(self.cursor.step, self.cursor.last_index), self.cursor.last_index)
        self._emit_controls()

    def _emit_controls(self) -> None:
        self.controlsChanged.emit(self.control_state())

    # ----------------------------
    # Playback
    # ----------------------------

    def start(self) -> None:
        if self.is_playing() or not self.tracks:
            return
        self.timer.start()
        self.playingChanged.emit(True)
        self._emit_controls()

    def stop(self) -> None:
        if not self.is_playing():
            return
        self.timer.stop()
        self.playingChanged.emit(False)
        self._emit_controls()

    def toggle(self) -> None:
        if self.is_playing():
            self.stop()
        else:
            self.start()

    def set_interval(self, interval_ms) -> None:
        # restart happens inside this call; the step is left alone
        if self.timer.set_interval(interval_ms):
            log.debug("Playback restarted at %dms", self.timer.interval_ms)

    @property
    def interval_ms(self) -> int:
        return self.timer.interval_ms

    # ----------------------------
    # Resize
    # ----------------------------

    def notify_resize(self) -> None:
        self.scheduler.notify_resize()

    # ----------------------------
    # Loading
    # ----------------------------

    def load(self) -> None:
        if self._worker is not None:
            log.info("Load already running; queued a reload")
            self._load_queued = True
            return
        self._begin_load()

    def _begin_load(self) -> None:
        if self.worker_factory is None:
            raise RuntimeError("PlaybackController.load() needs a worker_factory")

        self._reset_session()
        self.scheduler.show_message(LOADING_MESSAGE)
        self.loadStarted.emit()
        self._emit_controls()

        worker = self.worker_factory(self)
        self._worker = worker
        worker.loaded.connect(self._on_worker_loaded)
        worker.start()

    def _on_worker_loaded(self, result: LoadResult) -> None:
        if self.sender() is not None and self.sender() is not self._worker:
            return
        self._worker = None

        if self._load_queued:
            self._load_queued = False
            log.info("Discarding superseded load result")
            self._begin_load()
            return

        self.apply_load_result(result)

    def apply_load_result(self, result: LoadResult) -> None:
        """Swap in a whole new track set and render its first step."""
        self._reset_session()

        if not result.ok:
            self.scheduler.show_message(f"Could not load the manifest: {result.error}")
            self._emit_controls()
            self.loadFinished.emit(result)
            return

        self.questionChanged.emit(result.question)
        self.tracks = tuple(result.tracks)
        self.cursor.bind(self.tracks)

        if not self.tracks:
            self.scheduler.show_message(NO_TRACKS_MESSAGE)
        else:
            self.scheduler.rebuild(self.tracks)

        log.info("Track set ready: %d tracks, last step %d", len(self.tracks), self.cursor.last_index)
        self.set_step(0)
        self.loadFinished.emit(result)

    def _reset_session(self) -> None:
        self.stop()
        self.detector.reset()
        self.cursor.reset()
        self.tracks = ()
        self.scheduler.teardown()

    def shutdown(self) -> None:
        self.stop()
        self.scheduler.teardown()
        if self._worker is not None:
            self._worker.wait()
            self._worker = None
