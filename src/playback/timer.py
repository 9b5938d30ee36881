# playback/timer.py
from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QTimer

from core.config import DEFAULT_SPEED_MS, normalize_speed


class PlaybackTimer:
    """
    Repeating tick source for autoplay.
    Stopping clears the pending tick, so nothing from an old interval
    can fire after stop() or set_interval() returns.
    """

    def __init__(self, on_tick: Callable[[], None], interval_ms=DEFAULT_SPEED_MS, timer_factory=QTimer):
        self._timer = timer_factory()
        self._timer.setSingleShot(False)
        self._timer.timeout.connect(on_tick)
        self.interval_ms = normalize_speed(interval_ms)

    def is_active(self) -> bool:
        return bool(self._timer.isActive())

    def start(self) -> None:
        self._timer.start(self.interval_ms)

    def stop(self) -> None:
        self._timer.stop()

    def set_interval(self, interval_ms) -> bool:
        """Returns True when a running timer was restarted with the new interval."""
        self.interval_ms = normalize_speed(interval_ms)
        if not self.is_active():
            return False
        self.stop()
        self.start()
        return True
