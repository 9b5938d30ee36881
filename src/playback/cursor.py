# playback/cursor.py
from __future__ import annotations

from typing import Iterable

from core.models import Track
from core.utils import coerce_int


def max_step_count(tracks: Iterable[Track]) -> int:
    return max((len(t.rows) for t in tracks), default=0)


def last_step_index(tracks: Iterable[Track]) -> int:
    """Highest valid step; 0 when nothing (or only empty tracks) is loaded."""
    count = max_step_count(tracks)
    return count - 1 if count > 0 else 0


class PlaybackCursor:
    """The current step, kept inside [0, last_index] for the bound tracks."""

    def __init__(self):
        self.step: int = 0
        self.last_index: int = 0

    def bind(self, tracks: Iterable[Track]) -> None:
        self.last_index = last_step_index(tracks)
        self.step = self.clamp(self.step)

    def reset(self) -> None:
        self.step = 0
        self.last_index = 0

    def clamp(self, step) -> int:
        value = coerce_int(step, default=0)
        return min(max(value, 0), max(self.last_index, 0))

    def set(self, step) -> int:
        self.step = self.clamp(step)
        return self.step

    @property
    def at_start(self) -> bool:
        return self.step == 0

    @property
    def at_end(self) -> bool:
        return self.step >= self.last_index
