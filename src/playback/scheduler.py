# playback/scheduler.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from PySide6.QtCore import QTimer

from core.config import COLUMNS, RENDER_DEBOUNCE_MS
from core.models import Track
from playback.completion import CompletionDetector
from playback.diff import BLANK_CELL, CellDiff, classify_row
from playback.layout import GridCapacity, grid_capacity, visible_rows
from playback.surface import BlockView, RenderSurface

log = logging.getLogger(__name__)

EMPTY_TRACK_MESSAGE = "No data in this CSV."


@dataclass
class RenderedTrack:
    track: Track
    view: BlockView
    capacity: Optional[GridCapacity] = None      # None for empty tracks
    applied: List[CellDiff] = field(default_factory=list)


class RenderScheduler:
    """
    Owns the per-track render structures.

    rebuild() allocates every block once per load; render() only rewrites
    badges, cell states and visible row counts. Resize signals are coalesced
    into one render() of the last rendered step.
    """

    def __init__(self, surface: RenderSurface, detector: CompletionDetector,
                 columns: int = COLUMNS, debounce_ms: int = RENDER_DEBOUNCE_MS, timer_factory=QTimer):
        self.surface = surface
        self.detector = detector
        self.columns = columns
        self.debounce_ms = int(debounce_ms)

        self._entries: List[RenderedTrack] = []
        self._last_step: int = 0

        self._debounce = timer_factory()
        self._debounce.setSingleShot(True)
        self._debounce.timeout.connect(self._on_resize_settled)

    @property
    def entries(self) -> Sequence[RenderedTrack]:
        return tuple(self._entries)

    # ----------------------------
    # Full rebuild
    # ----------------------------

    def rebuild(self, tracks: Sequence[Track]) -> None:
        self._debounce.stop()
        entries: List[RenderedTrack] = []
        for track in tracks:
            if track.is_empty:
                view = self.surface.create_empty_block(track.title, EMPTY_TRACK_MESSAGE)
                entries.append(RenderedTrack(track=track, view=view))
                continue
            capacity = grid_capacity(track, self.columns)
            view = self.surface.create_block(track.title, capacity.columns, capacity.total_rows)
            entries.append(RenderedTrack(track=track, view=view, capacity=capacity,
                                         applied=[BLANK_CELL] * capacity.total_cells))

        self._entries = entries
        self.surface.set_blocks([e.view for e in entries])
        log.debug("Rebuilt %d track blocks", len(entries))

    # ----------------------------
    # Incremental update
    # ----------------------------

    def render(self, step: int) -> None:
        self._last_step = int(step)
        for entry in self._entries:
            self._update_entry(entry, self._last_step)

    def _update_entry(self, entry: RenderedTrack, step: int) -> None:
        track = entry.track
        done_step = self.detector.evaluate(track, step)
        entry.view.set_badge(None if done_step is None else f"Done at step {done_step}")

        if entry.capacity is None:
            return

        current_row = track.row_at(step)
        previous_row = track.row_at(step - 1) if step > 0 else ()

        diffs = classify_row(previous_row, current_row, step == 0, entry.capacity.total_cells)
        for index, diff in enumerate(diffs):
            if entry.applied[index] == diff:
                continue
            entry.view.set_cell(index, diff.text, diff.tags())
            entry.applied[index] = diff

        entry.view.set_visible_rows(visible_rows(current_row, previous_row, entry.capacity.columns))

    # ----------------------------
    # Resize debounce
    # ----------------------------

    def notify_resize(self) -> None:
        # restarting a single-shot timer drops the previous wait
        self._debounce.start(self.debounce_ms)

    def resize_pending(self) -> bool:
        return bool(self._debounce.isActive())

    def _on_resize_settled(self) -> None:
        if self._entries:
            self.render(self._last_step)

    # ----------------------------
    # Teardown
    # ----------------------------

    def show_message(self, text: str) -> None:
        self.teardown()
        self.surface.show_message(text)

    def teardown(self) -> None:
        self._debounce.stop()
        self._entries = []
        self._last_step = 0
        self.surface.clear()
