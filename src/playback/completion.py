# playback/completion.py
from __future__ import annotations

from typing import Dict, Optional

from core.models import Track


class CompletionDetector:
    """
    Remembers, per track, the first step whose row equals the track's final row.

    The recorded step is kept while the cursor moves through rows that differ
    from the final one; the badge is only shown for steps that match again.
    """

    def __init__(self):
        self._done_steps: Dict[str, int] = {}

    def reset(self) -> None:
        self._done_steps.clear()

    def done_step(self, track_id: str) -> Optional[int]:
        return self._done_steps.get(track_id)

    def evaluate(self, track: Track, step: int) -> Optional[int]:
        """Done step to display at `step`, or None when the badge is hidden."""
        if track.is_empty:
            self._done_steps.pop(track.id, None)
            return None

        if track.row_at(step) != track.final_row:
            return None

        self._done_steps.setdefault(track.id, step)
        return self._done_steps[track.id]

    def __len__(self) -> int:
        return len(self._done_steps)
