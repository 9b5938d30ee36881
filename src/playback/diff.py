# playback/diff.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Sequence

from core.models import END_OF_TEXT, NEWLINE_ESCAPE

GRAYED_TOKENS = (END_OF_TEXT, NEWLINE_ESCAPE)

# visual tags understood by the render surface
TAG_EMPTY = "empty"
TAG_REMOVED = "diff-removed"
TAG_CHANGED = "diff-added"
TAG_GRAYED = "token-gray-out"


class DiffKind(Enum):
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    REMOVED = "removed"


@dataclass(frozen=True)
class CellDiff:
    text: str
    kind: DiffKind = DiffKind.UNCHANGED
    grayed: bool = False

    @property
    def empty(self) -> bool:
        return self.text == ""

    def tags(self) -> FrozenSet[str]:
        tags = set()
        if self.empty:
            tags.add(TAG_EMPTY)
        if self.kind is DiffKind.REMOVED:
            tags.add(TAG_REMOVED)
        elif self.kind is DiffKind.CHANGED:
            tags.add(TAG_CHANGED)
        if self.grayed:
            tags.add(TAG_GRAYED)
        return frozenset(tags)


BLANK_CELL = CellDiff(text="")


def classify_cell(previous: Optional[str], current: Optional[str], is_initial_step: bool) -> CellDiff:
    """
    Transition of one cell between the previous and the current step.
    The initial step never carries diff marks.
    """
    display = current or ""
    previous_display = previous or ""

    removed = not is_initial_step and display == "" and previous_display != ""
    changed = not is_initial_step and not removed and previous_display != display

    if removed:
        kind = DiffKind.REMOVED
    elif changed:
        kind = DiffKind.CHANGED
    else:
        kind = DiffKind.UNCHANGED

    return CellDiff(text=display, kind=kind, grayed=display in GRAYED_TOKENS)


def classify_row(previous_row: Sequence[str], current_row: Sequence[str],
                 is_initial_step: bool, total_cells: int) -> List[CellDiff]:
    out: List[CellDiff] = []
    for index in range(total_cells):
        previous = previous_row[index] if index < len(previous_row) else None
        current = current_row[index] if index < len(current_row) else None
        out.append(classify_cell(previous, current, is_initial_step))
    return out
