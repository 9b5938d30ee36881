# playback/layout.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from core.config import COLUMNS
from core.models import Track


@dataclass(frozen=True)
class GridCapacity:
    columns: int
    total_cells: int
    total_rows: int


def normalize_columns(columns) -> int:
    return max(1, int(math.floor(columns)))


def grid_capacity(track: Track, columns: int = COLUMNS) -> GridCapacity:
    """Cells allocated once per track: enough for its longest row, at least one full grid row."""
    columns = normalize_columns(columns)
    total_cells = max(track.max_row_length(), columns)
    return GridCapacity(columns=columns, total_cells=total_cells,
                        total_rows=math.ceil(total_cells / columns))


def visible_rows(current_row: Sequence[str], previous_row: Sequence[str], columns: int = COLUMNS) -> int:
    relevant = max(len(current_row), len(previous_row), 1)
    return math.ceil(relevant / normalize_columns(columns))
