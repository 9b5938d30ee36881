# core/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple

Token = str                 # "" means absent
Row = Tuple[Token, ...]

END_OF_TEXT = "[EoT]"
NEWLINE_ESCAPE = "\\n"

@dataclass(frozen=True)
class TrackMeta:
    path: str       # resolved location (local path or URL)
    title: str

@dataclass(frozen=True)
class Track:
    id: str         # resolved source path, also the completion memo key
    title: str
    rows: Tuple[Row, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def final_row(self) -> Row:
        return self.rows[-1] if self.rows else ()

    def row_at(self, step: int) -> Row:
        # out-of-range steps read as an empty row
        if 0 <= step < len(self.rows):
            return self.rows[step]
        return ()

    def max_row_length(self) -> int:
        return max((len(r) for r in self.rows), default=0)

@dataclass(frozen=True)
class LoadResult:
    question: str = ""
    tracks: Tuple[Track, ...] = field(default_factory=tuple)
    error: Optional[str] = None   # set when the manifest itself failed

    @property
    def ok(self) -> bool:
        return self.error is None
