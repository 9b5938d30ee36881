# tracks/parse.py
from __future__ import annotations

import csv
import io
from typing import Iterable, List, Optional, Sequence

from core.models import Row

# control-token literal -> display sentinel
CONTROL_TOKENS = (
    ("<|endoftext|>", "[EoT]"),
    ("<|eot_id|>", "[eot]"),
    ("<|mdm_mask|>", "[MASK]"),
)


def normalize_token(token) -> Optional[str]:
    """
    None stays None (absent); anything else becomes a string with the
    known control markers rewritten to their display sentinels.
    """
    if token is None:
        return None
    text = str(token)
    for literal, sentinel in CONTROL_TOKENS:
        text = text.replace(literal, sentinel)
    return text


def normalize_row(fields) -> Row:
    """
    Returns an empty tuple when the row carries no present token,
    otherwise the normalized tokens with absent ones collapsed to "".
    """
    if isinstance(fields, (list, tuple)):
        tokens: Sequence = fields
    else:
        tokens = [fields]
    normalized = [normalize_token(t) for t in tokens]
    if not any(normalized):
        return ()
    return tuple(t or "" for t in normalized)


def parse_csv(text: str) -> List[Row]:
    """Split comma-delimited text into token rows, dropping blank and all-absent rows."""
    reader = csv.reader(io.StringIO((text or "").strip()), delimiter=",")
    return _valid_rows(normalize_row(fields) for fields in reader if fields)


def _valid_rows(rows: Iterable[Row]) -> List[Row]:
    return [row for row in rows if row]
