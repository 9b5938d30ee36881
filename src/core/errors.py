# core/errors.py
from __future__ import annotations


class ManifestError(Exception):
    """Manifest is unreachable, not JSON, or lists no usable .csv entries."""


class TrackLoadError(Exception):
    """A single track could not be fetched or parsed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
