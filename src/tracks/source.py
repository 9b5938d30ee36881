# tracks/source.py
from __future__ import annotations

import csv
import json
import logging
import os
from urllib.parse import urljoin
from typing import List, Optional, Tuple

import requests

from core.config import REQUEST_TIMEOUT_S
from core.errors import ManifestError, TrackLoadError
from core.models import Track, TrackMeta
from core.utils import extract_filename, is_http_location, resolve_asset_path
from tracks.parse import parse_csv

log = logging.getLogger(__name__)

QUESTION_UNAVAILABLE = "Question unavailable."


class TrackSource:
    """
    Reads a manifest and the .csv tracks it lists.

    Every relative location is read against `root`, the way a browser
    resolves asset paths against the page: `root` is either a local
    directory or an http(s) URL. Absolute URLs and paths bypass it.
    """

    def __init__(self, manifest_path: str, base_path: str = "", root: str = ".",
                 user_agent: str = "tokgrid/0.1", session: Optional[requests.Session] = None):
        self.manifest_path = manifest_path
        self.base_path = base_path
        self.root = root or "."
        # sent per request; a caller-supplied session is shared, not modified
        self.headers = {"User-Agent": user_agent}
        self.session = session or requests.Session()

    # ----------------------------
    # Manifest
    # ----------------------------

    def list_tracks(self) -> Tuple[str, List[TrackMeta]]:
        """
        Returns (question, entries). Raises ManifestError when the manifest
        cannot be read, is not JSON, has no "files" list, or lists nothing usable.
        """
        try:
            text = self.read_text(self.manifest_path)
        except (OSError, UnicodeDecodeError, requests.RequestException) as e:
            raise ManifestError(f"manifest unavailable ({e})") from e

        try:
            manifest = json.loads(text)
        except ValueError as e:
            raise ManifestError(f"manifest is not valid JSON ({e})") from e

        question = QUESTION_UNAVAILABLE
        if isinstance(manifest, dict) and isinstance(manifest.get("question"), str):
            question = manifest["question"]

        if not isinstance(manifest, dict) or not isinstance(manifest.get("files"), list):
            raise ManifestError('Manifest is missing a "files" array.')

        entries = [m for m in (self.normalize_entry(e) for e in manifest["files"]) if m]
        if not entries:
            raise ManifestError("Manifest did not contain any valid file entries.")
        return question, entries

    def normalize_entry(self, entry) -> Optional[TrackMeta]:
        if isinstance(entry, str):
            return self._build_meta(entry, None)
        if not isinstance(entry, dict):
            return None
        file_name = entry.get("file_name")
        title = entry.get("title")
        if not isinstance(file_name, str):
            return None
        return self._build_meta(file_name, title if isinstance(title, str) else None)

    def _build_meta(self, file_name: str, title: Optional[str]) -> Optional[TrackMeta]:
        trimmed = file_name.strip()
        if not trimmed.endswith(".csv"):
            return None
        relative = trimmed if trimmed.startswith("data/") else f"data/{trimmed}"
        path = resolve_asset_path(relative, self.base_path)
        display_title = title.strip() if title and title.strip() else extract_filename(trimmed)
        return TrackMeta(path=path, title=display_title)

    # ----------------------------
    # Tracks
    # ----------------------------

    def load_track(self, meta: TrackMeta) -> Track:
        try:
            text = self.read_text(meta.path)
            rows = parse_csv(text)
        except (OSError, UnicodeDecodeError, requests.RequestException, ValueError, csv.Error) as e:
            raise TrackLoadError(meta.path, str(e)) from e
        log.debug("Parsed %s: %d rows", meta.path, len(rows))
        return Track(id=meta.path, title=meta.title, rows=tuple(rows))

    # ----------------------------
    # IO
    # ----------------------------

    def read_text(self, location: str) -> str:
        if is_http_location(location):
            return self._fetch(location)
        if location.startswith("//"):
            return self._fetch(f"https:{location}")
        if is_http_location(self.root):
            return self._fetch(urljoin(self.root.rstrip("/") + "/", location))
        with open(os.path.join(self.root, location), "r", encoding="utf-8") as f:
            return f.read()

    def _fetch(self, url: str) -> str:
        r = self.session.get(url, headers=self.headers, timeout=REQUEST_TIMEOUT_S)
        r.raise_for_status()
        return r.text
