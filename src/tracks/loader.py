# tracks/loader.py
from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from core.errors import ManifestError, TrackLoadError
from core.models import LoadResult, Track
from tracks.source import TrackSource

log = logging.getLogger(__name__)


def load_track_set(source: TrackSource, max_workers: Optional[int] = None) -> LoadResult:
    """
    Manifest first, then every listed track concurrently.
    Tracks keep manifest order; a track that fails is logged and dropped.
    A manifest failure is reported in LoadResult.error with no tracks.
    """
    start_time = time.time()
    try:
        question, entries = source.list_tracks()
    except ManifestError as e:
        log.error("Manifest load failed for %s: %s", source.manifest_path, e)
        return LoadResult(error=str(e))

    tracks: List[Track] = []
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(source.load_track, meta) for meta in entries]
        for meta, future in zip(entries, futures):
            try:
                tracks.append(future.result())
            except TrackLoadError as e:
                log.warning("Failed to load track %s: %s", meta.path, e.reason)

    log.info("Loaded %d/%d tracks in %dms", len(tracks), len(entries),
             int((time.time() - start_time) * 1000))
    return LoadResult(question=question, tracks=tuple(tracks))
