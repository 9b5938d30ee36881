# core/config.py
from __future__ import annotations

import argparse
import math
import os
from dataclasses import dataclass
from typing import Optional, Sequence

from core.utils import resolve_asset_path, sanitize_base_path

COLUMNS = 16
TOKEN_FONT_SIZE = 14
RENDER_DEBOUNCE_MS = 120
DEFAULT_SPEED_MS = 500
REQUEST_TIMEOUT_S = 15
DEFAULT_MANIFEST = "data/manifest.json"


@dataclass(frozen=True)
class ViewerConfig:
    manifest_path: str
    root: str = "."
    base_path: str = ""
    speed_ms: int = DEFAULT_SPEED_MS
    log_level: str = "INFO"

    @staticmethod
    def from_args(argv: Optional[Sequence[str]] = None, env=None) -> "ViewerConfig":
        """
        Command line wins over environment (TOKGRID_*), environment over defaults.
        """
        env = os.environ if env is None else env

        parser = argparse.ArgumentParser(
            prog="tokgrid",
            description="Step through parallel token tracks as animated grids.",
        )
        parser.add_argument("--manifest", default=env.get("TOKGRID_MANIFEST"),
                            help="manifest.json location (path or URL)")
        parser.add_argument("--root", default=env.get("TOKGRID_ROOT", "."),
                            help="directory or URL that relative paths are read from")
        parser.add_argument("--base-path", default=env.get("TOKGRID_BASE_PATH", ""),
                            help="prefix for relative data paths")
        parser.add_argument("--speed", default=env.get("TOKGRID_SPEED_MS", DEFAULT_SPEED_MS),
                            help="playback interval in ms")
        parser.add_argument("--log-level", default=env.get("TOKGRID_LOG_LEVEL", "INFO"),
                            choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                            type=str.upper)
        args = parser.parse_args(argv)

        base_path = sanitize_base_path(args.base_path)
        manifest = (args.manifest or "").strip() or resolve_asset_path(DEFAULT_MANIFEST, base_path)

        return ViewerConfig(
            manifest_path=manifest,
            root=args.root,
            base_path=base_path,
            speed_ms=normalize_speed(args.speed),
            log_level=args.log_level,
        )


def normalize_speed(value) -> int:
    """Any non-numeric, non-finite or non-positive interval falls back to 500ms."""
    try:
        speed = float(value)
    except (TypeError, ValueError):
        return DEFAULT_SPEED_MS
    if not math.isfinite(speed) or speed <= 0:
        return DEFAULT_SPEED_MS
    return max(1, int(round(speed)))
