# playback/surface.py
from __future__ import annotations

from typing import FrozenSet, Optional, Protocol, Sequence


class BlockView(Protocol):
    """One track's visual block: header badge plus a fixed-capacity cell grid."""

    def set_badge(self, text: Optional[str]) -> None: ...       # None hides the badge

    def set_cell(self, index: int, text: str, tags: FrozenSet[str]) -> None: ...

    def set_visible_rows(self, count: int) -> None: ...


class RenderSurface(Protocol):
    """Write-only target of the render scheduler."""

    def clear(self) -> None: ...

    def show_message(self, text: str) -> None: ...

    def create_block(self, title: str, columns: int, total_rows: int) -> BlockView: ...

    def create_empty_block(self, title: str, message: str) -> BlockView: ...

    def set_blocks(self, blocks: Sequence[BlockView]) -> None: ...
