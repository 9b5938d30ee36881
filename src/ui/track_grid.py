# ui/track_grid.py
from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional, Sequence

from PySide6.QtCore import Qt, Signal, QEasingCurve, QPropertyAnimation
from PySide6.QtWidgets import (
    QFrame, QGraphicsOpacityEffect, QHBoxLayout, QLabel, QScrollArea, QSizePolicy, QVBoxLayout, QWidget
)

from core.config import DEFAULT_SPEED_MS, TOKEN_FONT_SIZE
from playback.diff import TAG_CHANGED, TAG_EMPTY, TAG_GRAYED, TAG_REMOVED

_CELL_BASE = f"""
    border: 1px solid #1f2937;
    border-radius: 4px;
    padding: 2px 4px;
    font-size: {TOKEN_FONT_SIZE}px;
    font-family: monospace;
"""

_style_cache: Dict[FrozenSet[str], str] = {}


def cell_style(tags: FrozenSet[str]) -> str:
    """Stylesheet for a cell carrying the given visual tags."""
    cached = _style_cache.get(tags)
    if cached is not None:
        return cached

    background = "#0b1222"
    color = "#e5e7eb"
    border = ""
    if TAG_EMPTY in tags:
        background = "#020617"
    if TAG_CHANGED in tags:
        background = "#0c4a6e"
        border = "border-color: #38bdf8;"
    if TAG_REMOVED in tags:
        background = "#2a0a0a"
        border = "border-color: #ef4444;"
    if TAG_GRAYED in tags:
        color = "#4b5563"

    style = f"QLabel {{ {_CELL_BASE} background: {background}; color: {color}; {border} }}"
    _style_cache[tags] = style
    return style


def fade_duration_ms(speed_ms) -> int:
    """Fade-in length for changed cells: one playback interval, never under 50ms."""
    return max(int(speed_ms), 50)


class TokenCell(QLabel):
    def __init__(self, fade_ms: int = DEFAULT_SPEED_MS, parent=None):
        super().__init__(" ", parent)
        self.tags: FrozenSet[str] = frozenset({TAG_EMPTY})
        self.fade_ms = fade_ms
        self.setAlignment(Qt.AlignCenter)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.setMinimumWidth(24)
        self.setStyleSheet(cell_style(self.tags))

        # created on the first fade; most cells never change
        self._opacity: Optional[QGraphicsOpacityEffect] = None
        self._anim_opacity: Optional[QPropertyAnimation] = None

    def apply(self, text: str, tags: FrozenSet[str]):
        # blank cells keep their height with a single space
        self.setText(text if text else " ")
        self.setToolTip(text)
        if tags != self.tags:
            self.tags = frozenset(tags)
            self.setStyleSheet(cell_style(self.tags))
        if TAG_CHANGED in self.tags:
            self.play_in()

    def play_in(self):
        if self._anim_opacity is None:
            self._opacity = QGraphicsOpacityEffect(self)
            self.setGraphicsEffect(self._opacity)
            self._anim_opacity = QPropertyAnimation(self._opacity, b"opacity", self)
            self._anim_opacity.setStartValue(0.0)
            self._anim_opacity.setEndValue(1.0)
            self._anim_opacity.setEasingCurve(QEasingCurve.Type.OutCubic)

        self._anim_opacity.stop()
        self._anim_opacity.setDuration(self.fade_ms)
        self._anim_opacity.start()

    def fade_animation(self) -> Optional[QPropertyAnimation]:
        return self._anim_opacity


class _BlockHeader(QWidget):
    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.title = QLabel(title)
        self.title.setObjectName("TrackTitle")
        self.title.setTextInteractionFlags(Qt.TextSelectableByMouse)

        self.badge = QLabel("")
        self.badge.setObjectName("DoneBadge")
        self.badge.setVisible(False)

        layout.addWidget(self.title, 1)
        layout.addWidget(self.badge, 0)

    def set_badge(self, text: Optional[str]):
        if text is None:
            self.badge.setVisible(False)
            return
        self.badge.setText(text)
        self.badge.setVisible(True)


class TrackBlock(QFrame):
    """One track: title, completion badge and a fixed grid of token cells."""

    def __init__(self, title: str, columns: int, total_rows: int,
                 fade_ms: int = DEFAULT_SPEED_MS, parent=None):
        super().__init__(parent)
        self.setObjectName("TrackBlock")
        self.columns = columns

        root = QVBoxLayout(self)
        root.setContentsMargins(10, 8, 10, 10)
        root.setSpacing(6)

        self.header = _BlockHeader(title)
        root.addWidget(self.header)

        self.rows: List[QWidget] = []
        self.cells: List[TokenCell] = []
        for _ in range(total_rows):
            row = QWidget()
            row_layout = QHBoxLayout(row)
            row_layout.setContentsMargins(0, 0, 0, 0)
            row_layout.setSpacing(2)
            for _ in range(columns):
                cell = TokenCell(fade_ms)
                row_layout.addWidget(cell)
                self.cells.append(cell)
            self.rows.append(row)
            root.addWidget(row)

    # --- BlockView ---
    def set_badge(self, text: Optional[str]):
        self.header.set_badge(text)

    def set_cell(self, index: int, text: str, tags: FrozenSet[str]):
        if 0 <= index < len(self.cells):
            self.cells[index].apply(text, tags)

    def set_visible_rows(self, count: int):
        for idx, row in enumerate(self.rows):
            row.setVisible(idx < count)

    def set_fade_ms(self, fade_ms: int):
        for cell in self.cells:
            cell.fade_ms = fade_ms


class EmptyTrackBlock(QFrame):
    """Placeholder for a track without rows; it never shows a grid or a badge."""

    def __init__(self, title: str, message: str, parent=None):
        super().__init__(parent)
        self.setObjectName("TrackBlock")

        root = QVBoxLayout(self)
        root.setContentsMargins(10, 8, 10, 10)
        root.setSpacing(6)

        self.header = _BlockHeader(title)
        root.addWidget(self.header)

        self.message = QLabel(message)
        self.message.setObjectName("TrackEmpty")
        root.addWidget(self.message)

    def set_badge(self, text: Optional[str]):
        self.header.set_badge(None)

    def set_cell(self, index: int, text: str, tags: FrozenSet[str]):
        pass

    def set_visible_rows(self, count: int):
        pass


class TrackGridView(QScrollArea):
    """
    Scrollable stack of track blocks; the Qt side of the render surface.
    Emits `resized` on every resize so the controller can debounce re-layout.
    """
    resized = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWidgetResizable(True)
        self.setFrameShape(QFrame.NoFrame)

        self._content = QWidget()
        self._content.setObjectName("TracksContainer")
        self._layout = QVBoxLayout(self._content)
        self._layout.setContentsMargins(10, 10, 10, 10)
        self._layout.setSpacing(12)
        self._layout.addStretch(1)
        self.setWidget(self._content)

        self.blocks: List[QWidget] = []
        self.message_label: Optional[QLabel] = None
        self.fade_ms = fade_duration_ms(DEFAULT_SPEED_MS)

        self._apply_styles()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.resized.emit()

    # --- RenderSurface ---
    def clear(self):
        for block in self.blocks:
            self._layout.removeWidget(block)
            block.deleteLater()
        self.blocks = []
        if self.message_label is not None:
            self._layout.removeWidget(self.message_label)
            self.message_label.deleteLater()
            self.message_label = None

    def show_message(self, text: str):
        self.clear()
        self.message_label = QLabel(text)
        self.message_label.setObjectName("GridMessage")
        self.message_label.setAlignment(Qt.AlignCenter)
        self.message_label.setWordWrap(True)
        self._layout.insertWidget(0, self.message_label)

    def create_block(self, title: str, columns: int, total_rows: int) -> TrackBlock:
        return TrackBlock(title, columns, total_rows, fade_ms=self.fade_ms)

    def create_empty_block(self, title: str, message: str) -> EmptyTrackBlock:
        return EmptyTrackBlock(title, message)

    def set_blocks(self, blocks: Sequence[QWidget]):
        self.clear()
        for i, block in enumerate(blocks):
            self._layout.insertWidget(i, block)
        self.blocks = list(blocks)

    def set_fade_duration(self, speed_ms: int):
        """Follow the playback speed; applies to blocks already on screen too."""
        self.fade_ms = fade_duration_ms(speed_ms)
        for block in self.blocks:
            if isinstance(block, TrackBlock):
                block.set_fade_ms(self.fade_ms)

    def _apply_styles(self):
        self.setStyleSheet("""
        QWidget#TracksContainer {
            background-color: #020617;
        }
        QFrame#TrackBlock {
            background: #0f172a;
            border: 1px solid #1f2937;
            border-radius: 10px;
        }
        QLabel#TrackTitle {
            color: #e5e7eb;
            font-weight: 650;
            font-size: 13px;
        }
        QLabel#DoneBadge {
            color: #052e1a;
            background: #22c55e;
            border-radius: 8px;
            padding: 2px 8px;
            font-size: 11px;
        }
        QLabel#TrackEmpty, QLabel#GridMessage {
            color: #9ca3af;
            font-size: 12px;
        }
        """)
