# ui/control_bar.py
from __future__ import annotations

from PySide6.QtCore import Qt, QSize, QByteArray, Signal
from PySide6.QtGui import QIcon, QPixmap, QPainter
from PySide6.QtSvg import QSvgRenderer
from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QToolButton, QSpinBox

from core.config import DEFAULT_SPEED_MS


def _svg_icon(path_d: str, size: int = 20, color: str = "#e5e7eb") -> QIcon:
    svg = f"""
    <svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" viewBox="0 0 24 24">
      <path d="{path_d}" fill="{color}"/>
    </svg>
    """.strip()

    renderer = QSvgRenderer(QByteArray(svg.encode("utf-8")))
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)

    p = QPainter(pm)
    renderer.render(p)
    p.end()

    return QIcon(pm)


SVG_PREV = "M6 18V6h2v12H6zm3.5-6L18 6v12l-8.5-6z"
SVG_NEXT = "M16 6v12h2V6h-2zM6 18l8.5-6L6 6v12z"
SVG_PLAY = "M8 5v14l11-7L8 5z"
SVG_PAUSE = "M6 5h4v14H6V5zm8 0h4v14h-4V5z"


def speed_label(value) -> str:
    return f"{value}ms"


class ControlBar(QWidget):
    """
    Step controls: previous / play / pause / next, step counter and the
    autoplay interval. Only emits requests; the controller pushes state back
    through set_controls().
    """
    prevRequested = Signal()
    playRequested = Signal()
    pauseRequested = Signal()
    nextRequested = Signal()
    speedChanged = Signal(int)      # ms

    def __init__(self, speed_ms: int = DEFAULT_SPEED_MS, parent=None):
        super().__init__(parent)

        root = QHBoxLayout(self)
        root.setContentsMargins(8, 6, 8, 6)
        root.setSpacing(10)

        self.btn_prev = self._button("BtnPrev", SVG_PREV, 20, "Previous step")
        self.btn_play = self._button("BtnPlay", SVG_PLAY, 22, "Play")
        self.btn_pause = self._button("BtnPause", SVG_PAUSE, 22, "Pause")
        self.btn_next = self._button("BtnNext", SVG_NEXT, 20, "Next step")

        self.lbl_step = QLabel("Step 0 / 0")
        self.lbl_step.setObjectName("StepCounter")

        self.spin_speed = QSpinBox()
        self.spin_speed.setObjectName("SpeedSpin")
        self.spin_speed.setToolTip("Autoplay interval")
        self.spin_speed.setRange(1, 60000)
        self.spin_speed.setSingleStep(50)
        self.spin_speed.setValue(int(speed_ms))

        self.lbl_speed = QLabel(speed_label(self.spin_speed.value()))

        root.addWidget(self.btn_prev)
        root.addWidget(self.btn_play)
        root.addWidget(self.btn_pause)
        root.addWidget(self.btn_next)
        root.addSpacing(6)
        root.addWidget(self.lbl_step, 1)
        root.addWidget(self.spin_speed)
        root.addWidget(self.lbl_speed)

        self.btn_prev.clicked.connect(lambda: self.prevRequested.emit())
        self.btn_play.clicked.connect(lambda: self.playRequested.emit())
        self.btn_pause.clicked.connect(lambda: self.pauseRequested.emit())
        self.btn_next.clicked.connect(lambda: self.nextRequested.emit())
        self.spin_speed.valueChanged.connect(self._on_speed_changed)

        # nothing is loaded yet
        for btn in (self.btn_prev, self.btn_play, self.btn_pause, self.btn_next):
            btn.setEnabled(False)

        self.setObjectName("ControlBar")
        self._apply_styles()

    def _button(self, name: str, path_d: str, size: int, tip: str) -> QToolButton:
        btn = QToolButton()
        btn.setObjectName(name)
        btn.setIcon(_svg_icon(path_d, size))
        btn.setIconSize(QSize(size, size))
        btn.setToolTip(tip)
        return btn

    # --- controller -> bar ---
    def set_controls(self, state):
        """state is a playback.controller.ControlState"""
        self.lbl_step.setText(f"Step {state.step} / {state.last_index}")
        self.btn_prev.setEnabled(state.can_prev)
        self.btn_next.setEnabled(state.can_next)
        self.btn_play.setEnabled(state.can_play)
        self.btn_pause.setEnabled(state.can_pause)

    # --- speed handling ---
    def _on_speed_changed(self, value: int):
        self.lbl_speed.setText(speed_label(value))
        self.speedChanged.emit(int(value))

    def _apply_styles(self):
        self.setStyleSheet("""
        QWidget#ControlBar {
            background-color: #020617;
            border-top: 1px solid #111827;
        }

        QToolButton {
            border: 1px solid transparent;
            background: transparent;
            padding: 6px;
            border-radius: 10px;
        }
        QToolButton:hover {
            background: #0b1222;
            border-color: #1f2937;
        }
        QToolButton:pressed {
            background: #0f172a;
        }
        QToolButton:disabled {
            background: transparent;
            border-color: transparent;
        }

        QToolButton#BtnPlay, QToolButton#BtnPause {
            background: #111827;
            border: 1px solid #1f2937;
            border-radius: 999px;
            padding: 8px;
        }
        QToolButton#BtnPlay:hover, QToolButton#BtnPause:hover {
            border-color: #38bdf8;
            background: #020617;
        }

        QLabel {
            color: #9ca3af;
            font-size: 11px;
        }
        QLabel#StepCounter {
            color: #e5e7eb;
            font-size: 12px;
        }

        QSpinBox#SpeedSpin {
            background: #0b1222;
            border: 1px solid #1f2937;
            border-radius: 10px;
            padding: 4px 8px;
            color: #e5e7eb;
            min-width: 74px;
            font-size: 11px;
        }
        QSpinBox#SpeedSpin:hover { border-color: #38bdf8; }
        """)
