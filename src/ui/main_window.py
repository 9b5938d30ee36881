from PySide6.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QLabel
from PySide6.QtCore import Qt
from PySide6.QtGui import QShortcut, QKeySequence

from playback.controller import PlaybackController
from tracks.source import TrackSource
from ui.control_bar import ControlBar
from ui.track_grid import TrackGridView
from ui.workers.track_load_worker import TrackLoadWorker


class MainWindow(QMainWindow):
    def __init__(self, app_state):
        super().__init__()
        self.setWindowTitle("Token Tracks")
        self.resize(1100, 700)
        self.app_state = app_state
        config = app_state.config

        self.source = TrackSource(config.manifest_path, base_path=config.base_path, root=config.root)

        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.layout = QVBoxLayout(self.central_widget)
        self.layout.setContentsMargins(0, 0, 0, 0)
        self.layout.setSpacing(0)

        # --- Question header ---
        self.question = QLabel("")
        self.question.setObjectName("Question")
        self.question.setWordWrap(True)
        self.question.setTextInteractionFlags(Qt.TextSelectableByMouse)
        self.layout.addWidget(self.question)

        # --- Track grids ---
        self.grid_view = TrackGridView()
        self.grid_view.set_fade_duration(config.speed_ms)
        self.layout.addWidget(self.grid_view, 1)

        # --- Controls ---
        self.control_bar = ControlBar(config.speed_ms, self)
        self.layout.addWidget(self.control_bar)

        self.controller = PlaybackController(
            self.grid_view,
            worker_factory=lambda parent: TrackLoadWorker(self.source, parent),
            speed_ms=config.speed_ms,
            parent=self,
        )
        app_state.controller = self.controller

        # --- Wiring ---
        self.control_bar.prevRequested.connect(self.controller.step_previous)
        self.control_bar.nextRequested.connect(self.controller.step_next)
        self.control_bar.playRequested.connect(self.controller.start)
        self.control_bar.pauseRequested.connect(self.controller.stop)
        self.control_bar.speedChanged.connect(self.controller.set_interval)
        self.control_bar.speedChanged.connect(self.grid_view.set_fade_duration)
        self.grid_view.resized.connect(self.controller.notify_resize)

        self.controller.controlsChanged.connect(self.control_bar.set_controls)
        self.controller.questionChanged.connect(self.question.setText)
        self.controller.loadStarted.connect(lambda: self.statusBar().showMessage("Loading tracks…"))
        self.controller.loadFinished.connect(self._on_load_finished)

        self.app_state.notification.connect(self._on_notify)

        # --- Shortcuts ---
        QShortcut(QKeySequence("Space"), self, activated=self.controller.toggle)
        QShortcut(QKeySequence("Right"), self, activated=self.controller.step_next)
        QShortcut(QKeySequence("Left"), self, activated=self.controller.step_previous)
        QShortcut(QKeySequence("Ctrl+R"), self, activated=self.controller.load)

        self.setStyleSheet(self.styleSheet() + """
            QLabel#Question {
                background: #020617;
                color: #e5e7eb;
                font-size: 14px;
                padding: 10px 12px;
                border-bottom: 1px solid #111827;
            }
            """)

        self.show_queued_notifications()

        # initial load
        self.controller.load()

    # ------------------ load ------------------
    def _on_load_finished(self, result):
        if not result.ok:
            self.question.setText("")
            self.app_state.notify(f"Could not load the manifest: {result.error}", "error")
            return
        self.app_state.notify(f"Loaded {len(result.tracks)} track(s).", "success")

    # ------------------ notifications ------------------
    def _on_notify(self, n):
        msg = getattr(n, "message", "") or ""
        if not msg:
            return
        kind = (getattr(n, "notify_type", "info") or "info").lower()
        timeout = 0 if kind == "error" else 4000
        self.statusBar().showMessage(msg, timeout)

    def show_queued_notifications(self):
        for n in self.app_state.queued_notifications:
            self._on_notify(n)
        self.app_state.queued_notifications.clear()

    def closeEvent(self, event):
        self.controller.shutdown()
        super().closeEvent(event)
