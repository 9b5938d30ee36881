import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.config import ViewerConfig
from core.state import AppState
from ui.main_window import MainWindow


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def init_app_state(argv) -> AppState:
    config = ViewerConfig.from_args(argv)
    configure_logging(config.log_level)
    logging.getLogger(__name__).info("Manifest: %s (root %s)", config.manifest_path, config.root)

    app_state = AppState(config)
    if config.base_path:
        app_state.queue(f"Using base path '{config.base_path}'", "info")
    return app_state


def main() -> int:
    qt_app = QApplication(sys.argv[:1])

    app_state = init_app_state(sys.argv[1:])
    main_window = MainWindow(app_state)
    main_window.show()

    return qt_app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
