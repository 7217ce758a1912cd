"""Application entry point."""

from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication

from formmapper import config
from formmapper.ui.main_window import MainWindow


def setup_logging(level: str = config.LOG_LEVEL, log_file: str | None = config.LOG_FILE) -> logging.Logger:
    logger = logging.getLogger("formmapper")
    logger.setLevel(logging.DEBUG)  # emit everything; handlers will filter

    # Clear existing handlers if this is called multiple times
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level, logging.WARNING))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        # Truncated each run
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def main() -> int:
    logger = setup_logging()
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    logger.info("Started form mapper for %s", config.FORM_NUMBER)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
