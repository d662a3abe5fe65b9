"""Allow running StudyTimer as a module: python -m studytimer."""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import StudyTimerApp


def main() -> None:
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get("STUDYTIMER_DEBUG") else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()

    app = QApplication(sys.argv)
    app.setApplicationName("StudyTimer")
    app.setOrganizationName("StudyTimer")

    window = StudyTimerApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
