"""Blocking error / warning messages shown to the user."""

from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import QApplication, QMessageBox, QWidget

from sketchpad.managers.logger import get_logger

log = get_logger(__name__)


class MessageReporter:
    """Log a problem and, when a GUI is running, show it in a message box."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        self._parent = parent

    def error(self, title: str, message: str, exc: Optional[BaseException] = None) -> None:
        log.error("%s: %s", title, message, exc_info=exc)
        if QApplication.instance() is not None:
            QMessageBox.critical(self._parent, title, self._with_cause(message, exc))

    def warning(self, title: str, message: str, exc: Optional[BaseException] = None) -> None:
        log.warning("%s: %s", title, message, exc_info=exc)
        if QApplication.instance() is not None:
            QMessageBox.warning(self._parent, title, self._with_cause(message, exc))

    @staticmethod
    def _with_cause(message: str, exc: Optional[BaseException]) -> str:
        if exc is None:
            return message
        return f"{message}\n\n{exc}"
