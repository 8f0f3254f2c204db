"""Main editor window (QMainWindow) and ``main()`` entry point."""

from __future__ import annotations

import pathlib
import sys
from typing import Optional

from PySide6.QtGui import QKeySequence, QPalette
from PySide6.QtWidgets import (
    QApplication,
    QLabel,
    QMainWindow,
    QPlainTextEdit,
    QStatusBar,
)

from sketchpad.constants import (
    APP_NAME,
    APP_VERSION,
    KEY_EDITOR_BGCOLOR,
    KEY_EDITOR_EXTERNAL,
    KEY_EDITOR_FGCOLOR,
    KEY_EDITOR_FONT,
    KEY_SKETCHBOOK_PATH,
    SKETCH_EXTENSION,
)
from sketchpad.dialogs.messages import MessageReporter
from sketchpad.editor.highlighter import SketchHighlighter
from sketchpad.managers.logger import get_logger
from sketchpad.managers.preferences import PreferenceStore

log = get_logger(__name__)


def list_sketches(sketchbook: pathlib.Path) -> list[pathlib.Path]:
    """Return sketch folders (``<name>/<name>.pde``) directly under *sketchbook*."""
    if not sketchbook.is_dir():
        return []
    return sorted(
        (d for d in sketchbook.iterdir()
         if d.is_dir() and (d / f"{d.name}{SKETCH_EXTENSION}").is_file()),
        key=lambda d: d.name.lower(),
    )


# ---------------------------------------------------------------------------
# Main Window
# ---------------------------------------------------------------------------

class SketchpadApp(QMainWindow):
    """Editor window; owns the values it caches from the preference store."""

    def __init__(self, store: PreferenceStore) -> None:
        super().__init__()
        self.setWindowTitle(f"{APP_NAME}  {APP_VERSION}")
        self.resize(800, 600)

        self._store = store
        self._sketch_path: Optional[pathlib.Path] = None
        self.external_editor = False

        self._build_ui()
        self._build_menu()
        self.rebuild_sketchbook_menu()
        self.apply_preferences()
        log.info("%s %s started", APP_NAME, APP_VERSION)

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        self._text = QPlainTextEdit()
        self._text.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.setCentralWidget(self._text)
        self._highlighter = SketchHighlighter(self._store, self._text.document())

        self._status_lbl = QLabel(f"{APP_NAME} ready.")
        sb = QStatusBar()
        sb.addWidget(self._status_lbl)
        self.setStatusBar(sb)

    def _build_menu(self) -> None:
        bar = self.menuBar()

        # ── File ────────────────────────────────────────────────────────
        file_m = bar.addMenu("&File")
        self._sketchbook_menu = file_m.addMenu("Sketch&book")
        file_m.addSeparator()
        act_prefs = file_m.addAction("&Preferences…")
        act_prefs.setShortcut(QKeySequence("Ctrl+,"))
        act_prefs.triggered.connect(self.open_preferences)
        act_save_prefs = file_m.addAction("&Save Preferences")
        act_save_prefs.triggered.connect(lambda: self._store.save())
        file_m.addSeparator()
        act_quit = file_m.addAction("&Quit")
        act_quit.setShortcut(QKeySequence("Ctrl+Q"))
        act_quit.triggered.connect(self.close)

    # ------------------------------------------------------------------
    # Notifications from the preferences dialog
    # ------------------------------------------------------------------

    def rebuild_sketchbook_menu(self, path: Optional[str] = None) -> None:
        """List the sketches under *path* (default: the stored sketchbook)."""
        if path is None:
            path = self._store.get(KEY_SKETCHBOOK_PATH) or ""
        self._sketchbook_menu.clear()
        sketches = list_sketches(pathlib.Path(path)) if path else []
        for folder in sketches:
            main_file = folder / f"{folder.name}{SKETCH_EXTENSION}"
            self._sketchbook_menu.addAction(
                folder.name, lambda _checked=False, p=main_file: self.open_sketch(p)
            )
        if not sketches:
            placeholder = self._sketchbook_menu.addAction("(empty)")
            placeholder.setEnabled(False)
        log.debug("Sketchbook menu rebuilt from %r: %d sketch(es)", path, len(sketches))

    def apply_preferences(self) -> None:
        """Re-read every preference this window caches."""
        try:
            self._text.setFont(self._store.get_font(KEY_EDITOR_FONT).to_qfont())
        except ValueError as exc:
            log.warning("Keeping current editor font: %s", exc)

        self.external_editor = self._store.get_boolean(KEY_EDITOR_EXTERNAL)
        self._text.setReadOnly(self.external_editor)

        palette = self._text.palette()
        bg = self._store.get_color(KEY_EDITOR_BGCOLOR)
        if bg is not None:
            palette.setColor(QPalette.ColorRole.Base, bg.to_qcolor())
        fg = self._store.get_color(KEY_EDITOR_FGCOLOR)
        if fg is not None:
            palette.setColor(QPalette.ColorRole.Text, fg.to_qcolor())
        self._text.setPalette(palette)

        self._highlighter.reload_styles()
        if self.external_editor and self._sketch_path is not None:
            self._reload_sketch()

    # ------------------------------------------------------------------
    # Sketches
    # ------------------------------------------------------------------

    def open_sketch(self, path: pathlib.Path) -> None:
        self._sketch_path = path
        self._reload_sketch()
        self.setWindowTitle(f"{path.stem} | {APP_NAME} {APP_VERSION}")
        self._status(f"Opened {path}")

    def _reload_sketch(self) -> None:
        try:
            self._text.setPlainText(self._sketch_path.read_text(encoding="utf-8"))
        except OSError as exc:
            log.error("Could not read sketch %s: %s", self._sketch_path, exc)
            self._status(f"Could not read {self._sketch_path}")

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def open_preferences(self) -> None:
        from sketchpad.dialogs.preferences import PreferencesDialog  # noqa: PLC0415
        dlg = PreferencesDialog(self._store, self)
        if dlg.show_for(self):
            self._status("Preferences applied.")

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    def closeEvent(self, event) -> None:
        self._store.save()
        log.info("%s shutting down", APP_NAME)
        super().closeEvent(event)

    def _status(self, msg: str) -> None:
        self._status_lbl.setText(msg)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    store = PreferenceStore(reporter=MessageReporter())
    store.initialize()
    window = SketchpadApp(store)
    window.show()
    sys.exit(app.exec())
