"""Preferences dialog.

Edits the handful of keys that have a UI:
  • Export     – multiple .jar files when exporting applets
  • Sketchbook – location, quit after closing the last window
  • Editor     – font size, external editor
  • Runner     – maximum memory override
  • Updates    – check on start-up

Everything else can be edited by hand in preferences.txt.

OK applies the fields to the store and notifies the owning session;
Cancel (or Escape / closing the window) leaves the store untouched.
"""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)

from sketchpad.constants import (
    APP_NAME,
    KEY_CLOSING_LAST_QUITS,
    KEY_EDITOR_EXTERNAL,
    KEY_EDITOR_FONT,
    KEY_EXPORT_SEPARATE_JARS,
    KEY_MEMORY_INITIAL,
    KEY_MEMORY_MAXIMUM,
    KEY_MEMORY_OVERRIDE,
    KEY_SKETCHBOOK_PATH,
    KEY_UPDATE_CHECK,
)
from sketchpad.managers.logger import get_logger
from sketchpad.managers.preferences import PreferenceStore, parse_int

log = get_logger(__name__)


class PreferencesDialog(QDialog):
    """Modal form bound to a :class:`PreferenceStore`.

    The *session* handed to :meth:`show_for` must provide
    ``rebuild_sketchbook_menu(path)`` and ``apply_preferences()``.
    """

    def __init__(self, store: PreferenceStore, parent=None) -> None:
        super().__init__(parent)
        self._store = store
        self._session = None
        self.setWindowTitle("Preferences")
        self.setModal(True)
        self._build_ui()

    # ------------------------------------------------------------------
    # UI
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(16, 16, 16, 16)
        root.setSpacing(10)

        self._export_separate_chk = QCheckBox("Use multiple .jar files when exporting applets")
        root.addWidget(self._export_separate_chk)

        self._closing_quits_chk = QCheckBox("Quit after closing last sketch window")
        root.addWidget(self._closing_quits_chk)

        # ── Sketchbook location ───────────────────────────────────────
        root.addWidget(QLabel("Sketchbook location:"))
        path_row = QHBoxLayout()
        self._sketchbook_edit = QLineEdit()
        self._sketchbook_edit.setMinimumWidth(360)
        browse_btn = QPushButton("Browse")
        browse_btn.clicked.connect(self._browse_sketchbook)
        path_row.addWidget(self._sketchbook_edit, 1)
        path_row.addWidget(browse_btn)
        root.addLayout(path_row)

        # ── Font size / memory ────────────────────────────────────────
        form = QFormLayout()
        form.setSpacing(8)

        font_row = QHBoxLayout()
        self._font_size_edit = QLineEdit()
        self._font_size_edit.setMaximumWidth(60)
        font_row.addWidget(self._font_size_edit)
        font_row.addWidget(QLabel(f"(requires restart of {APP_NAME})"))
        font_row.addStretch()
        form.addRow("Editor font size:", font_row)

        memory_row = QHBoxLayout()
        self._memory_chk = QCheckBox("Set maximum available memory to")
        self._memory_edit = QLineEdit()
        self._memory_edit.setMaximumWidth(60)
        memory_row.addWidget(self._memory_chk)
        memory_row.addWidget(self._memory_edit)
        memory_row.addWidget(QLabel("MB"))
        memory_row.addStretch()
        form.addRow(memory_row)
        root.addLayout(form)

        self._external_editor_chk = QCheckBox("Use external editor")
        root.addWidget(self._external_editor_chk)

        self._update_check_chk = QCheckBox("Check for updates on startup")
        root.addWidget(self._update_check_chk)

        # ── Where the rest lives ──────────────────────────────────────
        more = QLabel("More preferences can be edited directly in the file")
        more.setStyleSheet("color: gray;")
        root.addWidget(more)
        self._file_lbl = QLabel(str(self._store.preferences_file or ""))
        self._file_lbl.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        root.addWidget(self._file_lbl)
        note = QLabel(f"(edit only when {APP_NAME} is not running)")
        note.setStyleSheet("color: gray;")
        root.addWidget(note)

        # ── Button row: OK | Cancel ───────────────────────────────────
        self._btns = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        self._btns.button(QDialogButtonBox.StandardButton.Ok).setObjectName("primary")
        self._btns.accepted.connect(self.accept)
        self._btns.rejected.connect(self.reject)
        root.addWidget(self._btns)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def populate(self, session) -> None:
        """Bind *session* and fill every field from the store."""
        self._session = session
        self._load()

    def show_for(self, session) -> bool:
        """Populate, then block until OK or Cancel. True when applied."""
        self.populate(session)
        return self.exec() == QDialog.DialogCode.Accepted

    def accept(self) -> None:
        self.apply()
        super().accept()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> None:
        store = self._store
        self._export_separate_chk.setChecked(store.get_boolean(KEY_EXPORT_SEPARATE_JARS))
        self._closing_quits_chk.setChecked(store.get_boolean(KEY_CLOSING_LAST_QUITS))
        self._sketchbook_edit.setText(store.get(KEY_SKETCHBOOK_PATH) or "")
        self._external_editor_chk.setChecked(store.get_boolean(KEY_EDITOR_EXTERNAL))
        self._update_check_chk.setChecked(store.get_boolean(KEY_UPDATE_CHECK))
        self._memory_chk.setChecked(store.get_boolean(KEY_MEMORY_OVERRIDE))
        self._memory_edit.setText(store.get(KEY_MEMORY_MAXIMUM) or "")
        try:
            self._font_size_edit.setText(str(store.get_font(KEY_EDITOR_FONT).size))
        except ValueError as exc:
            log.warning("Could not read editor font: %s", exc)
            self._font_size_edit.clear()
        self._file_lbl.setText(str(store.preferences_file or ""))

    def apply(self) -> None:
        """Copy the fields into the store, then tell the session to re-read."""
        store = self._store
        store.set_boolean(KEY_EXPORT_SEPARATE_JARS, self._export_separate_chk.isChecked())
        store.set_boolean(KEY_CLOSING_LAST_QUITS, self._closing_quits_chk.isChecked())

        old_path = store.get(KEY_SKETCHBOOK_PATH)
        new_path = self._sketchbook_edit.text()
        if new_path != old_path:
            # The session rebuilds before the store sees the new path
            if self._session is not None:
                self._session.rebuild_sketchbook_menu(new_path)
            store.set(KEY_SKETCHBOOK_PATH, new_path)

        store.set_boolean(KEY_EDITOR_EXTERNAL, self._external_editor_chk.isChecked())
        store.set_boolean(KEY_UPDATE_CHECK, self._update_check_chk.isChecked())
        store.set_boolean(KEY_MEMORY_OVERRIDE, self._memory_chk.isChecked())

        self._apply_memory()
        self._apply_font_size()

        log.info(
            "Preferences applied: sketchbook=%s  font=%s  memory=%s/%s",
            store.get(KEY_SKETCHBOOK_PATH),
            store.get(KEY_EDITOR_FONT),
            store.get(KEY_MEMORY_OVERRIDE),
            store.get(KEY_MEMORY_MAXIMUM),
        )
        if self._session is not None:
            self._session.apply_preferences()

    def _apply_memory(self) -> None:
        text = self._memory_edit.text()
        try:
            memory_min = self._store.get_integer(KEY_MEMORY_INITIAL)
            memory_max = parse_int(text.strip())
        except ValueError:
            log.warning("Ignoring bad memory setting %r", text)
            return
        if memory_max < memory_min:
            memory_max = memory_min
        self._store.set_integer(KEY_MEMORY_MAXIMUM, memory_max)

    def _apply_font_size(self) -> None:
        text = self._font_size_edit.text()
        try:
            new_size = parse_int(text.strip())
            pieces = (self._store.get(KEY_EDITOR_FONT) or "").split(",")
            if len(pieces) != 3:
                raise ValueError(f"malformed font spec {self._store.get(KEY_EDITOR_FONT)!r}")
        except ValueError:
            log.warning("Ignoring invalid font size %r", text)
            return
        pieces[2] = str(new_size)
        self._store.set(KEY_EDITOR_FONT, ",".join(pieces))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _browse_sketchbook(self) -> None:
        path = QFileDialog.getExistingDirectory(
            self,
            "Select new sketchbook location",
            self._sketchbook_edit.text(),
        )
        if path:
            self._sketchbook_edit.setText(path)
