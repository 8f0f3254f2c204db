"""Tests for the preferences dialog's populate / apply / cancel behaviour."""

import pytest
from PySide6.QtWidgets import QDialogButtonBox

from sketchpad.dialogs.preferences import PreferencesDialog


class FakeSession:
    """Stands in for the editor window; records notifications in order."""

    def __init__(self, store):
        self._store = store
        self.calls = []

    def rebuild_sketchbook_menu(self, path=None):
        self.calls.append(("rebuild", path, self._store.get("sketchbook.path")))

    def apply_preferences(self):
        self.calls.append(("apply",))


@pytest.fixture
def session(store):
    return FakeSession(store)


@pytest.fixture
def dialog(qtbot, store, session):
    dlg = PreferencesDialog(store)
    qtbot.addWidget(dlg)
    dlg.populate(session)
    return dlg


def test_populate_reads_current_values(store, session, qtbot):
    store.set_boolean("editor.external", True)
    store.set("sketchbook.path", "/tmp/sketches")
    store.set("editor.font", "Monaco,plain,15")
    dlg = PreferencesDialog(store)
    qtbot.addWidget(dlg)
    dlg.populate(session)

    assert dlg._external_editor_chk.isChecked()
    assert not dlg._export_separate_chk.isChecked()
    assert dlg._update_check_chk.isChecked()
    assert dlg._sketchbook_edit.text() == "/tmp/sketches"
    assert dlg._font_size_edit.text() == "15"
    assert dlg._memory_edit.text() == "256"
    assert dlg._file_lbl.text() == str(store.preferences_file)


def test_checkboxes_are_written(dialog, store):
    dialog._export_separate_chk.setChecked(True)
    dialog._closing_quits_chk.setChecked(True)
    dialog._external_editor_chk.setChecked(True)
    dialog._update_check_chk.setChecked(False)
    dialog._memory_chk.setChecked(True)
    dialog.apply()

    assert store.get("export.applet.separate_jar_files") == "true"
    assert store.get("sketchbook.closing_last_window_quits") == "true"
    assert store.get("editor.external") == "true"
    assert store.get("update.check") == "false"
    assert store.get("run.options.memory") == "true"


def test_memory_below_minimum_is_clamped(dialog, store):
    dialog._memory_edit.setText("10")
    dialog.apply()

    assert store.get("run.options.memory.maximum") == "64"


def test_memory_above_minimum_is_stored(dialog, store):
    dialog._memory_edit.setText(" 1024 ")
    dialog.apply()

    assert store.get("run.options.memory.maximum") == "1024"


def test_bad_memory_is_skipped_but_rest_is_applied(dialog, store, session):
    dialog._memory_edit.setText("lots")
    dialog._font_size_edit.setText("18")
    dialog.apply()

    assert store.get("run.options.memory.maximum") == "256"
    assert store.get("editor.font") == "Monaco,plain,18"
    assert session.calls[-1] == ("apply",)


def test_font_size_replaces_only_the_size_field(dialog, store):
    store.set("editor.font", "Courier,bold,12")
    dialog._font_size_edit.setText("16")
    dialog.apply()

    assert store.get("editor.font") == "Courier,bold,16"


def test_bad_font_size_leaves_font_unchanged(dialog, store):
    before = store.get("editor.font")
    dialog._font_size_edit.setText("abc")
    dialog.apply()

    assert store.get("editor.font") == before


def test_malformed_font_spec_is_not_rewritten(dialog, store):
    store.set("editor.font", "Courier,bold")
    dialog._font_size_edit.setText("16")
    dialog.apply()

    assert store.get("editor.font") == "Courier,bold"


def test_sketchbook_change_notifies_before_storing(dialog, store, session):
    dialog._sketchbook_edit.setText("/new/sketchbook")
    dialog.apply()

    assert session.calls[0] == ("rebuild", "/new/sketchbook", "")
    assert store.get("sketchbook.path") == "/new/sketchbook"


def test_unchanged_sketchbook_does_not_rebuild(dialog, session):
    dialog.apply()

    assert session.calls == [("apply",)]


def test_ok_button_applies_and_closes(dialog, store, session):
    dialog._external_editor_chk.setChecked(True)
    dialog._btns.button(QDialogButtonBox.StandardButton.Ok).click()

    assert store.get_boolean("editor.external")
    assert session.calls == [("apply",)]
    assert not dialog.isVisible()


def test_cancel_leaves_store_untouched(dialog, store, session):
    before = {k: store.get(k) for k in store}
    dialog._external_editor_chk.setChecked(True)
    dialog._sketchbook_edit.setText("/elsewhere")
    dialog._memory_edit.setText("10")
    dialog._btns.button(QDialogButtonBox.StandardButton.Cancel).click()

    assert {k: store.get(k) for k in store} == before
    assert session.calls == []
