"""Tests for the editor window's reaction to preference changes."""

import pytest
from PySide6.QtGui import QPalette

from sketchpad.main import SketchpadApp, list_sketches


def _make_sketch(root, name):
    folder = root / name
    folder.mkdir()
    (folder / f"{name}.pde").write_text("void setup() {}\n", encoding="utf-8")
    return folder


@pytest.fixture
def window(qtbot, store):
    w = SketchpadApp(store)
    qtbot.addWidget(w)
    return w


def test_list_sketches_requires_matching_main_file(tmp_path):
    _make_sketch(tmp_path, "beta")
    _make_sketch(tmp_path, "Alpha")
    (tmp_path / "notes").mkdir()
    (tmp_path / "stray.pde").write_text("", encoding="utf-8")

    assert [p.name for p in list_sketches(tmp_path)] == ["Alpha", "beta"]
    assert list_sketches(tmp_path / "missing") == []


def test_rebuild_sketchbook_menu_uses_given_path(window, tmp_path):
    _make_sketch(tmp_path, "circles")
    window.rebuild_sketchbook_menu(str(tmp_path))

    assert [a.text() for a in window._sketchbook_menu.actions()] == ["circles"]


def test_empty_sketchbook_shows_placeholder(window):
    window.rebuild_sketchbook_menu("")
    actions = window._sketchbook_menu.actions()

    assert len(actions) == 1
    assert not actions[0].isEnabled()


def test_apply_preferences_rereads_cached_values(window, store):
    store.set("editor.font", "Monaco,plain,21")
    store.set_boolean("editor.external", True)
    window.apply_preferences()

    assert window._text.font().pointSize() == 21
    assert window.external_editor is True
    assert window._text.isReadOnly()


def test_open_sketch_loads_text(window, tmp_path):
    folder = _make_sketch(tmp_path, "waves")
    window.open_sketch(folder / "waves.pde")

    assert window._text.toPlainText() == "void setup() {}\n"
    assert "waves" in window.windowTitle()


def test_apply_preferences_sets_editor_colors(window, store):
    store.set("editor.bgcolor", "#102030")
    store.set("editor.fgcolor", "#405060")
    window.apply_preferences()
    palette = window._text.palette()

    assert palette.color(QPalette.ColorRole.Base).name() == "#102030"
    assert palette.color(QPalette.ColorRole.Text).name() == "#405060"


def test_malformed_editor_color_keeps_current_palette(window, store):
    store.set("editor.bgcolor", "#102030")
    window.apply_preferences()
    store.set("editor.bgcolor", "navy")
    window.apply_preferences()

    assert window._text.palette().color(QPalette.ColorRole.Base).name() == "#102030"
