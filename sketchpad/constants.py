"""Application-wide constants: metadata, file names, and preference keys."""

from __future__ import annotations

APP_NAME = "Sketchpad"
APP_VERSION = "1.0.0"

PREFS_FILE = "preferences.txt"
SETTINGS_DIR_ENV = "SKETCHPAD_SETTINGS_DIR"

# Suffixes recognised on default keys, e.g. ``editor.font.macosx``
PLATFORMS: tuple[str, ...] = ("other", "windows", "macos9", "macosx", "linux")

SKETCH_EXTENSION = ".pde"

# ---------------------------------------------------------------------------
# Preference keys
# ---------------------------------------------------------------------------
KEY_EXPORT_SEPARATE_JARS = "export.applet.separate_jar_files"
KEY_CLOSING_LAST_QUITS   = "sketchbook.closing_last_window_quits"
KEY_SKETCHBOOK_PATH      = "sketchbook.path"
KEY_EDITOR_FONT          = "editor.font"
KEY_EDITOR_EXTERNAL      = "editor.external"
KEY_EDITOR_BGCOLOR       = "editor.bgcolor"
KEY_EDITOR_FGCOLOR       = "editor.fgcolor"
KEY_UPDATE_CHECK         = "update.check"
KEY_MEMORY_OVERRIDE      = "run.options.memory"
KEY_MEMORY_INITIAL       = "run.options.memory.initial"
KEY_MEMORY_MAXIMUM       = "run.options.memory.maximum"
KEY_RUN_WINDOW_BGCOLOR   = "run.window.bgcolor"

DEFAULT_FONT_SIZE = 12
