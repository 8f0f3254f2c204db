"""Host-environment collaborators used by the preference store.

* ``settings_dir()`` / ``settings_file()`` – where user files live.
  ``$SKETCHPAD_SETTINGS_DIR`` overrides the platform location, which is
  handy for tests and portable installs.
* ``open_defaults()`` – readable stream for the bundled defaults.
* ``current_platform()`` – suffix used for ``key.<platform>`` defaults.
* ``system_control_color()`` – theme-dependent window background.
"""

from __future__ import annotations

import os
import pathlib
import sys
from typing import TextIO

from sketchpad.constants import APP_NAME, PREFS_FILE, SETTINGS_DIR_ENV
from sketchpad.models import Color

DEFAULTS_FILE = pathlib.Path(__file__).resolve().parent.parent / "lib" / PREFS_FILE

# Classic "control" grey, used when no QApplication is running
FALLBACK_CONTROL_COLOR = Color(0xD4, 0xD0, 0xC8)


def settings_dir() -> pathlib.Path:
    env = os.environ.get(SETTINGS_DIR_ENV)
    if env:
        path = pathlib.Path(env)
    elif sys.platform == "win32":
        appdata = os.environ.get("APPDATA") or pathlib.Path.home()
        path = pathlib.Path(appdata) / APP_NAME
    elif sys.platform == "darwin":
        path = pathlib.Path.home() / "Library" / APP_NAME
    else:
        path = pathlib.Path.home() / f".{APP_NAME.lower()}"
    path.mkdir(parents=True, exist_ok=True)
    return path


def settings_file(name: str) -> pathlib.Path:
    """Return the absolute path of *name* inside the settings directory."""
    return settings_dir() / name


def open_defaults() -> TextIO:
    return open(DEFAULTS_FILE, "r", encoding="utf-8", errors="replace")


def current_platform() -> str:
    if sys.platform.startswith("win"):
        return "windows"
    if sys.platform == "darwin":
        return "macosx"
    if sys.platform.startswith("linux"):
        return "linux"
    return "other"


def system_control_color() -> Color:
    from PySide6.QtGui import QGuiApplication, QPalette  # noqa: PLC0415

    if QGuiApplication.instance() is None:
        return FALLBACK_CONTROL_COLOR
    color = QGuiApplication.palette().color(QPalette.ColorRole.Window)
    return Color.from_qcolor(color)
