"""
Pytest configuration and fixtures for the test suite.

Sets up offscreen Qt rendering and a throwaway settings directory before
any ``sketchpad`` module is imported (the logger creates its log folder
on first use).
"""
import io
import os
import tempfile

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ["SKETCHPAD_SETTINGS_DIR"] = tempfile.mkdtemp(prefix="sketchpad-tests-")

from sketchpad.managers.preferences import PreferenceStore  # noqa: E402
from sketchpad.models import Color  # noqa: E402

DEFAULTS = """\
# bundled defaults used by the tests
sketchbook.path=
sketchbook.closing_last_window_quits=false
export.applet.separate_jar_files=false
editor.font=Monaco,plain,12
editor.font.macosx=Monaco,plain,14
editor.external=false
editor.bgcolor=#ffffff
editor.fgcolor=#000000
editor.keyword1.style=#cc6600,plain
editor.keyword2.style=#cc6600,bold
editor.literal1.style=#006699,plain
editor.comment1.style=#777755,italic
editor.comment2.style=#777755,italic
run.options.memory=false
run.options.memory.initial=64
run.options.memory.maximum=256
update.check=true
"""

CONTROL_COLOR = Color(0xEE, 0xEE, 0xEE)


class FakeReporter:
    """Records error / warning calls instead of showing message boxes."""

    def __init__(self):
        self.errors = []
        self.warnings = []

    def error(self, title, message, exc=None):
        self.errors.append((title, message, exc))

    def warning(self, title, message, exc=None):
        self.warnings.append((title, message, exc))


@pytest.fixture
def reporter():
    return FakeReporter()


@pytest.fixture
def settings_dir(tmp_path):
    path = tmp_path / "settings"
    path.mkdir()
    return path


@pytest.fixture
def make_store(settings_dir, reporter):
    """Factory building a store over in-memory defaults; not yet initialised."""

    def _make(defaults=DEFAULTS, platform="linux"):
        return PreferenceStore(
            settings_file=lambda name: settings_dir / name,
            open_defaults=lambda: io.StringIO(defaults),
            reporter=reporter,
            platform=platform,
            control_color=lambda: CONTROL_COLOR,
        )

    return _make


@pytest.fixture
def store(make_store):
    s = make_store()
    s.initialize()
    return s
