"""Preference store backed by flat ``key=value`` text files.

Start-up order (see :meth:`PreferenceStore.initialize`)::

    lib/preferences.txt  →  key.<platform> overlay  →  defaults snapshot
        →  run.window.bgcolor from the system palette
        →  <settings dir>/preferences.txt  (created from the above if missing)

Values are always stored as strings; the typed getters coerce on read.
"""

from __future__ import annotations

import os
import pathlib
import re
from typing import Callable, Iterator, Optional, TextIO, Union

from sketchpad.constants import (
    APP_NAME,
    DEFAULT_FONT_SIZE,
    KEY_RUN_WINDOW_BGCOLOR,
    PLATFORMS,
    PREFS_FILE,
)
from sketchpad.managers import environment
from sketchpad.managers.logger import get_logger
from sketchpad.models import Color, FontSpec, SyntaxStyle

log = get_logger(__name__)

Source = Union[TextIO, str, os.PathLike]

_INT_RE = re.compile(r"[-+]?\d+")
_COLOR_RE = re.compile(r"#([0-9a-fA-F]{6})")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")
_INT32_MIN, _INT32_MAX = -(2 ** 31), 2 ** 31 - 1


def parse_int(text: Optional[str]) -> int:
    """Parse a signed decimal 32-bit integer, raising ``ValueError`` otherwise."""
    if text is None or not _INT_RE.fullmatch(text):
        raise ValueError(f"expecting an integer, got {text!r}")
    value = int(text)
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _style_flags(text: str) -> tuple[bool, bool]:
    return "bold" in text, "italic" in text


class PreferenceStore:
    """Key → string mapping with a defaults snapshot and file persistence."""

    def __init__(
        self,
        settings_file: Callable[[str], pathlib.Path] = environment.settings_file,
        open_defaults: Callable[[], TextIO] = environment.open_defaults,
        reporter=None,
        platform: Optional[str] = None,
        control_color: Callable[[], Color] = environment.system_control_color,
    ) -> None:
        if reporter is None:
            from sketchpad.dialogs.messages import MessageReporter  # noqa: PLC0415
            reporter = MessageReporter()
        self._settings_file = settings_file
        self._open_defaults = open_defaults
        self._reporter = reporter
        self._platform = platform or environment.current_platform()
        if self._platform not in PLATFORMS:
            raise ValueError(f"unknown platform {self._platform!r}, expected one of {PLATFORMS}")
        self._control_color = control_color

        self._table: dict[str, str] = {}
        self._defaults: dict[str, str] = {}
        self._file: Optional[pathlib.Path] = None

    # ------------------------------------------------------------------
    # Start-up
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        try:
            with self._open_defaults() as fh:
                self.load(fh)
        except (OSError, UnicodeDecodeError) as exc:
            self._reporter.error(
                "Preferences",
                "Could not read default settings.\n"
                f"You'll need to reinstall {APP_NAME}.",
                exc,
            )

        self._apply_platform_overlay()
        self._defaults = dict(self._table)

        # Theme dependent, so it cannot live in the defaults file
        self.set_color(KEY_RUN_WINDOW_BGCOLOR, self._control_color())

        self._file = self._settings_file(PREFS_FILE)
        if not self._file.exists():
            log.info("No preferences at %s, writing defaults", self._file)
            self.save()
        else:
            try:
                self.load(self._file)
            except (OSError, UnicodeDecodeError) as exc:
                self._reporter.error(
                    "Error reading preferences",
                    "Error reading the preferences file. Please delete (or move)\n"
                    f"{self._file} and restart {APP_NAME}.",
                    exc,
                )
        log.debug("Preferences initialised: %d keys (%s)", len(self._table), self._platform)

    def _apply_platform_overlay(self) -> None:
        suffix = "." + self._platform
        for key, value in list(self._table.items()):
            if key.endswith(suffix):
                self._table[key[: -len(suffix)]] = value

    @property
    def preferences_file(self) -> Optional[pathlib.Path]:
        return self._file

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self, source: Source) -> None:
        """Merge ``key=value`` lines from *source* (a text stream or a path)."""
        if hasattr(source, "read"):
            self._parse(source)
            return
        # Undecodable bytes become U+FFFD instead of failing the whole file
        with open(source, "r", encoding="utf-8", errors="replace") as fh:
            self._parse(fh)

    def _parse(self, lines) -> None:
        for line in lines:
            line = line.rstrip("\r\n")
            if not line or line[0] == "#":
                continue
            key, sep, value = line.partition("=")
            if not sep:
                continue
            self._table[key.strip()] = value.strip()

    def save(self) -> None:
        """Write every pair to the user file; failures are reported, not raised."""
        path = self._file or self._settings_file(PREFS_FILE)
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8", newline="\n") as fh:
                for key in sorted(self._table):
                    fh.write(f"{key}={self._table[key]}\n")
            os.replace(tmp, path)
        except OSError as exc:
            self._reporter.warning("Preferences", "Error while saving the settings file", exc)
            return
        log.debug("Preferences saved to %s", path)

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[str]:
        return self._table.get(key)

    def get_default(self, key: str) -> Optional[str]:
        return self._defaults.get(key)

    def set(self, key: str, value: str) -> None:
        self._table[key] = value

    def keys(self) -> list[str]:
        return list(self._table)

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    # ------------------------------------------------------------------
    # Typed access
    # ------------------------------------------------------------------

    def get_boolean(self, key: str) -> bool:
        value = self.get(key)
        return value is not None and value.lower() == "true"

    def set_boolean(self, key: str, value: bool) -> None:
        self.set(key, "true" if value else "false")

    def get_integer(self, key: str) -> int:
        return parse_int(self.get(key))

    def set_integer(self, key: str, value: int) -> None:
        self.set(key, str(value))

    def get_color(self, key: str) -> Optional[Color]:
        """Return the ``#rrggbb`` value at *key*, or None if absent or malformed."""
        value = self.get(key)
        if value is None:
            return None
        match = _COLOR_RE.fullmatch(value)
        if match is None:
            return None
        return Color.from_rgb(int(match.group(1), 16))

    def set_color(self, key: str, color: Color) -> None:
        self.set(key, color.hex())

    def get_font(self, key: str) -> FontSpec:
        """Parse ``name,styleflags,size``, falling back to the default value.

        When the stored value was unusable it is written back to the working
        mapping: a missing key receives the default, while a malformed value
        is stored again unchanged.
        """
        original = self.get(key)
        value = original
        replace = False
        if value is None:
            value = self.get_default(key)
            replace = True
        pieces = value.split(",") if value is not None else []
        if len(pieces) != 3:
            log.warning("Malformed font for %s: %r, using default", key, value)
            pieces = self._default_font_pieces(key)
            replace = True

        style = FontSpec.PLAIN
        bold, italic = _style_flags(pieces[1])
        if bold:
            style |= FontSpec.BOLD
        if italic:
            style |= FontSpec.ITALIC
        try:
            size = parse_int(pieces[2])
        except ValueError:
            size = DEFAULT_FONT_SIZE
        font = FontSpec(pieces[0], style, size)

        if replace:
            self.set(key, value if original is None else original)
        return font

    def _default_font_pieces(self, key: str) -> list[str]:
        value = self.get_default(key)
        pieces = value.split(",") if value is not None else []
        if len(pieces) != 3:
            raise ValueError(f"default font for {key!r} is malformed: {value!r}")
        return pieces

    def get_style(self, what: str) -> SyntaxStyle:
        """Parse ``editor.<what>.style`` as ``[#]rrggbb,styleflags``."""
        key = f"editor.{what}.style"
        value = self.get(key)
        if value is None:
            raise ValueError(f"no style for {key!r}")
        tokens = [t for t in value.split(",") if t]
        if len(tokens) < 2:
            raise ValueError(f"malformed style for {key!r}: {value!r}")
        hex_part = tokens[0][1:] if tokens[0].startswith("#") else tokens[0]
        if not _HEX_RE.fullmatch(hex_part) or int(hex_part, 16) > _INT32_MAX:
            raise ValueError(f"bad style color for {key!r}: {tokens[0]!r}")
        color = Color.from_rgb(int(hex_part, 16) & 0xFFFFFF)
        bold, italic = _style_flags(tokens[1])
        return SyntaxStyle(color, bold=bold, italic=italic)
