"""Value types produced by the typed preference getters."""

from __future__ import annotations

import dataclasses

from PySide6.QtGui import QColor, QFont, QTextCharFormat


@dataclasses.dataclass(frozen=True)
class Color:
    """24-bit RGB color; each channel is 0-255."""

    red: int
    green: int
    blue: int

    @classmethod
    def from_rgb(cls, value: int) -> "Color":
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    @classmethod
    def from_qcolor(cls, color: QColor) -> "Color":
        return cls(color.red(), color.green(), color.blue())

    @property
    def rgb(self) -> int:
        return (self.red << 16) | (self.green << 8) | self.blue

    def hex(self) -> str:
        """Return ``#rrggbb`` with exactly two hex digits per channel."""
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def to_qcolor(self) -> QColor:
        return QColor(self.red, self.green, self.blue)


@dataclasses.dataclass(frozen=True)
class FontSpec:
    """Font descriptor parsed from ``name,styleflags,size``."""

    PLAIN = 0
    BOLD = 1
    ITALIC = 2

    name: str
    style: int = PLAIN
    size: int = 12

    @property
    def bold(self) -> bool:
        return bool(self.style & self.BOLD)

    @property
    def italic(self) -> bool:
        return bool(self.style & self.ITALIC)

    def to_qfont(self) -> QFont:
        font = QFont(self.name, self.size)
        font.setBold(self.bold)
        font.setItalic(self.italic)
        if self.name.lower().startswith("mono"):
            font.setStyleHint(QFont.StyleHint.Monospace)
        return font


@dataclasses.dataclass(frozen=True)
class SyntaxStyle:
    """Coloring for one class of source tokens."""

    color: Color
    bold: bool = False
    italic: bool = False

    def to_char_format(self) -> QTextCharFormat:
        fmt = QTextCharFormat()
        fmt.setForeground(self.color.to_qcolor())
        fmt.setFontWeight(QFont.Weight.Bold if self.bold else QFont.Weight.Normal)
        fmt.setFontItalic(self.italic)
        return fmt
