"""Sketch source highlighter driven by the ``editor.<token>.style`` preferences."""

from __future__ import annotations

import re

from PySide6.QtGui import QSyntaxHighlighter, QTextCharFormat

from sketchpad.managers.logger import get_logger
from sketchpad.managers.preferences import PreferenceStore

log = get_logger(__name__)

# ---------------------------------------------------------------------------
# Token classes
# ---------------------------------------------------------------------------
KEYWORDS_1 = (
    "boolean byte char class color double else extends false final float for "
    "if import int long new null private public return static super this true "
    "void while"
).split()

KEYWORDS_2 = (
    "background beginShape ellipse endShape fill line noFill noStroke point "
    "rect size stroke strokeWeight text triangle vertex"
).split()

_RULES: tuple[tuple[str, re.Pattern], ...] = (
    ("keyword1", re.compile(r"\b(?:%s)\b" % "|".join(KEYWORDS_1))),
    ("keyword2", re.compile(r"\b(?:%s)\b" % "|".join(KEYWORDS_2))),
    ("literal1", re.compile(r'"(?:[^"\\]|\\.)*"|\'(?:[^\'\\]|\\.)\'')),
    ("comment1", re.compile(r"//[^\n]*")),
)

_BLOCK_START = re.compile(r"/\*")
_BLOCK_END = re.compile(r"\*/")
_IN_BLOCK_COMMENT = 1


class SketchHighlighter(QSyntaxHighlighter):
    """Colors keywords, literals and comments in a QTextDocument."""

    def __init__(self, store: PreferenceStore, document) -> None:
        super().__init__(document)
        self._store = store
        self._formats: dict[str, QTextCharFormat] = {}
        self.reload_styles()

    def reload_styles(self) -> None:
        """Re-read the styles from the store and rehighlight."""
        self._formats.clear()
        for token in ("keyword1", "keyword2", "literal1", "comment1", "comment2"):
            try:
                self._formats[token] = self._store.get_style(token).to_char_format()
            except ValueError as exc:
                log.warning("Skipping style %s: %s", token, exc)
        self.rehighlight()

    def highlightBlock(self, text: str) -> None:
        for token, pattern in _RULES:
            fmt = self._formats.get(token)
            if fmt is None:
                continue
            for m in pattern.finditer(text):
                self.setFormat(m.start(), m.end() - m.start(), fmt)
        self._highlight_block_comments(text)

    def _highlight_block_comments(self, text: str) -> None:
        fmt = self._formats.get("comment2")
        self.setCurrentBlockState(0)
        start, body = 0, 0
        if self.previousBlockState() != _IN_BLOCK_COMMENT:
            m = _BLOCK_START.search(text)
            start = m.start() if m else -1
            body = start + 2
        while start >= 0:
            end = _BLOCK_END.search(text, body)
            if end is None:
                self.setCurrentBlockState(_IN_BLOCK_COMMENT)
                length = len(text) - start
            else:
                length = end.end() - start
            if fmt is not None:
                self.setFormat(start, length, fmt)
            m = _BLOCK_START.search(text, start + length)
            start = m.start() if m else -1
            body = start + 2
