"""Commands that switch hard newlines and flowed filling on and off."""

from __future__ import annotations

import logging
import re
from typing import Optional

from .annotate import NewlineAnnotator
from .dispatch import ModeDispatcher
from .fill import BreakFunction, default_insert_break
from .model import Document
from .reflow import ReflowEngine
from .session import SessionKeys, get_session
from .tracker import ChangeTracker

logger = logging.getLogger(__name__)

# Optional indentation, then '-' or '*' or a number with '.' or ')', then one space
_ITEM_START = re.compile(r"^\s*(?:[-*]|\d+[.)]) (?=\S)")


def _starts_paragraph(line: str) -> bool:
    """Whether a line would begin a new paragraph after a break."""
    if not line.strip():
        return True
    if line[0] in " \t":
        return True
    return bool(_ITEM_START.match(line))


def mark_paragraph_breaks(document: Document) -> int:
    """Guess which existing breaks are hard and mark them.

    A break is hard when its own line is blank or the next line is blank,
    indented, or starts a bullet or numbered item. Returns how many breaks
    were marked.
    """
    text = document.text
    marked = 0
    for pos in list(document.breaks(0, len(document))):
        line = text[document.line_beginning(pos):pos]
        next_line = text[pos + 1:document.line_end(pos + 1)]
        if not line.strip() or _starts_paragraph(next_line):
            document.set_hard(pos, pos + 1)
            marked += 1
    return marked


class HardNewlinesMode:
    """Shows a marker on hard breaks and makes typed newlines hard."""

    def __init__(self, document: Document, glyph: Optional[str] = None):
        self.document = document
        glyph = glyph or get_session().get(SessionKeys.HARD_NEWLINE_GLYPH)
        self.tracker = ChangeTracker(document, NewlineAnnotator(glyph))

    @property
    def enabled(self) -> bool:
        return self.tracker.attached

    def enable(self, guess: bool = False) -> None:
        """Turn the mode on; with ``guess`` infer hard breaks from layout."""
        if self.enabled:
            return
        self.document.options.use_hard_newlines = True
        self.tracker.attach()
        if guess:
            marked = mark_paragraph_breaks(self.document)
            logger.debug(f"Marked {marked} existing breaks hard")
        self.tracker.on_edit(0, len(self.document))

    def disable(self) -> None:
        if not self.enabled:
            return
        self.tracker.detach()
        self.document.options.use_hard_newlines = False
        for pos in self.document.breaks(0, len(self.document)):
            self.document.set_display(pos, None)

    def toggle(self) -> bool:
        if self.enabled:
            self.disable()
        else:
            self.enable()
        return self.enabled


class FlowedFillMode:
    """Routes the document's line breaking through a ModeDispatcher.

    Auto-fill is turned off while the mode is on, since the flowed fill
    does the wrapping itself.
    """

    def __init__(self, document: Document, engine: Optional[ReflowEngine] = None):
        self.document = document
        self.engine = engine or ReflowEngine()
        self.dispatcher: Optional[ModeDispatcher] = None
        self._saved_break: Optional[BreakFunction] = None
        self._saved_auto_fill = False

    @property
    def enabled(self) -> bool:
        return self.dispatcher is not None

    def enable(self) -> None:
        if self.enabled:
            return
        self._saved_break = self.document.break_function
        self._saved_auto_fill = self.document.options.auto_fill
        self.dispatcher = ModeDispatcher(self._saved_break or default_insert_break, self.engine)
        self.document.break_function = self.dispatcher
        self.document.options.auto_fill = False
        logger.debug(f"Flowed fill installed for {self.document.options.major_mode} mode")

    def disable(self) -> None:
        if not self.enabled:
            return
        self.document.break_function = self._saved_break
        self.document.options.auto_fill = self._saved_auto_fill
        self.dispatcher = None
