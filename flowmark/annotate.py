"""Visible markers for hard line breaks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .constants import FlowConstants
from .model import Document


@dataclass
class RenderValue:
    """What to draw in place of a line break: a glyph, then the break.

    Renderers decide whether to redraw by identity, so a new instance is
    built for every annotation even when an equal one is already in place.
    """
    glyph: str
    text: str = FlowConstants.NEWLINE

    def __str__(self) -> str:
        return self.glyph + self.text


class NewlineAnnotator:
    """Sets or clears the display override of every break in a region."""

    def __init__(self, glyph: Optional[str] = None):
        self.glyph = glyph or FlowConstants.HARD_NEWLINE_GLYPH

    def annotate(self, document: Document, beg: int, end: int) -> None:
        """Hard breaks in [beg, end) get a marker; soft ones lose theirs."""
        for pos in document.breaks(beg, end):
            if document.props_at(pos).hard:
                document.set_display(pos, RenderValue(self.glyph))
            else:
                document.set_display(pos, None)

    __call__ = annotate
