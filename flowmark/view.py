"""Terminal rendering of a document with hard-newline markers."""

from typing import Optional

import blessed

from .annotate import RenderValue
from .constants import FlowConstants
from .model import Document


def layout_lines(document: Document) -> tuple[list[str], list[Optional[RenderValue]]]:
    """Split a document into visible lines.

    Returns (lines, displays) where displays[i] is the display override of
    the break ending line i (None for soft breaks and the last line).
    Invisible characters are left out.
    """
    lines: list[str] = []
    displays: list[Optional[RenderValue]] = []
    current: list[str] = []
    for pos, ch in enumerate(document.text):
        props = document.props_at(pos)
        if ch == FlowConstants.NEWLINE:
            lines.append("".join(current))
            displays.append(props.display)
            current = []
        elif not props.invisible:
            current.append(ch)
    lines.append("".join(current))
    displays.append(None)
    return (lines, displays)


class FlowView:
    """Draws a document and works out which lines need redrawing.

    A line is redrawn when its text changed or when the display value of
    its break is not the very object drawn last time. Equal but distinct
    values count as changed.
    """

    def __init__(self, document: Document, terminal: Optional[blessed.Terminal] = None):
        self.document = document
        self.term = terminal or blessed.Terminal()
        self._drawn: list[tuple[str, Optional[RenderValue]]] = []

    def render(self) -> list[str]:
        """Return the lines as they appear on screen, glyphs included."""
        lines, displays = layout_lines(self.document)
        out = []
        for line, display in zip(lines, displays):
            if display is not None:
                line += self.term.dim(display.glyph)
            out.append(line)
        return out

    def redisplay(self) -> list[int]:
        """Return the indexes of lines that changed since the last call."""
        lines, displays = layout_lines(self.document)
        dirty = []
        for i, (line, display) in enumerate(zip(lines, displays)):
            if i >= len(self._drawn):
                dirty.append(i)
                continue
            drawn_line, drawn_display = self._drawn[i]
            if drawn_line != line or drawn_display is not display:
                dirty.append(i)
        self._drawn = list(zip(lines, displays))
        return dirty

    def invalidate(self) -> None:
        """Forget what was drawn so the next redisplay repaints everything."""
        self._drawn = []
