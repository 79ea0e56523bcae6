"""Generic line filling: the host side that break functions plug into.

``fill_region`` decides where lines break and delegates the actual break
insertion to the document's break function, which is the seam the flowed
reflow engine replaces.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from .constants import FlowConstants
from .model import CharProps, Document
from .textwidth import advance_column, requires_interword_space, string_width

HWS = FlowConstants.HORIZONTAL_WHITESPACE

BreakFunction = Callable[[Document], Any]


def whitespace_props(document: Document, beg: int, end: int) -> CharProps:
    """Inheritable attributes of the whitespace [beg, end) about to be replaced.

    With no whitespace, fall back to the text after the spot, then before it.
    """
    if beg < end:
        return document.props_at(beg).inherited()
    following = document.char_at(end)
    if following is not None and following != FlowConstants.NEWLINE:
        return document.props_at(end).inherited()
    if beg > 0:
        return document.props_at(beg - 1).inherited()
    return CharProps()


def indent_to_left_margin(document: Document, margin: int) -> None:
    """Replace the indentation at point with ``margin`` spaces."""
    beg = document.point
    document.delete(beg, document.skip_forward(HWS, beg))
    document.goto(beg)
    document.insert(" " * margin, inherit=True, before_markers=True)


def finish_new_line(document: Document, break_pos: int) -> None:
    """Indent the line following a new break and insert the fill prefix."""
    options = document.options
    margin = document.props_at(break_pos).left_margin
    if margin is None:
        margin = options.left_margin
    prefix = options.fill_prefix
    if margin or prefix:
        indent_to_left_margin(document, margin)
    if prefix:
        # Markers that sat after the old whitespace must end up after the prefix
        document.insert(prefix, inherit=True, before_markers=True)


def default_insert_break(document: Document) -> None:
    """Replace the whitespace before point with a plain line break."""
    end = document.point
    beg = document.skip_backward(HWS, end)
    template = whitespace_props(document, beg, end)
    if document.options.fill_nobreak_invisible:
        template.invisible = False
    document.goto(beg)
    document.insert(FlowConstants.NEWLINE, props=template)
    document.delete(beg + 1, end + 1)
    finish_new_line(document, beg)


def _content_start(document: Document, line_start: int, line_end: int) -> int:
    """Skip a line's indentation and fill prefix."""
    pos = document.skip_forward(HWS, line_start, limit=line_end)
    prefix = document.options.fill_prefix
    if prefix:
        if document.substring(pos, pos + len(prefix)) == prefix:
            pos += len(prefix)
        elif document.substring(line_start, line_start + len(prefix)) == prefix:
            pos = line_start + len(prefix)
        pos = document.skip_forward(HWS, pos, limit=line_end)
    return min(pos, line_end)


def find_break_point(document: Document, line_start: int, limit: int) -> Optional[int]:
    """Return where to break the text [line_start, limit), or None if it fits.

    Breaks go before a word that follows whitespace, or between two
    characters when either needs no interword space. The last break that
    keeps the line within the fill column wins; an overlong first word is
    broken after instead.
    """
    fill_column = document.options.fill_column
    text = document.substring(line_start, limit)
    if string_width(text.rstrip(HWS)) <= fill_column:
        return None
    content_start = _content_start(document, line_start, limit)
    best = None
    column = 0
    ink_column = 0  # Width up to the last non-blank character
    for offset, ch in enumerate(text):
        pos = line_start + offset
        if pos > content_start and ch not in HWS:
            prev = text[offset - 1]
            if (prev in HWS or not requires_interword_space(prev)
                    or not requires_interword_space(ch)):
                if ink_column <= fill_column:
                    best = pos
                else:
                    if best is None:
                        best = pos
                    break
        column = advance_column(column, ch)
        if ch not in HWS:
            ink_column = column
    return best


def _is_blank(document: Document, beg: int, end: int) -> bool:
    return not document.substring(beg, end).strip(HWS)


def _joiner(document: Document, before: int, after: int, fill_space: Optional[str]) -> str:
    if fill_space is not None:
        return fill_space
    left = document.char_before(before)
    right = document.char_at(after)
    if left is None or right is None or FlowConstants.NEWLINE in (left, right):
        return ""
    if not requires_interword_space(left) or not requires_interword_space(right):
        return ""
    return " "


def unfill_region(document: Document, beg: int, end: int) -> int:
    """Join the soft breaks in [beg, end) back into running text.

    A break tagged with ``fill_space`` is replaced, together with the space
    in front of it, by that text. Other soft breaks become a single space
    between words. Hard breaks stay. Returns the new end of the region.
    """
    end_marker = document.make_marker(end)
    pos = beg
    try:
        while True:
            brk = document.find(FlowConstants.NEWLINE, pos, end_marker.position)
            if brk == -1:
                break
            props = document.props_at(brk)
            line_end = document.line_end(brk + 1)
            if (props.hard or _is_blank(document, document.line_beginning(brk), brk)
                    or _is_blank(document, brk + 1, line_end)):
                # Blank lines separate paragraphs even without hard breaks
                pos = brk + 1
                continue
            after = _content_start(document, brk + 1, line_end)
            before = document.skip_backward(HWS, brk, limit=document.line_beginning(brk))
            joiner = _joiner(document, before, after, props.fill_space)
            document.delete(before, after)
            document.goto(before)
            document.insert(joiner, inherit=True)
            pos = before + len(joiner)
        return end_marker.position
    finally:
        document.delete_marker(end_marker)


def fill_region(document: Document, beg: int, end: int,
                insert_break: Optional[BreakFunction] = None) -> None:
    """Rewrap the paragraphs in [beg, end) at the document's fill column."""
    breaker = insert_break or document.break_function or default_insert_break
    with document.save_excursion():
        end_marker = document.make_marker(end, insertion_type=True)
        try:
            unfill_region(document, beg, end_marker.position)
            pos = document.line_beginning(beg)
            while pos < end_marker.position:
                line_end = min(document.line_end(pos), end_marker.position)
                brk = find_break_point(document, pos, line_end)
                if brk is None:
                    pos = line_end + 1
                    continue
                document.goto(brk)
                breaker(document)
                next_line = document.line_beginning(document.point)
                if next_line <= pos:
                    break
                pos = next_line
        finally:
            document.delete_marker(end_marker)


def auto_fill(document: Document) -> bool:
    """Break the current line before point if it runs past the fill column.

    Returns True when a break was inserted.
    """
    if not document.options.auto_fill:
        return False
    line_start = document.line_beginning()
    brk = find_break_point(document, line_start, document.point)
    if brk is None:
        return False
    breaker = document.break_function or default_insert_break
    point_marker = document.make_marker(document.point, insertion_type=True)
    try:
        document.goto(brk)
        breaker(document)
    finally:
        document.goto(point_marker.position)
        document.delete_marker(point_marker)
    return True


def self_insert(document: Document, text: str) -> None:
    """Type text at point, auto-filling at spaces and line ends."""
    for ch in text:
        if ch in (" ", FlowConstants.NEWLINE):
            auto_fill(document)
        if ch == FlowConstants.NEWLINE:
            document.newline()
        else:
            document.insert(ch, inherit=True)
