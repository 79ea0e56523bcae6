"""Flowed break insertion: soft breaks that degrade into a trailing space.

A break inserted here is written as ``" \\n"`` so that a reader which
joins lines ending in a space (RFC 2646 format=flowed) gets the original
running text back.
"""

from __future__ import annotations

from typing import Callable, Optional

from .constants import FlowConstants
from .fill import HWS, finish_new_line, whitespace_props
from .model import Document
from .textwidth import requires_interword_space


class ReflowEngine:
    """Inserts soft breaks for the flowed fill modes.

    ``requires_interword_space`` decides whether the text after a break
    would need a space when the break is undone; when it would not, the
    break remembers the exact whitespace it replaced in ``fill_space``.
    """

    def __init__(self, requires_interword_space: Callable[[str], bool] = requires_interword_space):
        self.requires_interword_space = requires_interword_space

    def insert_break(self, document: Document) -> None:
        end = document.point
        beg = document.skip_backward(HWS, end)
        removed = document.substring(beg, end)
        template = whitespace_props(document, beg, end)

        # Insert in front of the old whitespace, then drop it, so markers that
        # followed the whitespace land at the start of the new line
        document.goto(beg)
        document.insert(" ", props=template)
        document.insert(FlowConstants.NEWLINE, props=template)
        document.delete(beg + 2, end + 2)
        break_pos = beg + 1

        if self._keeps_spacing(document.char_at(break_pos + 1)):
            document.set_fill_space(break_pos, removed)
        if document.options.fill_nobreak_invisible and template.invisible:
            document.put_property(break_pos, break_pos + 1, "invisible", False)
        finish_new_line(document, break_pos)

    def _keeps_spacing(self, following: Optional[str]) -> bool:
        if following is None or following == FlowConstants.NEWLINE:
            return False
        if following in HWS:
            return True
        return not self.requires_interword_space(following)

    __call__ = insert_break
