"""Display width and script helpers used when breaking lines."""

from wcwidth import wcwidth

from .constants import FlowConstants


def advance_column(column: int, ch: str) -> int:
    """Return the column after drawing ch at column."""
    if ch == "\t":
        return (column // FlowConstants.TAB_WIDTH + 1) * FlowConstants.TAB_WIDTH
    width = wcwidth(ch)
    # Control and combining characters take no room
    return column + width if width > 0 else column


def string_width(text: str) -> int:
    column = 0
    for ch in text:
        column = advance_column(column, ch)
    return column


def is_wide_char(ch: str) -> bool:
    """True for double-width characters (CJK ideographs, kana, fullwidth forms)."""
    return wcwidth(ch) == 2


def requires_interword_space(ch: str) -> bool:
    """Whether rejoining a line broken next to ch needs a space.

    Scripts written in double-width characters run words together, so a
    break next to them is undone by simply removing it.
    """
    return not is_wide_char(ch)
