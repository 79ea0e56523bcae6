"""Document model: text plus a per-character metadata table."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterator, Optional

from .constants import FlowConstants

if TYPE_CHECKING:
    from .annotate import RenderValue


@dataclass
class CharProps:
    """Metadata attached to a single character.

    ``hard`` only means something on line breaks. ``display`` and
    ``fill_space`` are owned by the annotator and the reflow engine; the
    remaining fields are inherited by text inserted next to this character.
    """
    hard: bool = False
    display: Optional["RenderValue"] = None
    fill_space: Optional[str] = None
    style: int = 0
    left_margin: Optional[int] = None
    invisible: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    def inherited(self) -> "CharProps":
        """Return a fresh record carrying only the inheritable attributes."""
        return CharProps(
            style=self.style,
            left_margin=self.left_margin,
            invisible=self.invisible,
            extra=dict(self.extra),
        )


@dataclass(eq=False)
class Marker:
    """An offset that follows insertions and deletions.

    A marker with ``insertion_type`` set advances when text is inserted
    exactly at its position; otherwise it stays before the new text.
    """
    position: int
    insertion_type: bool = False


@dataclass
class DocumentOptions:
    """Document-local settings read by the fill and newline machinery."""
    major_mode: str = "text"
    use_hard_newlines: bool = False
    auto_fill: bool = False
    fill_column: int = FlowConstants.DEFAULT_FILL_COLUMN
    fill_prefix: Optional[str] = None
    left_margin: int = 0
    fill_nobreak_invisible: bool = False


ChangeListener = Callable[[int, int], None]


class Document:
    """Mutable text with metadata, markers, a point and change listeners.

    Every content or property mutation notifies listeners once, after the
    fact, with the affected ``[beg, end)`` region in post-edit offsets.
    Display overrides and ``fill_space`` tags are written silently.
    """

    def __init__(self, text: str = "", options: Optional[DocumentOptions] = None):
        self._text = text
        self._props: list[CharProps] = [CharProps() for _ in text]
        self.point = 0
        self.mark: Optional[int] = None
        self.options = options or DocumentOptions()
        # Strategy used by fill commands to break a line at point
        self.break_function: Optional[Callable[["Document"], Any]] = None
        self._markers: list[Marker] = []
        self._listeners: list[ChangeListener] = []

    @classmethod
    def from_text(cls, text: str, hard: bool = False,
                  options: Optional[DocumentOptions] = None) -> "Document":
        """Build a document, optionally marking every existing break hard."""
        doc = cls(text, options)
        if hard:
            for pos in doc.breaks(0, len(doc)):
                doc._props[pos].hard = True
        return doc

    def __len__(self) -> int:
        return len(self._text)

    @property
    def text(self) -> str:
        return self._text

    # --- Queries ---
    def substring(self, beg: int, end: int) -> str:
        return self._text[self._clamp(beg):self._clamp(end)]

    def char_at(self, pos: int) -> Optional[str]:
        if 0 <= pos < len(self._text):
            return self._text[pos]
        return None

    def char_before(self, pos: int) -> Optional[str]:
        return self.char_at(pos - 1)

    def props_at(self, pos: int) -> CharProps:
        """Return the metadata record at pos (a blank record outside the text)."""
        if 0 <= pos < len(self._props):
            return self._props[pos]
        return CharProps()

    def find(self, sub: str, beg: int = 0, end: Optional[int] = None) -> int:
        return self._text.find(sub, beg, end if end is not None else len(self._text))

    def breaks(self, beg: int, end: int) -> Iterator[int]:
        """Yield the offsets of line breaks in [beg, end) in document order."""
        beg, end = self._clamp(beg), self._clamp(end)
        pos = self._text.find(FlowConstants.NEWLINE, beg, end)
        while pos != -1:
            yield pos
            pos = self._text.find(FlowConstants.NEWLINE, pos + 1, end)

    def line_beginning(self, pos: Optional[int] = None) -> int:
        pos = self.point if pos is None else self._clamp(pos)
        return self._text.rfind(FlowConstants.NEWLINE, 0, pos) + 1

    def line_end(self, pos: Optional[int] = None) -> int:
        pos = self.point if pos is None else self._clamp(pos)
        idx = self._text.find(FlowConstants.NEWLINE, pos)
        return len(self._text) if idx == -1 else idx

    def skip_backward(self, chars: str, pos: Optional[int] = None, limit: int = 0) -> int:
        """Return the start of the run of ``chars`` ending at pos."""
        pos = self.point if pos is None else self._clamp(pos)
        while pos > limit and self._text[pos - 1] in chars:
            pos -= 1
        return pos

    def skip_forward(self, chars: str, pos: Optional[int] = None,
                     limit: Optional[int] = None) -> int:
        """Return the end of the run of ``chars`` starting at pos."""
        pos = self.point if pos is None else self._clamp(pos)
        limit = len(self._text) if limit is None else self._clamp(limit)
        while pos < limit and self._text[pos] in chars:
            pos += 1
        return pos

    def _clamp(self, pos: int) -> int:
        return max(0, min(pos, len(self._text)))

    def goto(self, pos: int) -> None:
        self.point = self._clamp(pos)

    # --- Markers and listeners ---
    def make_marker(self, pos: int, insertion_type: bool = False) -> Marker:
        marker = Marker(self._clamp(pos), insertion_type)
        self._markers.append(marker)
        return marker

    def delete_marker(self, marker: Marker) -> None:
        if marker in self._markers:
            self._markers.remove(marker)

    def add_change_listener(self, listener: ChangeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, beg: int, end: int) -> None:
        for listener in list(self._listeners):
            listener(beg, end)

    @contextmanager
    def save_excursion(self):
        """Restore point and mark when the block exits, however it exits."""
        point_marker = self.make_marker(self.point)
        saved_mark = self.mark
        try:
            yield self
        finally:
            self.point = point_marker.position
            self.delete_marker(point_marker)
            self.mark = None if saved_mark is None else self._clamp(saved_mark)

    # --- Mutation ---
    def insert(self, text: str, props: Optional[CharProps] = None,
               inherit: bool = False, before_markers: bool = False) -> None:
        """Insert text at point and leave point after it.

        ``props`` is used as a template for every inserted character. With
        ``inherit`` the template comes from the character before point.
        ``before_markers`` pushes every marker sitting at point past the
        new text.
        """
        if not text:
            return
        pos = self.point
        if props is not None:
            template = props
        elif inherit and pos > 0:
            template = self._props[pos - 1].inherited()
        else:
            template = CharProps()
        n = len(text)
        self._text = self._text[:pos] + text + self._text[pos:]
        self._props[pos:pos] = [template.copy() for _ in range(n)]
        for marker in self._markers:
            if marker.position > pos or (
                marker.position == pos and (before_markers or marker.insertion_type)
            ):
                marker.position += n
        if self.mark is not None and (self.mark > pos or (self.mark == pos and before_markers)):
            self.mark += n
        self.point = pos + n
        self._notify(pos, pos + n)

    def delete(self, beg: int, end: int) -> None:
        if beg > end:
            raise ValueError(f"Invalid region [{beg}, {end})")
        beg, end = self._clamp(beg), self._clamp(end)
        if beg == end:
            return
        self._text = self._text[:beg] + self._text[end:]
        del self._props[beg:end]

        def adjust(pos: int) -> int:
            if pos >= end:
                return pos - (end - beg)
            return min(pos, beg)

        for marker in self._markers:
            marker.position = adjust(marker.position)
        self.point = adjust(self.point)
        if self.mark is not None:
            self.mark = adjust(self.mark)
        self._notify(beg, beg)

    def newline(self) -> None:
        """Insert a line break at point; it is hard under use_hard_newlines."""
        props = self._props[self.point - 1].inherited() if self.point > 0 else CharProps()
        props.hard = self.options.use_hard_newlines
        self.insert(FlowConstants.NEWLINE, props=props)

    def set_hard(self, beg: int, end: int, hard: bool = True) -> None:
        """Mark the breaks in [beg, end) hard (or soft)."""
        for pos in self.breaks(beg, end):
            self._props[pos].hard = hard
        self._notify(beg, end)

    def put_property(self, beg: int, end: int, name: str, value: Any) -> None:
        """Set an inherited attribute on [beg, end).

        Names that are not fields of CharProps land in ``extra``.
        """
        if name in ("hard", "display", "fill_space"):
            raise ValueError(f"{name} cannot be set with put_property")
        beg, end = self._clamp(beg), self._clamp(end)
        for props in self._props[beg:end]:
            if hasattr(props, name) and name != "extra":
                setattr(props, name, value)
            else:
                props.extra[name] = value
        self._notify(beg, end)

    def set_display(self, pos: int, value: Optional["RenderValue"]) -> None:
        if 0 <= pos < len(self._props):
            self._props[pos].display = value

    def set_fill_space(self, pos: int, value: Optional[str]) -> None:
        if 0 <= pos < len(self._props):
            self._props[pos].fill_space = value
