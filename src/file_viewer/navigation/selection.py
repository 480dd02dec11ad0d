"""Anchor-based selection in character or whole-line mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional, Tuple

from file_viewer.document import ComposedView

from .viewport import Cursor

SelectionMode = Literal["char", "line"]
Span = Tuple[int, int, int]  # (row, start_col, end_col), end exclusive


def normalize(anchor: Cursor, cursor: Cursor) -> Tuple[Cursor, Cursor]:
    """Order two positions by ``(row, col)`` regardless of travel direction."""

    if anchor <= cursor:
        return anchor, cursor
    return cursor, anchor


@dataclass(frozen=True, slots=True)
class SelectionRange:
    start: Cursor
    end: Cursor
    mode: SelectionMode = "char"

    def spans(self, view: ComposedView) -> List[Span]:
        """Per-row column spans covered by the range."""

        (start_row, start_col), (end_row, end_col) = self.start, self.end
        if self.mode == "line":
            return [(row, 0, view.line_len(row)) for row in range(start_row, end_row + 1)]
        if start_row == end_row:
            return [(start_row, start_col, end_col)]
        spans = [(start_row, start_col, view.line_len(start_row))]
        spans.extend(
            (row, 0, view.line_len(row)) for row in range(start_row + 1, end_row)
        )
        spans.append((end_row, 0, end_col))
        return spans

    def bounds(self, view: ComposedView) -> Tuple[Cursor, Cursor]:
        """Endpoints used for command placeholders.

        Line mode widens the range to the start of the first row and the end
        of the last row.
        """

        if self.mode == "line":
            return (self.start[0], 0), (self.end[0], view.line_len(self.end[0]))
        return self.start, self.end


@dataclass(slots=True)
class Selection:
    anchor: Optional[Cursor] = None
    mode: SelectionMode = "char"

    @property
    def active(self) -> bool:
        return self.anchor is not None

    def open(self, cursor: Cursor, mode: SelectionMode = "char") -> None:
        self.anchor = cursor
        self.mode = mode

    def cancel(self) -> None:
        self.anchor = None

    def range(self, cursor: Cursor) -> Optional[SelectionRange]:
        if self.anchor is None:
            return None
        start, end = normalize(self.anchor, cursor)
        return SelectionRange(start=start, end=end, mode=self.mode)

    def clamp(self, view: ComposedView) -> None:
        if self.anchor is None:
            return
        row = max(0, min(self.anchor[0], view.last_row))
        self.anchor = (row, max(0, min(self.anchor[1], view.line_len(row))))


__all__ = [
    "Selection",
    "SelectionMode",
    "SelectionRange",
    "Span",
    "normalize",
]
