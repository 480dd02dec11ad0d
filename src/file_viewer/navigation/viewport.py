"""Cursor and scroll state with clamped single-step primitives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from file_viewer.document import ComposedView

Cursor = Tuple[int, int]  # (row, column) in composed-view coordinates


@dataclass(slots=True)
class Viewport:
    """Cursor position plus the index of the first visible row.

    Every operation takes the current ``ComposedView`` because row indices
    are only valid against the view they were computed from.
    """

    row: int = 0
    col: int = 0
    scroll: int = 0

    @property
    def cursor(self) -> Cursor:
        return (self.row, self.col)

    def set_cursor(self, row: int, col: int) -> None:
        self.row = row
        self.col = col

    def clamp(self, view: ComposedView) -> None:
        """Pull row, column, and scroll back inside ``view``."""

        last = view.last_row
        self.row = max(0, min(self.row, last))
        self.col = max(0, min(self.col, view.line_len(self.row)))
        self.scroll = max(0, min(self.scroll, last))

    def _clamp_col(self, view: ComposedView) -> None:
        length = view.line_len(self.row)
        if self.col > length:
            self.col = length

    def move_left(self, view: ComposedView) -> None:
        del view
        if self.col > 0:
            self.col -= 1

    def move_right(self, view: ComposedView) -> None:
        if self.col < view.line_len(self.row):
            self.col += 1

    def move_down(self, view: ComposedView, height: int) -> None:
        if self.row + 1 >= len(view):
            return
        self.row += 1
        if self.row >= self.scroll + height:
            self.scroll = max(0, self.row - height + 1)
        self._clamp_col(view)

    def move_up(self, view: ComposedView) -> None:
        if self.row == 0:
            return
        self.row -= 1
        if self.row < self.scroll:
            self.scroll = self.row
        self._clamp_col(view)

    def ensure_visible(self, height: int) -> None:
        height = max(1, height)
        if self.row >= self.scroll + height:
            self.scroll = self.row - height + 1
        if self.row < self.scroll:
            self.scroll = self.row

    def half_page_down(self, view: ComposedView, height: int) -> None:
        # Repeated single steps, so the document end truncates the distance.
        for _ in range(max(0, height) // 2):
            self.move_down(view, height)

    def half_page_up(self, view: ComposedView, height: int) -> None:
        for _ in range(max(0, height) // 2):
            self.move_up(view)

    def cursor_top(self, view: ComposedView) -> None:
        self.row = min(self.scroll, view.last_row)
        self._clamp_col(view)

    def cursor_middle(self, view: ComposedView, height: int) -> None:
        self.row = min(self.scroll + max(0, height) // 2, view.last_row)
        self._clamp_col(view)

    def cursor_bottom(self, view: ComposedView, height: int) -> None:
        self.row = min(self.scroll + max(1, height) - 1, view.last_row)
        self._clamp_col(view)

    def goto_first_line(self) -> None:
        self.row = 0
        self.col = 0

    def goto_last_line(self, view: ComposedView) -> None:
        if len(view):
            self.row = len(view) - 1
            self.col = 0


__all__ = ["Cursor", "Viewport"]
