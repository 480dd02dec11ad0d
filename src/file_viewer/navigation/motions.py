"""Word and paragraph motions over the composed view.

Motions compute a target from raw bytes and write it into the viewport; the
caller is responsible for ``Viewport.ensure_visible`` afterwards.
"""

from __future__ import annotations

from typing import Callable, Optional

from file_viewer.document import (
    ComposedView,
    is_blank,
    is_punct_byte,
    is_whitespace_byte,
    is_word_byte,
)

from .viewport import Cursor, Viewport

BytePredicate = Callable[[int], bool]


def _byte_at(view: ComposedView, row: int, col: int) -> Optional[int]:
    text = view.text(row)
    return text[col] if col < len(text) else None


def _byte_before(view: ComposedView, row: int, col: int) -> Optional[int]:
    if col > 0:
        return view.text(row)[col - 1]
    if row > 0:
        previous = view.text(row - 1)
        return previous[-1] if previous else None
    return None


def _skip_run(view: ComposedView, row: int, col: int, pred: BytePredicate) -> int:
    """Advance within one row while ``pred`` holds; the row end stops the run."""

    text = view.text(row)
    while col < len(text) and pred(text[col]):
        col += 1
    return col


def _skip_forward(
    view: ComposedView, row: int, col: int, pred: BytePredicate
) -> Cursor:
    """Advance while ``pred`` holds, continuing onto following rows."""

    last = len(view) - 1
    while True:
        col = _skip_run(view, row, col, pred)
        if col < view.line_len(row) or row >= last:
            return (row, col)
        row += 1
        col = 0


def _skip_backward(
    view: ComposedView, row: int, col: int, pred: BytePredicate
) -> Cursor:
    """Step back while ``pred`` holds for the preceding byte.

    At a row start the position first moves to the end of the previous
    non-empty row, so a line break is always crossed before skipping.
    """

    while True:
        if row == 0 and col == 0:
            return (row, col)
        if col == 0:
            row -= 1
            col = view.line_len(row)
            if col == 0:
                continue
        text = view.text(row)
        while col > 0 and pred(text[col - 1]):
            col -= 1
        return (row, col)


def word_forward(view: ComposedView, viewport: Viewport) -> None:
    if not len(view):
        return
    row, col = viewport.cursor
    current = _byte_at(view, row, col)
    if current is not None:
        if is_whitespace_byte(current):
            row, col = _skip_forward(view, row, col, is_whitespace_byte)
        elif is_word_byte(current):
            col = _skip_run(view, row, col, is_word_byte)
        else:
            col = _skip_run(view, row, col, is_punct_byte)

    row, col = _skip_forward(view, row, col, is_whitespace_byte)

    row = min(row, len(view) - 1)
    viewport.set_cursor(row, min(col, view.line_len(row)))


def word_backward(view: ComposedView, viewport: Viewport) -> None:
    row, col = viewport.cursor
    if not len(view) or (row == 0 and col == 0):
        return

    row, col = _skip_backward(view, row, col, is_whitespace_byte)

    previous = _byte_before(view, row, col)
    if previous is not None:
        pred = is_word_byte if is_word_byte(previous) else is_punct_byte
        row, col = _skip_backward(view, row, col, pred)

    viewport.set_cursor(row, col)


def paragraph_down(view: ComposedView, viewport: Viewport) -> None:
    if not len(view):
        return
    for row in range(viewport.row + 1, len(view)):
        if is_blank(view.text(row)):
            viewport.set_cursor(row, 0)
            return
    viewport.set_cursor(len(view) - 1, 0)


def paragraph_up(view: ComposedView, viewport: Viewport) -> None:
    if viewport.row == 0:
        return
    for row in range(viewport.row - 1, -1, -1):
        if is_blank(view.text(row)):
            viewport.set_cursor(row, 0)
            return
    viewport.set_cursor(0, 0)


__all__ = [
    "paragraph_down",
    "paragraph_up",
    "word_backward",
    "word_forward",
]
