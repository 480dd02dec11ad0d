"""Cursor motions; in visual modes they also drag the selection end."""

from __future__ import annotations

from typing import Callable

from file_viewer.keymaps import ResolutionMatch
from file_viewer.modes.base_mode import ModeContext, ModeResult
from file_viewer.session import ViewerSession

Motion = Callable[[ViewerSession, int], object]


def _apply_motion(context: ModeContext, motion: Motion) -> ModeResult:
    session = context.session
    before = session.cursor
    motion(session, context.height)
    after = session.cursor
    context.bus.emit("cursor.move", {"from": before, "to": after})
    if session.selection.active:
        context.bus.emit(
            "visual.selection",
            {
                "anchor": session.selection.anchor,
                "cursor": after,
                "mode": session.selection.mode,
            },
        )
    return ModeResult(consumed=True, status="motion")


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.move_left)


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.move_right)


def move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.move_down)


def move_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.move_up)


def word_forward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.word_forward)


def word_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.word_backward)


def paragraph_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.paragraph_down)


def paragraph_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.paragraph_up)


def half_page_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.half_page_down)


def half_page_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.half_page_up)


def cursor_top(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.cursor_top)


def cursor_middle(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.cursor_middle)


def cursor_bottom(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.cursor_bottom)


def goto_first_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.goto_first_line)


def goto_last_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _apply_motion(context, ViewerSession.goto_last_line)


__all__ = [
    "cursor_bottom",
    "cursor_middle",
    "cursor_top",
    "goto_first_line",
    "goto_last_line",
    "half_page_down",
    "half_page_up",
    "move_down",
    "move_left",
    "move_right",
    "move_up",
    "paragraph_down",
    "paragraph_up",
    "word_backward",
    "word_forward",
]
