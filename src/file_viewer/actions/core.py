"""Mode transitions and other actions shared across modes."""

from __future__ import annotations

from file_viewer.keymaps import ResolutionMatch
from file_viewer.modes.base_mode import ModeContext, ModeResult


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="normal", message="exit_to_normal")


def enter_visual_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="visual", message="enter_visual")


def enter_visual_line_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="visual_line", message="enter_visual_line")


def enter_command_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="command", message="enter_command")


def enter_search_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="search", message="enter_search")


def enter_help_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="help", message="enter_help")


def cancel_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.session.cancel_selection()
    context.bus.emit("visual.cancel", None)
    return ModeResult(consumed=True, switch_to="normal", message="selection_cancel")


def quit_viewer(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.bus.emit("viewer.quit", None)
    return ModeResult(consumed=True, status="quit", message="quit")


__all__ = [
    "cancel_selection",
    "enter_command_mode",
    "enter_help_mode",
    "enter_search_mode",
    "enter_visual_line_mode",
    "enter_visual_mode",
    "exit_to_normal_mode",
    "quit_viewer",
]
