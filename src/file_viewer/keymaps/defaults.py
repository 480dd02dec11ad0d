"""Built-in actions and per-mode bindings loaded into every registry."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Mapping, Sequence

from file_viewer.actions import command as command_actions
from file_viewer.actions import core as core_actions
from file_viewer.actions import motion as motion_actions
from file_viewer.actions import prompt as prompt_actions
from file_viewer.actions import search as search_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("core.exit_to_normal", core_actions.exit_to_normal_mode, "Return to normal mode"),
    ActionRef("core.enter_visual", core_actions.enter_visual_mode, "Enter visual mode"),
    ActionRef(
        "core.enter_visual_line",
        core_actions.enter_visual_line_mode,
        "Enter visual line mode",
    ),
    ActionRef("core.enter_command", core_actions.enter_command_mode, "Enter command mode"),
    ActionRef("core.enter_search", core_actions.enter_search_mode, "Search forward"),
    ActionRef("core.enter_help", core_actions.enter_help_mode, "Show this help"),
    ActionRef("core.cancel_selection", core_actions.cancel_selection, "Cancel selection"),
    ActionRef("core.quit", core_actions.quit_viewer, "Quit"),
    ActionRef("motion.left", motion_actions.move_left, "Move cursor left"),
    ActionRef("motion.down", motion_actions.move_down, "Move cursor down"),
    ActionRef("motion.up", motion_actions.move_up, "Move cursor up"),
    ActionRef("motion.right", motion_actions.move_right, "Move cursor right"),
    ActionRef("motion.word_forward", motion_actions.word_forward, "Next word"),
    ActionRef("motion.word_backward", motion_actions.word_backward, "Previous word"),
    ActionRef("motion.paragraph_up", motion_actions.paragraph_up, "Previous paragraph"),
    ActionRef("motion.paragraph_down", motion_actions.paragraph_down, "Next paragraph"),
    ActionRef("motion.half_page_up", motion_actions.half_page_up, "Half page up"),
    ActionRef("motion.half_page_down", motion_actions.half_page_down, "Half page down"),
    ActionRef("motion.screen_top", motion_actions.cursor_top, "Top of screen"),
    ActionRef("motion.screen_middle", motion_actions.cursor_middle, "Middle of screen"),
    ActionRef("motion.screen_bottom", motion_actions.cursor_bottom, "Bottom of screen"),
    ActionRef("motion.first_line", motion_actions.goto_first_line, "Go to first line"),
    ActionRef("motion.last_line", motion_actions.goto_last_line, "Go to last line"),
    ActionRef("search.next_hit", search_actions.next_hit, "Next search match"),
    ActionRef("search.prev_hit", search_actions.prev_hit, "Previous search match"),
    ActionRef("search.submit", search_actions.submit_search, "Run the search"),
    ActionRef("search.clear", search_actions.clear_search, "Clear search and exit"),
    ActionRef(
        "command.submit_line",
        command_actions.submit_command_line,
        "Run the command line",
    ),
    ActionRef("prompt.backspace", prompt_actions.delete_prompt_char, "Delete last character"),
)

# (keys, action id) pairs shared by normal and both visual modes.
_MOTION_KEYS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("h",), "motion.left"),
    (("j",), "motion.down"),
    (("k",), "motion.up"),
    (("l",), "motion.right"),
    (("w",), "motion.word_forward"),
    (("b",), "motion.word_backward"),
    (("{",), "motion.paragraph_up"),
    (("}",), "motion.paragraph_down"),
    (("ctrl+u",), "motion.half_page_up"),
    (("ctrl+d",), "motion.half_page_down"),
    (("H",), "motion.screen_top"),
    (("M",), "motion.screen_middle"),
    (("L",), "motion.screen_bottom"),
    (("g", "g"), "motion.first_line"),
    (("G",), "motion.last_line"),
)

_ACTION_DESCRIPTIONS = {action.id: action.description for action in DEFAULT_ACTIONS}


def _bind(
    mode: str, keys: Sequence[str], action_id: str, description: str | None = None
) -> Binding:
    return Binding(
        id=f"{mode}.{action_id}.{'_'.join(keys)}",
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
        description=description or _ACTION_DESCRIPTIONS[action_id],
    )


def _motion_bindings(mode: str) -> tuple[Binding, ...]:
    return tuple(_bind(mode, keys, action_id) for keys, action_id in _MOTION_KEYS)


def _visual_bindings(mode: str) -> tuple[Binding, ...]:
    return (
        _bind(mode, ("ESC",), "core.cancel_selection"),
        _bind(mode, ("ctrl+c",), "core.cancel_selection"),
        _bind(mode, (":",), "core.enter_command", "Run a command on the selection"),
        _bind(mode, ("?",), "core.enter_help"),
        _bind(mode, ("q",), "core.quit"),
        *_motion_bindings(mode),
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _bind("normal", ("v",), "core.enter_visual"),
    _bind("normal", ("V",), "core.enter_visual_line"),
    _bind("normal", ("/",), "core.enter_search"),
    _bind("normal", ("n",), "search.next_hit"),
    _bind("normal", ("N",), "search.prev_hit"),
    _bind("normal", (":",), "core.enter_command"),
    _bind("normal", ("?",), "core.enter_help"),
    _bind("normal", ("q",), "core.quit"),
    *_motion_bindings("normal"),
    *_visual_bindings("visual"),
    *_visual_bindings("visual_line"),
    _bind("command", ("ESC",), "core.exit_to_normal", "Leave command mode"),
    _bind("command", ("ctrl+c",), "core.exit_to_normal", "Leave command mode"),
    _bind("command", ("ENTER",), "command.submit_line"),
    _bind("command", ("BACKSPACE",), "prompt.backspace"),
    _bind("search", ("ESC",), "core.exit_to_normal", "Leave search, keep matches"),
    _bind("search", ("ctrl+c",), "search.clear"),
    _bind("search", ("ENTER",), "search.submit"),
    _bind("search", ("BACKSPACE",), "prompt.backspace"),
    _bind("help", ("q",), "core.exit_to_normal", "Close help"),
    _bind("help", ("ESC",), "core.exit_to_normal", "Close help"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    default_sequence_timeout_ms: int | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        registry.register_binding(
            _binding_with_timeout(binding, default_sequence_timeout_ms),
            replace=replace,
        )

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


def _binding_with_timeout(binding: Binding, timeout_ms: int | None) -> Binding:
    if timeout_ms is None:
        return binding
    sequence = KeySequence(binding.sequence.strokes, timeout_ms=timeout_ms)
    return replace(binding, sequence=sequence)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    return item_id not in exclude


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
