"""Handlers bound to keys through the keymap registry."""

from .core import (
    cancel_selection,
    enter_command_mode,
    enter_help_mode,
    enter_search_mode,
    enter_visual_line_mode,
    enter_visual_mode,
    exit_to_normal_mode,
    quit_viewer,
)
from .command import submit_command_line
from .prompt import delete_prompt_char
from .search import clear_search, next_hit, prev_hit, submit_search

__all__ = [
    "cancel_selection",
    "clear_search",
    "delete_prompt_char",
    "enter_command_mode",
    "enter_help_mode",
    "enter_search_mode",
    "enter_visual_line_mode",
    "enter_visual_mode",
    "exit_to_normal_mode",
    "next_hit",
    "prev_hit",
    "quit_viewer",
    "submit_command_line",
    "submit_search",
]
