"""Editing actions for the command and search prompts."""

from __future__ import annotations

from file_viewer.keymaps import ResolutionMatch
from file_viewer.modes.base_mode import ModeContext, ModeResult
from file_viewer.modes.keymap_helpers import prompt_state


def delete_prompt_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Drop the last typed character of the prompt owning the binding."""

    mode = match.binding.mode
    state = prompt_state(context, f"{mode}_state")
    text = str(state["text"])
    if not text:
        return ModeResult(consumed=True, status="noop")
    state["text"] = text[:-1]
    context.bus.emit(f"{mode}.edit", state["text"])
    return ModeResult(consumed=True, status="editing")


__all__ = ["delete_prompt_char"]
