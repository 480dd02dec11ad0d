"""Search prompt mode: ``/query`` jumps to the first literal match."""

from __future__ import annotations

from .prompt_mode import PromptMode


class SearchMode(PromptMode):
    name = "search"
    state_key = "search_state"


__all__ = ["SearchMode"]
