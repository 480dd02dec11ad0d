"""Single-line text prompt shared by the command and search modes."""

from __future__ import annotations

from typing import MutableMapping

from .base_mode import KeyInput, ModeResult
from .keymap_helpers import prompt_state
from .keymap_mode import KeymapMode

_BLOCKING_MODIFIERS = frozenset({"ctrl", "alt", "meta", "super"})


class PromptMode(KeymapMode):
    """Keys the keymap does not claim are typed into the prompt text.

    The text lives in ``context.extras[state_key]`` so that bound actions
    (submit, backspace) and hosts read the same value.
    """

    state_key = "prompt_state"

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()
        self.state["text"] = ""
        self.context.bus.emit(f"{self.name}.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        self.context.bus.emit(f"{self.name}.end", self.text)
        self.state["text"] = ""

    @property
    def state(self) -> MutableMapping[str, object]:
        return prompt_state(self.context, self.state_key)

    @property
    def text(self) -> str:
        return str(self.state.get("text", ""))

    def _handle_unmatched(self, key: KeyInput) -> ModeResult:
        modifiers = {modifier.lower() for modifier in key.modifiers}
        if key.text and key.text.isprintable() and not modifiers & _BLOCKING_MODIFIERS:
            self.state["text"] = self.text + key.text
            self.context.bus.emit(f"{self.name}.edit", self.text)
            return ModeResult(consumed=True, status="editing")
        return ModeResult(consumed=False, status="miss", message="unhandled")


__all__ = ["PromptMode"]
