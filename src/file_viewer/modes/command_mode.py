"""Command-line mode: ``:name args`` resolved against user templates."""

from __future__ import annotations

from .prompt_mode import PromptMode


class CommandMode(PromptMode):
    name = "command"
    state_key = "command_state"

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        # A selection carried over from visual mode only lives as long as
        # the command line that consumes it.
        if self.context.session.selection.active:
            self.context.session.cancel_selection()
            self.context.bus.emit("visual.cancel", None)


__all__ = ["CommandMode"]
