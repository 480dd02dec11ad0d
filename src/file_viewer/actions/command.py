"""Actions that evaluate ``:`` command lines."""

from __future__ import annotations

from typing import Callable, Dict

from file_viewer.keymaps import ResolutionMatch
from file_viewer.modes.base_mode import ModeContext, ModeResult
from file_viewer.modes.keymap_helpers import prompt_state

BuiltinHandler = Callable[[ModeContext], ModeResult]


def submit_command_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Run a builtin, or resolve the line against the user command table.

    Builtins match the whole trimmed line, so ``q extra`` is looked up as a
    user command.

    Resolved commands are not executed here; hosts receive them through the
    ``command.run`` event and decide how to spawn them.
    """

    del match
    state = prompt_state(context, "command_state")
    text = str(state["text"]).strip()
    state["text"] = ""
    context.bus.emit("command.submit", text)
    if not text:
        context.bus.emit("command.empty", None)
        return ModeResult(consumed=True, switch_to="normal", status="command_empty")
    builtin = _BUILTINS.get(text)
    if builtin is not None:
        return builtin(context)

    resolution = context.session.resolve_command(text, context.commands)
    if resolution.status == "empty":
        context.bus.emit("command.empty", None)
        return ModeResult(consumed=True, switch_to="normal", status="command_empty")
    if resolution.status == "unknown" or resolution.command is None:
        context.bus.emit("command.error", resolution.name)
        return ModeResult(
            consumed=True,
            switch_to="normal",
            status="command_error",
            message=f"unknown command: {resolution.name}",
        )

    context.bus.emit("command.run", resolution.command)
    return ModeResult(
        consumed=True,
        switch_to="normal",
        status="command_run",
        message=" ".join(resolution.command.argv),
    )


def _handle_quit(context: ModeContext) -> ModeResult:
    context.bus.emit("viewer.quit", None)
    return ModeResult(consumed=True, switch_to="normal", status="quit", message="quit")


def _handle_help(context: ModeContext) -> ModeResult:
    del context
    return ModeResult(consumed=True, switch_to="help", status="command_help")


_BUILTINS: Dict[str, BuiltinHandler] = {
    "q": _handle_quit,
    "help": _handle_help,
}


__all__ = ["submit_command_line"]
