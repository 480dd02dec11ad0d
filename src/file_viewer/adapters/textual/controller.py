"""Adapter that wires ModeManager events into Textual-facing callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from file_viewer.commands import ResolvedCommand
from file_viewer.modes import KeyInput, ModeResult
from file_viewer.modes.mode_manager import ModeManager
from file_viewer.runtime import telemetry
from file_viewer.session import ViewerMirror

_PROMPT_PREFIXES = {"command": ":", "search": "/"}

_FORWARDED_EVENTS = (
    "mode.change",
    "cursor.move",
    "visual.selection",
    "visual.cancel",
    "search.start",
    "search.edit",
    "search.end",
    "search.submit",
    "search.clear",
    "search.hit",
    "command.start",
    "command.edit",
    "command.end",
    "command.submit",
    "command.run",
    "command.error",
    "command.empty",
    "help.open",
    "help.close",
    "viewer.quit",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[ViewerMirror], None]
    update_status: Callable[[str], None] = _noop
    show_prompt: Callable[[str], None] = _noop
    show_help: Callable[[Optional[List[str]]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    run_command: Callable[[ResolvedCommand], None] = _noop
    quit: Callable[[], None] = _noop
    log: Callable[[str], None] = _noop


class TextualViewerAdapter:
    """Bridges ModeManager and bus events to a Textual-friendly surface."""

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self.logger = telemetry.get_logger("file_viewer.adapters.textual")
        self._subscribe_events()
        self._refresh_view()
        self._refresh_prompt()

    @property
    def height(self) -> int:
        return self.manager.context.height

    def resize(self, height: int) -> None:
        self.manager.set_height(height)
        self._refresh_view()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
        height: Optional[int] = None,
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        if height is not None and height != self.height:
            self.manager.set_height(height)
        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to,
            timeout_ms=result.timeout_ms,
        )
        return result

    def process_timeouts(self) -> Optional[ModeResult]:
        """Forward an expired key prefix and surface the result to the UI."""

        mode_name = self.manager.active_name
        outcome = self.manager.process_timeouts()
        if outcome is not None:
            self.hooks.update_status(f"{mode_name}:{outcome.status}")
            self._log_state("timeout ->", source_mode=mode_name, status=outcome.status)
            self._refresh_view()
        return outcome

    def refresh(self) -> None:
        """Re-render the view and prompt after host-side state changes."""

        self._refresh_view()
        self._refresh_prompt()

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status and status not in {"ok", "motion"}:
            self.hooks.update_status(status)
        self._refresh_view()
        self._refresh_prompt()

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in _FORWARDED_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "command.run" and isinstance(payload, ResolvedCommand):
            self.hooks.run_command(payload)
        elif name == "command.error" and isinstance(payload, str):
            self.hooks.update_status(f"unknown command: {payload}")
        elif name == "help.open" and isinstance(payload, list):
            self.hooks.show_help(payload)
        elif name == "help.close":
            self.hooks.show_help(None)
        elif name == "viewer.quit":
            self.hooks.quit()
        if name.endswith((".start", ".edit", ".end")):
            self._refresh_prompt()

    def _refresh_view(self) -> None:
        self.hooks.update_view(self.manager.context.session.mirror(self.height))

    def _refresh_prompt(self) -> None:
        mode = self.manager.active_name or ""
        prefix = _PROMPT_PREFIXES.get(mode)
        if prefix is None:
            self.hooks.show_prompt("")
            return
        state = self.manager.context.extras.get(f"{mode}_state")
        text = str(state.get("text", "")) if isinstance(state, dict) else ""
        self.hooks.show_prompt(prefix + text)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.manager.context.session
        return {
            "mode": self.manager.active_name or "?",
            "cursor": session.cursor,
            "scroll": session.scroll,
            "selection": session.selection_range(),
            "pending_timeout": self.manager.has_pending_timeout,
            "revision": session.document.revision,
        }


__all__ = ["TextualUIHooks", "TextualViewerAdapter"]
