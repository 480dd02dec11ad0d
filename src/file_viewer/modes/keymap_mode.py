"""Shared dispatch loop for modes whose keys resolve through the keymap trie."""

from __future__ import annotations

from typing import List

from file_viewer.keymaps import ResolutionMatch, ResolutionResult
from file_viewer.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, require_keymap_resolver


class KeymapMode(Mode):
    """Accumulates tokens until the resolver reports a match or a miss.

    When a multi-key prefix (``g`` of ``gg``) is followed by a key that does
    not continue it, the prefix is dropped and the new key is resolved alone.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        default_pending_timeout_ms: int = 1000,
    ) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"file_viewer.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []
        self._default_timeout_ms = default_pending_timeout_ms

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key_to_token(key)
        self._pending.append(token)
        result = self._resolver.resolve(self.name, tuple(self._pending))

        if result.status == "miss" and len(self._pending) > 1:
            self._pending = [token]
            result = self._resolver.resolve(self.name, (token,))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return self._pending_result(result)

        self._pending.clear()
        return self._handle_unmatched(key)

    def _pending_result(self, result: ResolutionResult) -> ModeResult:
        return ModeResult(
            consumed=True,
            status="pending",
            message="awaiting_sequence",
            timeout_ms=result.timeout_ms or self._default_timeout_ms,
        )

    def _handle_unmatched(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss", message="unhandled")

    def handle_timeout(self) -> ModeResult:
        if not self._pending:
            return ModeResult(consumed=False, status="timeout")
        self._pending.clear()
        return ModeResult(consumed=False, status="timeout", message="pending_timeout")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = ["KeymapMode"]
