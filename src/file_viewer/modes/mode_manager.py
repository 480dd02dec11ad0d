"""Mode manager owning the active viewer mode and its half-typed key sequence."""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Dict, Iterable, Optional, Tuple, Type

from file_viewer.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from file_viewer.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


@dataclass(slots=True)
class PendingTimeout:
    mode: str
    deadline: float
    timeout_ms: int


class ModeManager:
    """Dispatches key events to the active mode and applies mode switches.

    The first registered mode becomes active. Only the active mode can be
    holding a key prefix such as ``g``, so at most one deadline is armed and
    any mode switch drops it. Hosts poll :meth:`process_timeouts`.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        default_sequence_timeout_ms: int | None = None,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self._pending: Optional[PendingTimeout] = None

        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="file_viewer.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(
                self.keymap_registry,
                default_sequence_timeout_ms=default_sequence_timeout_ms,
            )
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="file_viewer.keymaps"
        )
        context.extras.setdefault("keymap_registry", self.keymap_registry)
        context.extras.setdefault("keymap_resolver", self.keymap_resolver)

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._modes.get(self._active) if self._active else None

    @property
    def active_name(self) -> Optional[str]:
        return self._active

    @property
    def modes(self) -> Tuple[str, ...]:
        return tuple(self._modes)

    @property
    def has_pending_timeout(self) -> bool:
        return self._pending is not None

    def get_mode(self, name: str) -> Mode:
        return self._modes[name]

    def register_mode(self, mode_cls: Type[Mode], /, **mode_kwargs: object) -> Mode:
        mode = mode_cls(self.context, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def register_modes(
        self, mode_classes: Iterable[Type[Mode]], **mode_kwargs: object
    ) -> None:
        for mode_cls in mode_classes:
            self.register_mode(mode_cls, **mode_kwargs)

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self._active
        if previous == name:
            return
        self._pending = None
        if previous is not None:
            self._modes[previous].on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous)
        session = self.context.session
        telemetry.record_event(
            "mode.switch",
            data={"from": previous, "to": name, "cursor": session.cursor},
        )
        self.context.bus.emit("mode.change", name)

    def set_height(self, height: int) -> None:
        """Record the host's viewport height and keep the cursor on screen."""

        self.context.height = max(1, height)
        self.context.session.ensure_visible(self.context.height)

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._settle(mode, result)

    def process_timeouts(self, now: float | None = None) -> Optional[ModeResult]:
        """Expire the pending prefix once its deadline has passed."""

        pending = self._pending
        if pending is None:
            return None
        if pending.deadline > (time.monotonic() if now is None else now):
            return None
        return self.force_timeout()

    def force_timeout(self) -> Optional[ModeResult]:
        pending, self._pending = self._pending, None
        if pending is None or pending.mode not in self._modes:
            return None
        mode = self._modes[pending.mode]
        with telemetry.span(
            name=f"mode_timeout::{mode.name}",
            component=True,
            metadata={"mode": mode.name, "timeout_ms": pending.timeout_ms},
        ):
            result = mode.handle_timeout()
        return self._settle(mode, result)

    def _settle(self, mode: Mode, result: ModeResult) -> ModeResult:
        if result.timeout_ms:
            self._pending = PendingTimeout(
                mode=mode.name,
                deadline=time.monotonic() + result.timeout_ms / 1000.0,
                timeout_ms=result.timeout_ms,
            )
        else:
            self._pending = None
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result


__all__ = ["ModeManager", "PendingTimeout"]
