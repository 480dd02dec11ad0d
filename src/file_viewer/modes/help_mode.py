"""Help screen mode listing every active binding."""

from __future__ import annotations

from file_viewer.keymaps.help import help_lines

from .keymap_helpers import require_keymap_resolver
from .keymap_mode import KeymapMode


class HelpMode(KeymapMode):
    name = "help"

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()
        registry = require_keymap_resolver(self.context).registry
        self.context.bus.emit("help.open", help_lines(registry))

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        self.context.bus.emit("help.close", None)


__all__ = ["HelpMode"]
