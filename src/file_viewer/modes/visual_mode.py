"""Visual modes: the cursor drags the live end of an anchored selection."""

from __future__ import annotations

from file_viewer.navigation import SelectionMode

from .keymap_mode import KeymapMode


class VisualMode(KeymapMode):
    name = "visual"
    selection_mode: SelectionMode = "char"

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()
        session = self.context.session
        session.open_selection(self.selection_mode)
        self.context.bus.emit(
            "visual.selection",
            {"anchor": session.cursor, "cursor": session.cursor, "mode": self.selection_mode},
        )

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        # Command mode consumes the selection for its placeholders and clears
        # it itself once the command line closes.
        if next_mode != "command":
            self.context.session.cancel_selection()
            self.context.bus.emit("visual.cancel", None)


class VisualLineMode(VisualMode):
    name = "visual_line"
    selection_mode: SelectionMode = "line"


__all__ = ["VisualLineMode", "VisualMode"]
