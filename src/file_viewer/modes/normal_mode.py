"""Normal mode: motions, search navigation, and entry points to other modes."""

from __future__ import annotations

from .keymap_mode import KeymapMode


class NormalMode(KeymapMode):
    name = "normal"
