"""Plain-text help screen generated from the live keymap registry."""

from __future__ import annotations

from typing import List

from .registry import KeymapRegistry

HELP_TITLE = "File Viewer Help"

HELP_SECTIONS: tuple[tuple[str, str], ...] = (
    ("normal", "Normal mode:"),
    ("visual", "Visual mode:"),
    ("command", "Command mode:"),
    ("search", "Search mode:"),
    ("help", "Help screen:"),
)


def help_lines(registry: KeymapRegistry) -> List[str]:
    """Render one ``<Key> - <description>`` line per binding, grouped by mode.

    Visual-line mode shares the visual bindings and is not listed
    separately.
    """

    lines = [HELP_TITLE]
    for mode, heading in HELP_SECTIONS:
        bindings = list(registry.iter_bindings(mode))
        if not bindings:
            continue
        lines.append("")
        lines.append(heading)
        for binding in bindings:
            lines.append(f"{binding.sequence.label} - {binding.description}")
    return lines


__all__ = ["HELP_SECTIONS", "HELP_TITLE", "help_lines"]
