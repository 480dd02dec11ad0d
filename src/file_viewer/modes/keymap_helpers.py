"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import MutableMapping, cast

from file_viewer.keymaps import KeymapResolver, KeyStroke

from .base_mode import KeyInput, ModeContext


def key_to_token(key: KeyInput) -> str:
    return KeyStroke(key.key, key.modifiers).token


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def prompt_state(context: ModeContext, key: str) -> MutableMapping[str, object]:
    """Text-entry state shared between a prompt mode and its actions."""

    state = cast(MutableMapping[str, object], context.extras.setdefault(key, {}))
    state.setdefault("text", "")
    return state


__all__ = ["key_to_token", "prompt_state", "require_keymap_resolver"]
