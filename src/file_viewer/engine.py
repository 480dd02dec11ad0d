"""Assembly of a session, its modes, and the default keymaps."""

from __future__ import annotations

from typing import Mapping, Optional

from file_viewer.commands import CommandSpec
from file_viewer.modes import (
    CommandMode,
    HelpMode,
    ModeBus,
    ModeContext,
    NormalMode,
    SearchMode,
    VisualLineMode,
    VisualMode,
)
from file_viewer.modes.mode_manager import ModeManager
from file_viewer.runtime.config import ViewerConfig
from file_viewer.session import ViewerSession


def create_engine(
    session: ViewerSession,
    *,
    commands: Optional[Mapping[str, CommandSpec]] = None,
    sequence_timeout_ms: int = 1000,
    height: int = 24,
    bus: Optional[ModeBus] = None,
) -> ModeManager:
    """Return a manager with every viewer mode registered, starting in normal."""

    context = ModeContext(
        session=session,
        bus=bus or ModeBus(),
        height=max(1, height),
        commands=dict(commands or {}),
    )
    manager = ModeManager(context, default_sequence_timeout_ms=sequence_timeout_ms)
    manager.register_modes(
        (NormalMode, VisualMode, VisualLineMode, CommandMode, SearchMode, HelpMode),
        default_pending_timeout_ms=sequence_timeout_ms,
    )
    return manager


def engine_from_config(session: ViewerSession, config: ViewerConfig) -> ModeManager:
    return create_engine(
        session,
        commands=config.commands,
        sequence_timeout_ms=config.sequence_timeout_ms,
        height=config.height,
    )


__all__ = ["create_engine", "engine_from_config"]
