"""Viewer modes and the keymap-driven dispatch they share."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .keymap_mode import KeymapMode
from .normal_mode import NormalMode
from .visual_mode import VisualLineMode, VisualMode
from .prompt_mode import PromptMode
from .command_mode import CommandMode
from .search_mode import SearchMode
from .help_mode import HelpMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "KeymapMode",
    "NormalMode",
    "VisualMode",
    "VisualLineMode",
    "PromptMode",
    "CommandMode",
    "SearchMode",
    "HelpMode",
]
