"""User command specs and template resolution."""

from .spec import CommandSpec, CommandSpecError
from .templater import (
    CommandResolution,
    ResolvedCommand,
    placeholder_values,
    resolve_command,
    split_command_line,
    substitute,
    tokenize,
)

__all__ = [
    "CommandResolution",
    "CommandSpec",
    "CommandSpecError",
    "ResolvedCommand",
    "placeholder_values",
    "resolve_command",
    "split_command_line",
    "substitute",
    "tokenize",
]
