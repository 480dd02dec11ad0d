"""Placeholder substitution and tokenization for user command templates.

Supported placeholders (all positions 1-based):

``{line}``, ``{col}``            cursor position
``{args}``                       free text after the command name
``{start_line}``, ``{start_col}``  normalized selection start
``{end_line}``, ``{end_col}``      normalized selection end

Without an active selection the start/end placeholders equal the cursor.
Substitution is a single pass, so text coming from ``{args}`` is never
rescanned for placeholders. The result is split on whitespace with no quoting
support.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Literal, Mapping, Optional, Tuple

from file_viewer.navigation.viewport import Cursor

from .spec import CommandSpec

_PLACEHOLDER = re.compile(
    r"\{(line|col|args|start_line|start_col|end_line|end_col)\}"
)


@dataclass(frozen=True, slots=True)
class ResolvedCommand:
    program: str
    arguments: Tuple[str, ...] = ()

    @property
    def argv(self) -> List[str]:
        return [self.program, *self.arguments]


@dataclass(frozen=True, slots=True)
class CommandResolution:
    status: Literal["resolved", "unknown", "empty"]
    name: str = ""
    command: Optional[ResolvedCommand] = None


def placeholder_values(
    cursor: Cursor,
    args: str = "",
    *,
    selection: Optional[Tuple[Cursor, Cursor]] = None,
) -> Dict[str, str]:
    start, end = selection if selection is not None else (cursor, cursor)
    return {
        "line": str(cursor[0] + 1),
        "col": str(cursor[1] + 1),
        "args": args,
        "start_line": str(start[0] + 1),
        "start_col": str(start[1] + 1),
        "end_line": str(end[0] + 1),
        "end_col": str(end[1] + 1),
    }


def substitute(template: str, values: Mapping[str, str]) -> str:
    return _PLACEHOLDER.sub(lambda match: values[match.group(1)], template)


def tokenize(text: str) -> Optional[ResolvedCommand]:
    parts = text.split()
    if not parts:
        return None
    return ResolvedCommand(program=parts[0], arguments=tuple(parts[1:]))


def split_command_line(command_line: str) -> Tuple[str, str]:
    """Split ``name args...`` at the first whitespace character."""

    parts = re.split(r"\s", command_line.strip(), maxsplit=1)
    name = parts[0]
    args = parts[1] if len(parts) > 1 else ""
    return name, args


def resolve_command(
    command_line: str,
    table: Mapping[str, CommandSpec],
    cursor: Cursor,
    *,
    selection: Optional[Tuple[Cursor, Cursor]] = None,
) -> CommandResolution:
    name, args = split_command_line(command_line)
    spec = table.get(name)
    if spec is None:
        return CommandResolution(status="unknown", name=name)
    values = placeholder_values(cursor, args, selection=selection)
    command = tokenize(substitute(spec.template, values))
    if command is None:
        return CommandResolution(status="empty", name=name)
    return CommandResolution(status="resolved", name=name, command=command)


__all__ = [
    "CommandResolution",
    "ResolvedCommand",
    "placeholder_values",
    "resolve_command",
    "split_command_line",
    "substitute",
    "tokenize",
]
