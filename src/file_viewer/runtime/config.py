"""Environment-driven configuration for the viewer host."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional

from file_viewer.commands.spec import CommandSpec

ENV_PREFIX = "FILE_VIEWER_"

DEFAULT_HEIGHT = 24
DEFAULT_SEQUENCE_TIMEOUT_MS = 1000


def env_value(
    name: str,
    default: Optional[str] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[str]:
    source = os.environ if environ is None else environ
    return source.get(f"{ENV_PREFIX}{name}", default)


def env_flag(
    name: str, default: bool, *, environ: Optional[Mapping[str, str]] = None
) -> bool:
    raw = env_value(name, environ=environ)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def env_int(
    name: str, default: int, *, environ: Optional[Mapping[str, str]] = None
) -> int:
    raw = env_value(name, environ=environ)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(slots=True)
class ViewerConfig:
    """Resolved settings shared by the CLI and the Textual host."""

    height: int = DEFAULT_HEIGHT
    sequence_timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS
    commands: Dict[str, CommandSpec] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ViewerConfig":
        config = cls(
            height=max(1, env_int("HEIGHT", DEFAULT_HEIGHT, environ=environ)),
            sequence_timeout_ms=max(
                1,
                env_int(
                    "SEQUENCE_TIMEOUT_MS", DEFAULT_SEQUENCE_TIMEOUT_MS, environ=environ
                ),
            ),
        )
        raw_commands = env_value("COMMANDS", environ=environ) or ""
        config.add_commands(line for line in raw_commands.splitlines() if line.strip())
        return config

    def add_commands(self, specs: Iterable[str | CommandSpec]) -> None:
        """Register ``name: template`` specs; later names replace earlier ones."""

        for spec in specs:
            parsed = spec if isinstance(spec, CommandSpec) else CommandSpec.parse(spec)
            self.commands[parsed.name] = parsed


__all__ = [
    "ENV_PREFIX",
    "ViewerConfig",
    "env_value",
    "env_flag",
    "env_int",
]
