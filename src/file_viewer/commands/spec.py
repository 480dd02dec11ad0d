"""User command declarations of the form ``name: template``."""

from __future__ import annotations

from dataclasses import dataclass


class CommandSpecError(ValueError):
    """Raised for specs missing the separator, a name, or a template."""

    def __init__(self, message: str, *, spec: str) -> None:
        super().__init__(f"{message}: {spec!r}")
        self.spec = spec


@dataclass(frozen=True, slots=True)
class CommandSpec:
    name: str
    template: str

    @classmethod
    def parse(cls, raw: str) -> "CommandSpec":
        name, sep, template = raw.partition(":")
        if not sep:
            raise CommandSpecError("expected <name>: <template>", spec=raw)
        name = name.strip()
        template = template.strip()
        if not name or not template:
            raise CommandSpecError("name or template empty", spec=raw)
        return cls(name=name, template=template)


__all__ = ["CommandSpec", "CommandSpecError"]
