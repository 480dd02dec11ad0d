"""Parser for annotation records that become overlay blocks.

A record starts with a ``<path>:<line>`` header and owns every following line
until the next header::

    src/app.py:12
    first note line
    second note line
    src/app.py:40
    another note
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from .document import Document, OverlayRecord, split_lines

_HEADER = re.compile(rb"^(?P<path>\S(?:.*\S)?):(?P<line>\d+)$")


class AnnotationParseError(ValueError):
    """Raised when body text appears before the first record header."""

    def __init__(self, message: str, *, line_number: int) -> None:
        super().__init__(f"{message} (line {line_number})")
        self.line_number = line_number


@dataclass(frozen=True, slots=True)
class AnnotationRecord:
    path: Path
    line: int
    body: tuple[bytes, ...]

    @property
    def after_line(self) -> int:
        return max(0, self.line - 1)


def parse_annotations(content: str | bytes) -> List[AnnotationRecord]:
    records: List[AnnotationRecord] = []
    header: tuple[Path, int] | None = None
    body: List[bytes] = []

    for number, raw in enumerate(split_lines(content), start=1):
        match = _HEADER.match(raw)
        if match:
            if header is not None:
                records.append(AnnotationRecord(*header, body=tuple(body)))
            path = Path(match.group("path").decode("utf-8", errors="surrogateescape"))
            header = (path, int(match.group("line")))
            body = []
            continue
        if header is None:
            if not raw.strip():
                continue
            raise AnnotationParseError(
                "annotation body before first header", line_number=number
            )
        body.append(raw)

    if header is not None:
        records.append(AnnotationRecord(*header, body=tuple(body)))
    return records


def records_for_path(
    records: Iterable[AnnotationRecord], path: Path
) -> List[AnnotationRecord]:
    target = _normalized(path)
    return [record for record in records if _normalized(record.path) == target]


def apply_annotations(
    document: Document, records: Iterable[AnnotationRecord]
) -> List[OverlayRecord]:
    return [document.add_overlay(r.after_line, r.body) for r in records]


def _normalized(path: Path) -> Path:
    try:
        return path.expanduser().resolve()
    except OSError:
        return path


__all__ = [
    "AnnotationParseError",
    "AnnotationRecord",
    "apply_annotations",
    "parse_annotations",
    "records_for_path",
]
