"""Host-facing snapshot of a viewer session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from file_viewer.document import RowKind
from file_viewer.navigation import Cursor, Highlight, SelectionRange, Span


@dataclass(frozen=True, slots=True)
class VisibleRow:
    index: int
    text: str
    kind: RowKind = "base"
    raw: bytes = b""


@dataclass(slots=True)
class ViewerMirror:
    """Everything a renderer needs for one frame."""

    rows: Tuple[VisibleRow, ...]
    cursor: Cursor
    scroll: int
    height: int
    selection: Optional[SelectionRange] = None
    selection_spans: List[Span] = field(default_factory=list)
    search_query: Optional[str] = None
    highlights: List[Highlight] = field(default_factory=list)
    current_hit: Optional[int] = None
    total_rows: int = 0

    @property
    def text(self) -> str:
        return "\n".join(row.text for row in self.rows)


__all__ = ["ViewerMirror", "VisibleRow"]
