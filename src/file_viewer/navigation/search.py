"""Literal substring search over the composed view with cyclic hit navigation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from file_viewer.document import ComposedView

from .viewport import Cursor

Highlight = Tuple[int, int, int]  # (row, start_col, end_col)


def find_hits(view: ComposedView, query: bytes) -> List[Cursor]:
    """Return non-overlapping occurrences of ``query`` in row-major order."""

    if not query:
        return []
    hits: List[Cursor] = []
    for row, composed in enumerate(view):
        text = composed.text
        start = text.find(query)
        while start != -1:
            hits.append((row, start))
            start = text.find(query, start + len(query))
    return hits


@dataclass(slots=True)
class SearchIndex:
    """Active query, its hit positions, and the current hit index."""

    query: Optional[bytes] = None
    hits: List[Cursor] = field(default_factory=list)
    current: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.query is not None

    def clear(self) -> None:
        self.query = None
        self.hits = []
        self.current = None

    def set_query(self, view: ComposedView, query: str | bytes) -> Optional[Cursor]:
        """Rebuild hits for ``query``; return the first hit, if any.

        An empty query clears all search state.
        """

        encoded = query.encode("utf-8") if isinstance(query, str) else query
        if not encoded:
            self.clear()
            return None
        self.query = encoded
        self.hits = find_hits(view, encoded)
        self.current = 0 if self.hits else None
        return self.current_hit

    def rebuild(self, view: ComposedView) -> None:
        """Rescan the active query against a new view, keeping the hit index."""

        if self.query is None:
            return
        self.hits = find_hits(view, self.query)
        if not self.hits:
            self.current = None
        elif self.current is None or self.current >= len(self.hits):
            self.current = 0

    @property
    def current_hit(self) -> Optional[Cursor]:
        if self.current is None:
            return None
        return self.hits[self.current]

    def next_hit(self) -> Optional[Cursor]:
        if not self.hits:
            return None
        index = -1 if self.current is None else self.current
        self.current = (index + 1) % len(self.hits)
        return self.hits[self.current]

    def prev_hit(self) -> Optional[Cursor]:
        if not self.hits:
            return None
        index = 0 if self.current is None else self.current
        self.current = (index - 1) % len(self.hits)
        return self.hits[self.current]

    def highlights(self) -> List[Highlight]:
        width = len(self.query or b"")
        return [(row, col, col + width) for row, col in self.hits]


__all__ = ["Highlight", "SearchIndex", "find_hits"]
