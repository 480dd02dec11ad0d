"""Viewer session façade combining document, viewport, selection, and search."""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional, Tuple

from file_viewer.commands import CommandResolution, CommandSpec, resolve_command
from file_viewer.document import ComposedView, Document, OverlayRecord
from file_viewer.navigation import (
    Cursor,
    Highlight,
    SearchIndex,
    Selection,
    SelectionMode,
    SelectionRange,
    Span,
    Viewport,
    motions,
)
from file_viewer.runtime import telemetry

from .mirror import ViewerMirror, VisibleRow


class ViewerSession:
    """Owns all navigation state for one displayed document.

    Every motion takes the current viewport height and leaves the cursor
    inside ``[scroll, scroll + height)``.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[Document] = None,
        viewport: Optional[Viewport] = None,
        selection: Optional[Selection] = None,
        search: Optional[SearchIndex] = None,
    ) -> None:
        self.name = name
        self.document = document or Document()
        self.viewport = viewport or Viewport()
        self.selection = selection or Selection()
        self.search = search or SearchIndex()

    @classmethod
    def from_text(cls, content: str | bytes, *, name: str = "default") -> "ViewerSession":
        return cls(name=name, document=Document.from_text(content))

    @property
    def view(self) -> ComposedView:
        return self.document.compose()

    @property
    def cursor(self) -> Cursor:
        return self.viewport.cursor

    @property
    def scroll(self) -> int:
        return self.viewport.scroll

    # -- motion intents -------------------------------------------------

    def move_left(self, height: int) -> None:
        self.viewport.move_left(self.view)
        self._settle(height)

    def move_right(self, height: int) -> None:
        self.viewport.move_right(self.view)
        self._settle(height)

    def move_down(self, height: int) -> None:
        self.viewport.move_down(self.view, _rows(height))
        self._settle(height)

    def move_up(self, height: int) -> None:
        self.viewport.move_up(self.view)
        self._settle(height)

    def word_forward(self, height: int) -> None:
        motions.word_forward(self.view, self.viewport)
        self._settle(height)

    def word_backward(self, height: int) -> None:
        motions.word_backward(self.view, self.viewport)
        self._settle(height)

    def paragraph_down(self, height: int) -> None:
        motions.paragraph_down(self.view, self.viewport)
        self._settle(height)

    def paragraph_up(self, height: int) -> None:
        motions.paragraph_up(self.view, self.viewport)
        self._settle(height)

    def half_page_down(self, height: int) -> None:
        self.viewport.half_page_down(self.view, _rows(height))
        self._settle(height)

    def half_page_up(self, height: int) -> None:
        self.viewport.half_page_up(self.view, _rows(height))
        self._settle(height)

    def cursor_top(self, height: int) -> None:
        self.viewport.cursor_top(self.view)
        self._settle(height)

    def cursor_middle(self, height: int) -> None:
        self.viewport.cursor_middle(self.view, _rows(height))
        self._settle(height)

    def cursor_bottom(self, height: int) -> None:
        self.viewport.cursor_bottom(self.view, _rows(height))
        self._settle(height)

    def goto_first_line(self, height: int) -> None:
        self.viewport.goto_first_line()
        self._settle(height)

    def goto_last_line(self, height: int) -> None:
        self.viewport.goto_last_line(self.view)
        self._settle(height)

    def ensure_visible(self, height: int) -> None:
        self.viewport.ensure_visible(_rows(height))

    def _settle(self, height: int) -> None:
        self.viewport.ensure_visible(_rows(height))

    # -- selection intents ----------------------------------------------

    def open_selection(self, mode: SelectionMode = "char") -> None:
        self.selection.open(self.cursor, mode)

    def cancel_selection(self) -> None:
        self.selection.cancel()

    def selection_range(self) -> Optional[SelectionRange]:
        return self.selection.range(self.cursor)

    def selection_spans(self) -> List[Span]:
        selected = self.selection_range()
        if selected is None:
            return []
        return selected.spans(self.view)

    # -- search intents ---------------------------------------------------

    def set_search_query(self, query: str | bytes, height: int) -> Optional[Cursor]:
        with telemetry.span(
            "session::search",
            component="search",
            metadata={"session": self.name},
        ) as handle:
            hit = self.search.set_query(self.view, query)
            handle.add_metadata("hits", len(self.search.hits))
        telemetry.record_event(
            "search.query",
            level="debug",
            data={"query": query, "hits": len(self.search.hits)},
        )
        if hit is not None:
            self.viewport.set_cursor(*hit)
            self._settle(height)
        return hit

    def clear_search(self) -> None:
        self.search.clear()

    def next_hit(self, height: int) -> Optional[Cursor]:
        return self._jump(self.search.next_hit(), height)

    def prev_hit(self, height: int) -> Optional[Cursor]:
        return self._jump(self.search.prev_hit(), height)

    def _jump(self, hit: Optional[Cursor], height: int) -> Optional[Cursor]:
        if hit is not None:
            self.viewport.set_cursor(*hit)
        self._settle(height)
        return hit

    def search_highlights(self) -> Tuple[List[Highlight], Optional[int]]:
        return self.search.highlights(), self.search.current

    # -- command resolution -----------------------------------------------

    def command_bounds(self) -> Optional[Tuple[Cursor, Cursor]]:
        selected = self.selection_range()
        if selected is None:
            return None
        return selected.bounds(self.view)

    def resolve_command(
        self, command_line: str, table: Mapping[str, CommandSpec]
    ) -> CommandResolution:
        with telemetry.span(
            "session::resolve_command",
            component="commands",
            metadata={"session": self.name},
        ) as handle:
            resolution = resolve_command(
                command_line, table, self.cursor, selection=self.command_bounds()
            )
            handle.add_metadata("status", resolution.status)
        telemetry.record_event(
            "command.resolve",
            data={"name": resolution.name, "status": resolution.status},
        )
        return resolution

    # -- document composition ---------------------------------------------

    def add_overlay(
        self, after_line: int, lines: Iterable[str | bytes], height: int
    ) -> OverlayRecord:
        """Append an overlay, then re-clamp every stored position."""

        with telemetry.span(
            "session::add_overlay",
            component="document",
            metadata={"session": self.name, "after_line": after_line},
        ):
            record = self.document.add_overlay(after_line, lines)
            self.reclamp(height)
        telemetry.record_event(
            "document.overlay",
            level="debug",
            data={"after_line": after_line, "rows": len(record.lines)},
        )
        return record

    def reclamp(self, height: int) -> None:
        view = self.view
        self.viewport.clamp(view)
        self.selection.clamp(view)
        self.search.rebuild(view)
        self._settle(height)

    def mirror(self, height: int) -> ViewerMirror:
        view = self.view
        height = _rows(height)
        start = self.viewport.scroll
        rows = tuple(
            VisibleRow(
                index=index,
                text=view[index].text.decode("utf-8", errors="replace"),
                kind=view[index].kind,
                raw=view[index].text,
            )
            for index in range(start, min(len(view), start + height))
        )
        query = self.search.query
        return ViewerMirror(
            rows=rows,
            cursor=self.cursor,
            scroll=start,
            height=height,
            selection=self.selection_range(),
            selection_spans=self.selection_spans(),
            search_query=query.decode("utf-8", errors="replace") if query else None,
            highlights=self.search.highlights(),
            current_hit=self.search.current,
            total_rows=len(view),
        )


def _rows(height: int) -> int:
    return max(1, height)


__all__ = ["ViewerSession"]
