"""Rich rendering of a :class:`ViewerMirror` frame."""

from __future__ import annotations

from typing import Iterable, List, Optional

from rich.style import Style
from rich.text import Text

from file_viewer.navigation import Highlight, Span
from file_viewer.session import ViewerMirror, VisibleRow

OVERLAY_STYLE = Style(color="cyan", italic=True)
SELECTION_STYLE = Style(reverse=True)
HIT_STYLE = Style(color="black", bgcolor="yellow")
CURRENT_HIT_STYLE = Style(color="black", bgcolor="bright_yellow", bold=True)
CURSOR_STYLE = Style(reverse=True, bold=True)


def char_offset(raw: bytes, offset: int) -> int:
    """Map a byte offset into ``raw`` to a character offset of its decoding."""

    return len(raw[: max(0, offset)].decode("utf-8", errors="replace"))


def _spans_for(row: int, spans: Iterable[Span | Highlight]) -> List[tuple[int, int]]:
    return [(start, end) for span_row, start, end in spans if span_row == row]


def render_row(
    row: VisibleRow,
    *,
    selection: Iterable[Span] = (),
    highlights: Iterable[Highlight] = (),
    current: Optional[Highlight] = None,
    cursor_col: Optional[int] = None,
) -> Text:
    text = Text(row.text, style=OVERLAY_STYLE if row.kind == "overlay" else "")
    for start, end in _spans_for(row.index, highlights):
        text.stylize(HIT_STYLE, char_offset(row.raw, start), char_offset(row.raw, end))
    if current is not None and current[0] == row.index:
        text.stylize(
            CURRENT_HIT_STYLE,
            char_offset(row.raw, current[1]),
            char_offset(row.raw, current[2]),
        )
    for start, end in _spans_for(row.index, selection):
        text.stylize(SELECTION_STYLE, char_offset(row.raw, start), char_offset(row.raw, end))
    if cursor_col is not None:
        col = char_offset(row.raw, cursor_col)
        if col >= len(text):
            text.append(" ")
        text.stylize(CURSOR_STYLE, col, col + 1)
    return text


def render_mirror(mirror: ViewerMirror) -> Text:
    """Compose every visible row, marking selection, hits, and the cursor."""

    current: Optional[Highlight] = None
    if mirror.current_hit is not None and mirror.current_hit < len(mirror.highlights):
        current = mirror.highlights[mirror.current_hit]
    lines = [
        render_row(
            row,
            selection=mirror.selection_spans,
            highlights=mirror.highlights,
            current=current,
            cursor_col=mirror.cursor[1] if row.index == mirror.cursor[0] else None,
        )
        for row in mirror.rows
    ]
    if not lines:
        lines = [Text(" ", style=CURSOR_STYLE)]
    return Text("\n").join(lines)


def status_text(mode: str, mirror: ViewerMirror, message: str = "") -> str:
    row, col = mirror.cursor
    parts = [mode.upper().replace("_", " "), f"{row + 1}:{col + 1}", f"{mirror.total_rows} rows"]
    if mirror.search_query:
        parts.append(f"/{mirror.search_query}")
    if message:
        parts.append(message)
    return "  ".join(parts)


__all__ = ["char_offset", "render_mirror", "render_row", "status_text"]
