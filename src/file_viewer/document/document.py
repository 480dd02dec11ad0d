"""Read-only document model: base lines plus display-only overlay blocks."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Literal, Optional, Sequence, overload

RowKind = Literal["base", "overlay"]


class OverlayAnchorError(ValueError):
    """Raised when an overlay is anchored before the first base line."""

    def __init__(self, after_line: int) -> None:
        super().__init__(f"Overlay anchor must be >= 0, got {after_line}")
        self.after_line = after_line


def _to_bytes(text: str | bytes) -> bytes:
    if isinstance(text, bytes):
        return text
    return text.encode("utf-8")


def split_lines(content: str | bytes) -> List[bytes]:
    """Split on ``\\n`` and drop one trailing ``\\r`` per line.

    A trailing newline does not produce a final empty line, and empty content
    yields no lines at all.
    """

    data = _to_bytes(content)
    if not data:
        return []
    lines = data.split(b"\n")
    if lines[-1] == b"":
        lines.pop()
    return [line[:-1] if line.endswith(b"\r") else line for line in lines]


@dataclass(frozen=True, slots=True)
class OverlayRecord:
    """Block of display-only lines shown after base line ``after_line``."""

    after_line: int
    lines: tuple[bytes, ...]


@dataclass(frozen=True, slots=True)
class ComposedRow:
    """One row of the composed view.

    ``source_line`` is the base-line index for base rows and the anchor for
    overlay rows; ``overlay_index`` is the record's position in
    ``Document.overlays``.
    """

    text: bytes
    kind: RowKind = "base"
    source_line: int = 0
    overlay_index: Optional[int] = None

    @property
    def is_overlay(self) -> bool:
        return self.kind == "overlay"


class ComposedView(Sequence[ComposedRow]):
    """Display-order rows derived from a document at one revision.

    Row indices are only meaningful against the view they came from; any
    overlay append produces a new view with shifted indices.
    """

    def __init__(self, rows: Sequence[ComposedRow], *, revision: int = 0) -> None:
        self._rows = tuple(rows)
        self.revision = revision

    @overload
    def __getitem__(self, index: int) -> ComposedRow: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[ComposedRow]: ...

    def __getitem__(self, index):
        return self._rows[index]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[ComposedRow]:
        return iter(self._rows)

    def text(self, row: int) -> bytes:
        if 0 <= row < len(self._rows):
            return self._rows[row].text
        return b""

    def line_len(self, row: int) -> int:
        return len(self.text(row))

    def row_kind(self, row: int) -> RowKind:
        return self._rows[row].kind

    @property
    def last_row(self) -> int:
        return max(0, len(self._rows) - 1)

    def texts(self) -> tuple[bytes, ...]:
        return tuple(row.text for row in self._rows)


@dataclass(slots=True)
class Document:
    """Immutable base lines with an append-only, anchor-sorted overlay list."""

    _lines: tuple[bytes, ...] = ()
    _overlays: List[OverlayRecord] = field(default_factory=list)
    revision: int = 0
    _cache: Optional[ComposedView] = None

    @classmethod
    def from_text(cls, content: str | bytes) -> "Document":
        return cls(_lines=tuple(split_lines(content)))

    @classmethod
    def from_lines(cls, lines: Iterable[str | bytes]) -> "Document":
        return cls(_lines=tuple(_to_bytes(line) for line in lines))

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> Sequence[bytes]:
        return self._lines

    @property
    def overlays(self) -> Sequence[OverlayRecord]:
        return tuple(self._overlays)

    def get_line(self, index: int) -> bytes:
        return self._lines[index]

    def add_overlay(
        self, after_line: int, lines: Iterable[str | bytes]
    ) -> OverlayRecord:
        """Insert an overlay after every existing overlay with the same anchor."""

        if after_line < 0:
            raise OverlayAnchorError(after_line)
        record = OverlayRecord(
            after_line=after_line, lines=tuple(_to_bytes(line) for line in lines)
        )
        anchors = [overlay.after_line for overlay in self._overlays]
        self._overlays.insert(bisect_right(anchors, after_line), record)
        self.revision += 1
        self._cache = None
        return record

    def compose(self) -> ComposedView:
        """Return base lines interleaved with overlays, cached per revision."""

        if self._cache is not None and self._cache.revision == self.revision:
            return self._cache

        rows: List[ComposedRow] = []
        overlays = self._overlays
        cursor = 0
        for index, line in enumerate(self._lines):
            rows.append(ComposedRow(text=line, kind="base", source_line=index))
            while cursor < len(overlays) and overlays[cursor].after_line <= index:
                rows.extend(_overlay_rows(overlays[cursor], cursor))
                cursor += 1
        # Anchors at or past the line count trail the document.
        while cursor < len(overlays):
            rows.extend(_overlay_rows(overlays[cursor], cursor))
            cursor += 1

        self._cache = ComposedView(rows, revision=self.revision)
        return self._cache


def _overlay_rows(record: OverlayRecord, index: int) -> Iterator[ComposedRow]:
    for text in record.lines:
        yield ComposedRow(
            text=text,
            kind="overlay",
            source_line=record.after_line,
            overlay_index=index,
        )


__all__ = [
    "ComposedRow",
    "ComposedView",
    "Document",
    "OverlayAnchorError",
    "OverlayRecord",
    "RowKind",
    "split_lines",
]
