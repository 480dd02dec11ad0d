"""Cursor/viewport arithmetic, motions, search, and selection."""

from .motions import paragraph_down, paragraph_up, word_backward, word_forward
from .search import Highlight, SearchIndex, find_hits
from .selection import Selection, SelectionMode, SelectionRange, Span, normalize
from .viewport import Cursor, Viewport

__all__ = [
    "Cursor",
    "Highlight",
    "SearchIndex",
    "Selection",
    "SelectionMode",
    "SelectionRange",
    "Span",
    "Viewport",
    "find_hits",
    "normalize",
    "paragraph_down",
    "paragraph_up",
    "word_backward",
    "word_forward",
]
