"""Document model, composed view, byte classes, and annotation overlays."""

from .annotations import (
    AnnotationParseError,
    AnnotationRecord,
    apply_annotations,
    parse_annotations,
    records_for_path,
)
from .classify import (
    classify_byte,
    is_blank,
    is_punct_byte,
    is_whitespace_byte,
    is_word_byte,
)
from .document import (
    ComposedRow,
    ComposedView,
    Document,
    OverlayAnchorError,
    OverlayRecord,
    RowKind,
    split_lines,
)

__all__ = [
    "AnnotationParseError",
    "AnnotationRecord",
    "ComposedRow",
    "ComposedView",
    "Document",
    "OverlayAnchorError",
    "OverlayRecord",
    "RowKind",
    "apply_annotations",
    "classify_byte",
    "is_blank",
    "is_punct_byte",
    "is_whitespace_byte",
    "is_word_byte",
    "parse_annotations",
    "records_for_path",
    "split_lines",
]
