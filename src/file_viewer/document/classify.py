"""Byte classes used by word and paragraph motion.

Classification is per raw byte. Multi-byte UTF-8 sequences are not decoded, so
their bytes fall into the punctuation class.
"""

from __future__ import annotations

from typing import Literal

ByteClass = Literal["word", "whitespace", "punct"]

# Same set as ``u8::is_ascii_whitespace``: no vertical tab.
_WHITESPACE = frozenset(b" \t\n\r\x0c")


def is_word_byte(b: int) -> bool:
    return (
        0x30 <= b <= 0x39  # 0-9
        or 0x41 <= b <= 0x5A  # A-Z
        or 0x61 <= b <= 0x7A  # a-z
        or b == 0x5F  # _
    )


def is_whitespace_byte(b: int) -> bool:
    return b in _WHITESPACE


def is_punct_byte(b: int) -> bool:
    return not is_word_byte(b) and not is_whitespace_byte(b)


def classify_byte(b: int) -> ByteClass:
    if is_word_byte(b):
        return "word"
    if is_whitespace_byte(b):
        return "whitespace"
    return "punct"


def is_blank(text: bytes) -> bool:
    """True when ``text`` is empty after trimming ASCII whitespace."""

    return all(is_whitespace_byte(b) for b in text)


__all__ = [
    "ByteClass",
    "classify_byte",
    "is_blank",
    "is_punct_byte",
    "is_whitespace_byte",
    "is_word_byte",
]
