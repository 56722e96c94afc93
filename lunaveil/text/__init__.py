"""Source text coordinates."""

from lunaveil.text.text import LineIndex, TextRange, as_byte_text, slice_text_range

__all__ = [
    "LineIndex",
    "TextRange",
    "as_byte_text",
    "slice_text_range",
]
