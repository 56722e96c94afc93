from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """
    Half-open span [start, end) of byte offsets into the source.

    Invariant:
    - 0 <= start <= end
    """

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < 0:
            raise ValueError("TextRange positions cannot be negative")
        if self.start > self.end:
            raise ValueError("TextRange invariant violated: start > end")

    @staticmethod
    def from_offsets(start: int, end: int) -> "TextRange":
        return TextRange(start, end)

    def __len__(self) -> int:
        return self.end - self.start

    def as_tuple(self) -> tuple[int, int]:
        """Get the range as a tuple of (start, end) integers."""
        return (self.start, self.end)

    def __repr__(self) -> str:
        return f"TextRange({self.start}, {self.end})"


def as_byte_text(source: str | bytes) -> str:
    """Lua source as byte text: one character per byte, code points 0..255.

    `str` input stands for its UTF-8 encoding. Offsets into the result are
    byte offsets, and `.encode("latin-1")` gives the original bytes back.
    """
    if isinstance(source, str):
        source = source.encode("utf-8")
    return source.decode("latin-1")


def slice_text_range(source: str, range: TextRange) -> str:
    """Get the substring of the source text covered by the given TextRange."""
    return source[range.start : range.end]


class LineIndex:
    """Offset to (line, column) table built in one pass over the source.

    One entry per character plus a sentinel for end of input, so lookups are
    constant time. Lines and columns are 1-based.
    """

    __slots__ = ("_lines", "_columns")

    def __init__(self, source: str) -> None:
        lines: list[int] = []
        columns: list[int] = []
        line = 1
        column = 1
        for ch in source:
            lines.append(line)
            columns.append(column)
            if ch == "\n":
                line += 1
                column = 1
            else:
                column += 1
        lines.append(line)
        columns.append(column)
        self._lines = lines
        self._columns = columns

    @property
    def line_count(self) -> int:
        return self._lines[-1]

    def line_col(self, offset: int) -> tuple[int, int]:
        offset = min(max(offset, 0), len(self._lines) - 1)
        return self._lines[offset], self._columns[offset]
