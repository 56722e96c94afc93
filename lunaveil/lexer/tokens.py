"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum

from lunaveil.text import TextRange


class TokenKind(IntEnum):
    EOF = 1
    KEYWORD = 2
    SYMBOL = 3
    IDENT = 4
    NUMBER = 5
    STRING = 6


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token.

    `value` is the decoded payload: the float value for numbers, the unescaped
    contents for strings, the text itself for everything else. `text` is the
    raw source slice.
    """

    kind: TokenKind
    value: str | float
    range: TextRange
    line: int
    column: int
    text: str
    annotations: tuple[str, ...] = ()

    def is_keyword(self, keyword: str) -> bool:
        return self.kind == TokenKind.KEYWORD and self.value == keyword

    def is_symbol(self, symbol: str) -> bool:
        return self.kind == TokenKind.SYMBOL and self.value == symbol

    def describe(self) -> str:
        """Short human-readable form used in diagnostics."""
        if self.kind == TokenKind.EOF:
            return "end of input"
        return f"{self.kind.name.lower()} `{self.text}`"
