"""Lexer."""

from lunaveil.lexer.lexer import (
    ANNOTATION_PREFIXES,
    RESERVED_PREFIX,
    LexError,
    Lexer,
    dump_tokens,
    token_text,
    tokenize,
)
from lunaveil.lexer.tokens import Token, TokenKind

__all__ = [
    "ANNOTATION_PREFIXES",
    "RESERVED_PREFIX",
    "LexError",
    "Lexer",
    "Token",
    "TokenKind",
    "dump_tokens",
    "token_text",
    "tokenize",
]
