"""Parser (token cursor + grammar + entrypoints)."""

from lunaveil.parser.grammar import (
    BINARY_PRECEDENCE,
    RIGHT_ASSOCIATIVE,
    parse_block,
    parse_expression,
    parse_statement,
)
from lunaveil.parser.parse import ParseFailed, ParseResult, parse_source, parse_tokens
from lunaveil.parser.parser import MAX_NESTING_DEPTH, ParseAbort, Parser

__all__ = [
    "BINARY_PRECEDENCE",
    "MAX_NESTING_DEPTH",
    "RIGHT_ASSOCIATIVE",
    "ParseAbort",
    "ParseFailed",
    "ParseResult",
    "Parser",
    "parse_block",
    "parse_expression",
    "parse_source",
    "parse_statement",
    "parse_tokens",
]
