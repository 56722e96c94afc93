"""Diagnostics."""

from lunaveil.diagnostics.codes import (
    LEXER_INVALID_ESCAPE,
    LEXER_MALFORMED_NUMBER,
    LEXER_UNEXPECTED_CHARACTER,
    LEXER_UNEXPECTED_EOF,
    LEXER_UNKNOWN_SYMBOL,
    LEXER_UNTERMINATED_LONG_BRACKET,
    LEXER_UNTERMINATED_STRING,
    PARSER_EXPECTED_EXPRESSION,
    PARSER_EXPECTED_TOKEN,
    PARSER_NESTING_TOO_DEEP,
    PARSER_REDUNDANT_SEMICOLON,
    PARSER_UNSUPPORTED_CONTINUE,
    DiagnosticSpec,
)
from lunaveil.diagnostics.diagnostic import Diagnostic, Severity

__all__ = [
    "LEXER_INVALID_ESCAPE",
    "LEXER_MALFORMED_NUMBER",
    "LEXER_UNEXPECTED_CHARACTER",
    "LEXER_UNEXPECTED_EOF",
    "LEXER_UNKNOWN_SYMBOL",
    "LEXER_UNTERMINATED_LONG_BRACKET",
    "LEXER_UNTERMINATED_STRING",
    "PARSER_EXPECTED_EXPRESSION",
    "PARSER_EXPECTED_TOKEN",
    "PARSER_NESTING_TOO_DEEP",
    "PARSER_REDUNDANT_SEMICOLON",
    "PARSER_UNSUPPORTED_CONTINUE",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
]
