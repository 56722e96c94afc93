"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final

from lunaveil.diagnostics.diagnostic import Diagnostic, Severity
from lunaveil.text import TextRange


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None

    def at(
        self,
        range: TextRange,
        line: int,
        column: int,
        *,
        detail: str | None = None,
    ) -> Diagnostic:
        """Build a diagnostic at a source position, appending `detail` to the message."""
        message = self.message if detail is None else f"{self.message}: {detail}"
        return Diagnostic(
            code=self.code,
            message=message,
            range=range,
            line=line,
            column=column,
            severity=self.severity,
            hint=self.hint,
            category=self.category,
        )


LEXER_UNEXPECTED_CHARACTER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNEXPECTED_CHARACTER",
    message="Unexpected character",
    severity="error",
    category="lexer",
)

LEXER_UNKNOWN_SYMBOL: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNKNOWN_SYMBOL",
    message="Unknown symbol",
    severity="error",
    category="lexer",
)

LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string",
    hint="Close the string with its opening quote on the same line, or escape the newline.",
    severity="error",
    category="lexer",
)

LEXER_UNTERMINATED_LONG_BRACKET: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_LONG_BRACKET",
    message="Unterminated long bracket",
    hint="Close the long string or comment with a bracket of the same level, e.g. `]==]`.",
    severity="error",
    category="lexer",
)

LEXER_INVALID_ESCAPE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_INVALID_ESCAPE",
    message="Invalid escape sequence",
    severity="error",
    category="lexer",
)

LEXER_MALFORMED_NUMBER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_MALFORMED_NUMBER",
    message="Malformed number",
    hint="An exponent marker must be followed by at least one digit.",
    severity="error",
    category="lexer",
)

LEXER_UNEXPECTED_EOF: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNEXPECTED_EOF",
    message="Unexpected end of input",
    severity="error",
    category="lexer",
)

PARSER_EXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_TOKEN",
    message="Expected token",
    severity="error",
    category="parser",
)

PARSER_EXPECTED_EXPRESSION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_EXPRESSION",
    message="Expected an expression",
    severity="error",
    category="parser",
)

PARSER_UNSUPPORTED_CONTINUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNSUPPORTED_CONTINUE",
    message="`continue` is not supported by this Lua version",
    hint="Select the LuaU dialect to use `continue`.",
    severity="error",
    category="parser",
)

PARSER_REDUNDANT_SEMICOLON: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_REDUNDANT_SEMICOLON",
    message="Redundant semicolon",
    severity="warning",
    category="parser",
)

PARSER_NESTING_TOO_DEEP: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_NESTING_TOO_DEEP",
    message="Expression nested too deeply",
    hint="Split the expression into local variables.",
    severity="error",
    category="parser",
)
