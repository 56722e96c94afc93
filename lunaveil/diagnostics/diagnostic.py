"""Diagnostics core types."""

from dataclasses import dataclass
from typing import Literal

from lunaveil.text import TextRange

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured message emitted by the lexer, parser and steps.

    A parse error is an error-severity diagnostic, a parse warning a
    warning-severity one. `line` and `column` are 1-based.
    """

    code: str
    message: str
    range: TextRange
    line: int
    column: int
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def render(self) -> str:
        text = f"{self.line}:{self.column}: {self.severity}: {self.message}"
        if self.hint:
            text = f"{text} ({self.hint})"
        return text

    def __str__(self) -> str:
        return self.render()
