"""Token cursor used by the grammar routines."""

from collections.abc import Sequence
from typing import Final, NoReturn

from lunaveil.diagnostics import PARSER_EXPECTED_TOKEN, PARSER_NESTING_TOO_DEEP, Diagnostic, DiagnosticSpec
from lunaveil.dialect import LuaConventions, LuaVersion
from lunaveil.lexer import Token, TokenKind

MAX_NESTING_DEPTH: Final[int] = 200
"""Deepest parenthesized expression accepted; Lua 5.1 caps C-level nesting at 200 too."""


class ParseAbort(Exception):
    """Internal signal unwinding the grammar routines on the first error."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.render())
        self.diagnostic = diagnostic


class Parser:
    """Single-token-lookahead cursor over a finished token stream.

    The cursor never moves past the final EOF token.
    """

    def __init__(self, tokens: Sequence[Token], dialect: LuaVersion = LuaVersion.LUA51) -> None:
        if not tokens or tokens[-1].kind != TokenKind.EOF:
            raise ValueError("Token stream must end with an EOF token")
        self._tokens = tokens
        self._dialect = dialect
        self._conventions = dialect.conventions
        self._position = 0
        self._warnings: list[Diagnostic] = []
        self._depth = 0

    @property
    def dialect(self) -> LuaVersion:
        return self._dialect

    @property
    def conventions(self) -> LuaConventions:
        return self._conventions

    @property
    def current(self) -> Token:
        return self._tokens[self._position]

    @property
    def position(self) -> int:
        return self._position

    @property
    def warnings(self) -> list[Diagnostic]:
        return self._warnings

    def nth(self, n: int) -> Token:
        index = min(self._position + n, len(self._tokens) - 1)
        return self._tokens[index]

    def at(self, kind: TokenKind) -> bool:
        return self.current.kind == kind

    def at_symbol(self, symbol: str) -> bool:
        return self.current.is_symbol(symbol)

    def at_keyword(self, keyword: str) -> bool:
        return self.current.is_keyword(keyword)

    def bump(self) -> Token:
        token = self.current
        if token.kind != TokenKind.EOF:
            self._position += 1
        return token

    def eat_symbol(self, symbol: str) -> bool:
        if self.at_symbol(symbol):
            self.bump()
            return True
        return False

    def expect_symbol(self, symbol: str, context: str) -> Token:
        if self.at_symbol(symbol):
            return self.bump()
        self.error(
            PARSER_EXPECTED_TOKEN,
            self.current,
            detail=f"`{symbol}` {context}, got {self.current.describe()}",
        )

    def expect_kind(self, kind: TokenKind, what: str, context: str) -> Token:
        if self.at(kind):
            return self.bump()
        self.error(
            PARSER_EXPECTED_TOKEN,
            self.current,
            detail=f"{what} {context}, got {self.current.describe()}",
        )

    def enter_nested(self, token: Token) -> None:
        if self._depth >= MAX_NESTING_DEPTH:
            self.error(PARSER_NESTING_TOO_DEEP, token, detail=f"more than {MAX_NESTING_DEPTH} levels")
        self._depth += 1

    def exit_nested(self) -> None:
        self._depth -= 1

    def warn(self, spec: DiagnosticSpec, token: Token, *, detail: str | None = None) -> None:
        self._warnings.append(spec.at(token.range, token.line, token.column, detail=detail))

    def error(self, spec: DiagnosticSpec, token: Token, *, detail: str | None = None) -> NoReturn:
        raise ParseAbort(spec.at(token.range, token.line, token.column, detail=detail))

    def finish(self) -> list[Diagnostic]:
        return self._warnings
