"""High-level parse entrypoints."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from lunaveil.ast import Block
from lunaveil.diagnostics import Diagnostic
from lunaveil.dialect import LuaVersion
from lunaveil.lexer import Token, tokenize
from lunaveil.parser.grammar import parse_block
from lunaveil.parser.parser import ParseAbort, Parser


class ParseFailed(Exception):
    """Raised by `ParseResult.unwrap` when the parse produced an error."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.render())
        self.diagnostic = diagnostic


@dataclass(frozen=True, slots=True)
class ParseResult:
    """All-or-nothing parse outcome.

    Exactly one of `block` and `error` is set. Warnings are only reported for
    successful parses, in encounter order.
    """

    block: Block | None
    warnings: tuple[Diagnostic, ...] = ()
    error: Diagnostic | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Block:
        if self.error is not None:
            raise ParseFailed(self.error)
        assert self.block is not None
        return self.block


def parse_tokens(tokens: Sequence[Token], dialect: LuaVersion = LuaVersion.LUA51) -> ParseResult:
    parser = Parser(tokens, dialect)
    try:
        block = parse_block(parser)
    except ParseAbort as abort:
        return ParseResult(block=None, error=abort.diagnostic)
    return ParseResult(block=block, warnings=tuple(parser.finish()))


def parse_source(text: str | bytes, dialect: LuaVersion = LuaVersion.LUA51) -> ParseResult:
    """Tokenize and parse. Lexer faults still raise `LexError`."""
    return parse_tokens(tokenize(text, dialect), dialect)
