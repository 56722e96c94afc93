"""Dialect-aware Lua lexer."""

import logging
from typing import Final, NoReturn

from lunaveil.diagnostics import (
    LEXER_INVALID_ESCAPE,
    LEXER_MALFORMED_NUMBER,
    LEXER_UNEXPECTED_CHARACTER,
    LEXER_UNEXPECTED_EOF,
    LEXER_UNKNOWN_SYMBOL,
    LEXER_UNTERMINATED_LONG_BRACKET,
    LEXER_UNTERMINATED_STRING,
    Diagnostic,
    DiagnosticSpec,
)
from lunaveil.dialect import LuaVersion
from lunaveil.lexer.tokens import Token, TokenKind
from lunaveil.text import LineIndex, TextRange, as_byte_text, slice_text_range

logger = logging.getLogger(__name__)

RESERVED_PREFIX: Final[str] = "__lunaveil_"
"""Prefix of identifiers the obfuscator generates for itself."""

ANNOTATION_PREFIXES: Final[frozenset[str]] = frozenset("!@")

_WHITESPACE: Final[frozenset[str]] = frozenset(" \t\r\n\v\f")
_NEWLINES: Final[frozenset[str]] = frozenset("\r\n")
_REPLACEMENT_CHARACTER: Final[str] = as_byte_text("\ufffd")


class LexError(Exception):
    """Fatal lexer fault. No partial token stream is produced."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.render())
        self.diagnostic = diagnostic

    @property
    def line(self) -> int:
        return self.diagnostic.line

    @property
    def column(self) -> int:
        return self.diagnostic.column


class Lexer:
    """Converts Lua source text into tokens following one dialect's conventions.

    The lexer works on byte text (see `as_byte_text`): `str` input is taken as
    its UTF-8 encoding and `bytes` input as-is, so every offset, column and
    string value in the token stream is in bytes, as Lua sees it.
    """

    def __init__(self, source: str | bytes, dialect: LuaVersion = LuaVersion.LUA51) -> None:
        source = as_byte_text(source)
        self._source = source
        self._dialect = dialect
        self._conventions = dialect.conventions
        self._ident_start_chars = self._conventions.ident_start_chars
        self._line_index = LineIndex(source)
        self._position = 0
        self._pending_annotations: list[str] = []
        self._eof_emitted = False

    @property
    def source(self) -> str:
        return self._source

    @property
    def dialect(self) -> LuaVersion:
        return self._dialect

    @property
    def line_index(self) -> LineIndex:
        return self._line_index

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def lex(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                break
        return tokens

    def next_token(self) -> Token:
        if self._eof_emitted:
            raise RuntimeError("Lexer already produced its EOF token")

        self._skip_whitespace_and_comments()
        start = self._position
        if self.is_eof:
            self._eof_emitted = True
            return self._make_token(TokenKind.EOF, "", start)

        conventions = self._conventions
        ch = self._current_char()

        if ch in conventions.number_chars:
            return self._lex_number(start)

        if ch in self._ident_start_chars:
            return self._lex_identifier(start)

        if ch == '"' or ch == "'":
            return self._lex_string(start)

        if ch == "[":
            level = self._long_bracket_level()
            if level is not None:
                return self._lex_long_string(start, level)

        if ch == "." and self._peek_char() in conventions.number_chars:
            return self._lex_number(start)

        if ch in conventions.symbol_chars:
            return self._lex_symbol(start)

        self._fail(LEXER_UNEXPECTED_CHARACTER, start, detail=repr(ch))

    # ------------------------------------------------------------------
    # Trivia
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> None:
        while not self.is_eof:
            ch = self._current_char()
            if ch in _WHITESPACE:
                self._advance(1)
                continue
            if ch == "-" and self._peek_char() == "-":
                self._skip_comment()
                continue
            break

    def _skip_comment(self) -> None:
        start = self._position
        self._advance(2)

        if self._current_char() == "[":
            level = self._long_bracket_level()
            if level is not None:
                self._advance(level + 2)
                body_start = self._position
                body_end = self._find_long_bracket_close(level, start)
                self._collect_annotations(self._source[body_start:body_end])
                self._position = body_end + level + 2
                return

        end = self._source.find("\n", self._position)
        if end < 0:
            end = len(self._source)
        self._collect_annotations(self._source[self._position : end])
        self._position = end

    def _collect_annotations(self, comment: str) -> None:
        for word in comment.split():
            if len(word) > 1 and word[0] in ANNOTATION_PREFIXES:
                self._pending_annotations.append(word)

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def _lex_number(self, start: int) -> Token:
        conventions = self._conventions

        if self._current_char() == "0":
            marker = self._peek_char()
            if marker in conventions.hexadecimal_nums:
                return self._lex_radix_integer(start, conventions.hex_number_chars, 16)
            if marker in conventions.binary_nums:
                return self._lex_radix_integer(start, conventions.binary_number_chars, 2)

        self._consume_digits(conventions.number_chars)
        if self._current_char() == "." and self._peek_char() != ".":
            self._advance(1)
            self._consume_digits(conventions.number_chars)

        if self._current_char() in conventions.decimal_exponent:
            self._advance(1)
            if self._current_char() in ("+", "-"):
                self._advance(1)
            if self._current_char() not in conventions.number_chars:
                self._fail(LEXER_MALFORMED_NUMBER, start, detail=self._source[start : self._position])
            self._consume_digits(conventions.number_chars)

        self._reject_trailing_identifier(start)
        text = self._strip_separators(self._source[start : self._position])
        return self._make_token(TokenKind.NUMBER, float(text), start)

    def _lex_radix_integer(self, start: int, digits: frozenset[str], base: int) -> Token:
        self._advance(2)
        self._consume_digits(digits)
        self._reject_trailing_identifier(start)

        text = self._strip_separators(self._source[start + 2 : self._position])
        if not text:
            self._fail(LEXER_MALFORMED_NUMBER, start, detail=self._source[start : self._position])
        return self._make_token(TokenKind.NUMBER, float(int(text, base)), start)

    def _consume_digits(self, digits: frozenset[str]) -> None:
        conventions = self._conventions
        while not self.is_eof:
            ch = self._current_char()
            if ch in digits or conventions.is_separator(ch):
                self._advance(1)
                continue
            break

    def _reject_trailing_identifier(self, start: int) -> None:
        if self._current_char() in self._conventions.ident_chars:
            self._advance(1)
            self._fail(LEXER_MALFORMED_NUMBER, start, detail=self._source[start : self._position])

    def _strip_separators(self, text: str) -> str:
        separators = self._conventions.decimal_separators
        if not separators:
            return text
        return "".join(ch for ch in text if ch not in separators)

    # ------------------------------------------------------------------
    # Identifiers / keywords
    # ------------------------------------------------------------------

    def _lex_identifier(self, start: int) -> Token:
        ident_chars = self._conventions.ident_chars
        while not self.is_eof and self._current_char() in ident_chars:
            self._advance(1)

        text = self._source[start : self._position]
        if self._conventions.is_keyword(text):
            return self._make_token(TokenKind.KEYWORD, text, start)

        token = self._make_token(TokenKind.IDENT, text, start)
        if text.startswith(RESERVED_PREFIX):
            logger.warning(
                "identifier %r at %d:%d uses the reserved prefix %r and may collide with generated names",
                text,
                token.line,
                token.column,
                RESERVED_PREFIX,
            )
        return token

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    def _lex_string(self, start: int) -> Token:
        quote = self._current_char()
        self._advance(1)
        parts: list[str] = []

        while True:
            if self.is_eof:
                self._fail(LEXER_UNTERMINATED_STRING, start)
            ch = self._current_char()
            if ch == quote:
                self._advance(1)
                break
            if ch in _NEWLINES:
                self._fail(LEXER_UNTERMINATED_STRING, start)
            if ch == "\\":
                self._lex_escape(parts, start)
                continue
            parts.append(ch)
            self._advance(1)

        return self._make_token(TokenKind.STRING, "".join(parts), start)

    def _lex_escape(self, parts: list[str], string_start: int) -> None:
        escape_start = self._position
        self._advance(1)
        if self.is_eof:
            self._fail(LEXER_UNEXPECTED_EOF, string_start, detail="after `\\` in string")

        conventions = self._conventions
        ch = self._current_char()

        if ch in conventions.escape_sequences:
            parts.append(conventions.escape_sequences[ch])
            self._advance(1)
            return

        if ch in _NEWLINES:
            self._consume_newline()
            parts.append("\n")
            return

        if conventions.numerical_escapes and ch in conventions.number_chars:
            digits_start = self._position
            while self._position - digits_start < 3 and self._current_char() in conventions.number_chars:
                self._advance(1)
            code = int(self._source[digits_start : self._position])
            if code > 255:
                self._fail(LEXER_INVALID_ESCAPE, escape_start, detail="decimal escape too large")
            parts.append(chr(code))
            return

        if conventions.hex_escapes and ch == "x":
            self._advance(1)
            digits = self._source[self._position : self._position + 2]
            if len(digits) != 2 or any(d not in conventions.hex_number_chars for d in digits):
                self._fail(LEXER_INVALID_ESCAPE, escape_start, detail="hexadecimal digit expected")
            self._advance(2)
            parts.append(chr(int(digits, 16)))
            return

        if conventions.unicode_escapes and ch == "u":
            self._advance(1)
            parts.append(self._lex_unicode_escape(escape_start))
            return

        if conventions.escape_z_ignore_next_whitespace and ch == "z":
            self._advance(1)
            while not self.is_eof and self._current_char() in _WHITESPACE:
                self._advance(1)
            return

        self._fail(LEXER_INVALID_ESCAPE, escape_start, detail=f"\\{ch}")

    def _lex_unicode_escape(self, escape_start: int) -> str:
        if self._current_char() != "{":
            self._fail(LEXER_INVALID_ESCAPE, escape_start, detail="missing '{' in \\u{xxxx}")
        self._advance(1)

        digits_start = self._position
        while not self.is_eof and self._current_char() in self._conventions.hex_number_chars:
            self._advance(1)
        digits = self._source[digits_start : self._position]
        if not digits or self._current_char() != "}":
            self._fail(LEXER_INVALID_ESCAPE, escape_start, detail="malformed \\u{xxxx}")
        self._advance(1)

        code = int(digits, 16)
        if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            return _REPLACEMENT_CHARACTER
        return as_byte_text(chr(code))

    def _lex_long_string(self, start: int, level: int) -> Token:
        self._advance(level + 2)
        if self._source.startswith("\r\n", self._position):
            self._advance(2)
        elif self._current_char() in _NEWLINES:
            self._advance(1)

        body_start = self._position
        body_end = self._find_long_bracket_close(level, start)
        self._position = body_end + level + 2
        return self._make_token(TokenKind.STRING, self._source[body_start:body_end], start)

    def _long_bracket_level(self) -> int | None:
        """Level of the long bracket opening at the cursor, or None if `[` starts no long bracket."""
        index = self._position + 1
        while index < len(self._source) and self._source[index] == "=":
            index += 1
        if index < len(self._source) and self._source[index] == "[":
            return index - self._position - 1
        return None

    def _find_long_bracket_close(self, level: int, start: int) -> int:
        closing = "]" + "=" * level + "]"
        index = self._source.find(closing, self._position)
        if index < 0:
            self._fail(LEXER_UNTERMINATED_LONG_BRACKET, start)
        return index

    # ------------------------------------------------------------------
    # Symbols
    # ------------------------------------------------------------------

    def _lex_symbol(self, start: int) -> Token:
        symbols = self._conventions.symbols
        for length in range(self._conventions.max_symbol_length, 0, -1):
            candidate = self._source[self._position : self._position + length]
            if len(candidate) == length and candidate in symbols:
                self._advance(length)
                return self._make_token(TokenKind.SYMBOL, candidate, start)

        self._fail(LEXER_UNKNOWN_SYMBOL, start, detail=repr(self._current_char()))

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _make_token(self, kind: TokenKind, value: str | float, start: int) -> Token:
        line, column = self._line_index.line_col(start)
        annotations = tuple(self._pending_annotations)
        self._pending_annotations.clear()
        return Token(
            kind=kind,
            value=value,
            range=TextRange.from_offsets(start, self._position),
            line=line,
            column=column,
            text=self._source[start : self._position],
            annotations=annotations,
        )

    def _fail(self, spec: DiagnosticSpec, start: int, *, detail: str | None = None) -> NoReturn:
        line, column = self._line_index.line_col(start)
        diagnostic = spec.at(
            TextRange.from_offsets(start, max(start, self._position)),
            line,
            column,
            detail=detail,
        )
        logger.error("%s", diagnostic.render())
        raise LexError(diagnostic)

    def _consume_newline(self) -> None:
        if self._source.startswith("\r\n", self._position) or self._source.startswith("\n\r", self._position):
            self._advance(2)
        else:
            self._advance(1)

    def _current_char(self) -> str:
        if self.is_eof:
            return ""
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return ""
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps


def tokenize(source: str | bytes, dialect: LuaVersion = LuaVersion.LUA51) -> list[Token]:
    """Tokenize a whole source text. Raises `LexError` on the first fault."""
    return Lexer(source, dialect).lex()


def token_text(source: str | bytes, token: Token) -> str:
    """Get the byte text of a token from the source it was lexed from."""
    if token.kind == TokenKind.EOF:
        return ""
    return slice_text_range(as_byte_text(source), token.range)


def dump_tokens(tokens: list[Token]) -> None:
    """Print token list with kind, range, position, value and annotations for debugging."""
    for i, tok in enumerate(tokens):
        annotations = f" annotations={list(tok.annotations)}" if tok.annotations else ""
        print(
            f"{i:03d} {tok.kind.name:<8} range={tok.range.as_tuple()} "
            f"at={tok.line}:{tok.column} value={tok.value!r}{annotations}"
        )
