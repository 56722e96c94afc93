"""Static lexical conventions for the supported Lua dialects."""

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Final, Mapping


class LuaVersion(StrEnum):
    """Supported dialects, named by their configuration tag."""

    LUA51 = "Lua51"
    LUAU = "LuaU"

    @property
    def conventions(self) -> "LuaConventions":
        return CONVENTIONS[self]


@dataclass(frozen=True, slots=True)
class LuaConventions:
    """Keyword, symbol, character-class and escape tables for one dialect."""

    keywords: frozenset[str]
    symbol_chars: frozenset[str]
    symbols: frozenset[str]
    max_symbol_length: int
    ident_chars: frozenset[str]
    number_chars: frozenset[str]
    hex_number_chars: frozenset[str]
    binary_number_chars: frozenset[str]
    decimal_exponent: frozenset[str]
    hexadecimal_nums: frozenset[str]
    binary_nums: frozenset[str]
    decimal_separators: frozenset[str] | None
    escape_sequences: Mapping[str, str]
    numerical_escapes: bool
    escape_z_ignore_next_whitespace: bool
    hex_escapes: bool
    unicode_escapes: bool

    @property
    def ident_start_chars(self) -> frozenset[str]:
        return self.ident_chars - self.number_chars

    def is_keyword(self, text: str) -> bool:
        return text in self.keywords

    def is_separator(self, ch: str) -> bool:
        return self.decimal_separators is not None and ch in self.decimal_separators


_LUA51_KEYWORDS: Final[frozenset[str]] = frozenset(
    {
        "and", "break", "do", "else", "elseif",
        "end", "false", "for", "function", "if",
        "in", "local", "nil", "not", "or",
        "repeat", "return", "then", "true", "until", "while",
    }
)  # fmt: skip

_LUA51_SYMBOLS: Final[frozenset[str]] = frozenset(
    {
        "+", "-", "*", "/", "%", "^", "#",
        "==", "~=", "<=", ">=", "<", ">", "=",
        "(", ")", "{", "}", "[", "]",
        ";", ":", ",", ".", "..", "...",
    }
)  # fmt: skip

AUGMENTED_ASSIGNMENT_SYMBOLS: Final[frozenset[str]] = frozenset(
    {"+=", "-=", "*=", "/=", "%=", "^=", "..="}
)

_LUAU_EXTRA_SYMBOLS: Final[frozenset[str]] = frozenset({"::", "->", "?", "|", "&"})

_IDENT_CHARS: Final[frozenset[str]] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_0123456789"
)
_NUMBER_CHARS: Final[frozenset[str]] = frozenset("0123456789")
_HEX_NUMBER_CHARS: Final[frozenset[str]] = frozenset("0123456789abcdefABCDEF")

_ESCAPE_SEQUENCES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "a": "\a",
        "b": "\b",
        "f": "\f",
        "n": "\n",
        "r": "\r",
        "t": "\t",
        "v": "\v",
        "\\": "\\",
        '"': '"',
        "'": "'",
    }
)

LUA51_CONVENTIONS: Final[LuaConventions] = LuaConventions(
    keywords=_LUA51_KEYWORDS,
    symbol_chars=frozenset("+-*/%^#=~<>(){}[];:,."),
    symbols=_LUA51_SYMBOLS,
    max_symbol_length=3,
    ident_chars=_IDENT_CHARS,
    number_chars=_NUMBER_CHARS,
    hex_number_chars=_HEX_NUMBER_CHARS,
    binary_number_chars=frozenset("01"),
    decimal_exponent=frozenset("eE"),
    hexadecimal_nums=frozenset("xX"),
    binary_nums=frozenset("bB"),
    decimal_separators=None,
    escape_sequences=_ESCAPE_SEQUENCES,
    numerical_escapes=True,
    escape_z_ignore_next_whitespace=True,
    hex_escapes=True,
    unicode_escapes=True,
)

LUAU_CONVENTIONS: Final[LuaConventions] = LuaConventions(
    keywords=_LUA51_KEYWORDS | {"continue"},
    symbol_chars=frozenset("+-*/%^#=~<>(){}[];:,.?|&"),
    symbols=_LUA51_SYMBOLS | AUGMENTED_ASSIGNMENT_SYMBOLS | _LUAU_EXTRA_SYMBOLS,
    max_symbol_length=3,
    ident_chars=_IDENT_CHARS,
    number_chars=_NUMBER_CHARS,
    hex_number_chars=_HEX_NUMBER_CHARS,
    binary_number_chars=frozenset("01"),
    decimal_exponent=frozenset("eE"),
    hexadecimal_nums=frozenset("xX"),
    binary_nums=frozenset("bB"),
    decimal_separators=frozenset("_"),
    escape_sequences=_ESCAPE_SEQUENCES,
    numerical_escapes=True,
    escape_z_ignore_next_whitespace=True,
    hex_escapes=True,
    unicode_escapes=True,
)

CONVENTIONS: Final[Mapping[LuaVersion, LuaConventions]] = MappingProxyType(
    {
        LuaVersion.LUA51: LUA51_CONVENTIONS,
        LuaVersion.LUAU: LUAU_CONVENTIONS,
    }
)
