"""Dialect tables."""

from lunaveil.dialect.conventions import (
    AUGMENTED_ASSIGNMENT_SYMBOLS,
    CONVENTIONS,
    LUA51_CONVENTIONS,
    LUAU_CONVENTIONS,
    LuaConventions,
    LuaVersion,
)

__all__ = [
    "AUGMENTED_ASSIGNMENT_SYMBOLS",
    "CONVENTIONS",
    "LUA51_CONVENTIONS",
    "LUAU_CONVENTIONS",
    "LuaConventions",
    "LuaVersion",
]
