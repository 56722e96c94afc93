"""Identifier generation strategies."""

from lunaveil.naming.encoding import decode_id, encode_id
from lunaveil.naming.generators import (
    IL_DIGITS,
    IL_START,
    MANGLED_DIGITS,
    MANGLED_START,
    NAME_GENERATORS,
    ConfuseGenerator,
    IlGenerator,
    MangledGenerator,
    MangledShuffledGenerator,
    NameGenerator,
    NumberGenerator,
    UnknownNameGeneratorError,
    create_name_generator,
)
from lunaveil.naming.words import VAR_NAMES

__all__ = [
    "IL_DIGITS",
    "IL_START",
    "MANGLED_DIGITS",
    "MANGLED_START",
    "NAME_GENERATORS",
    "VAR_NAMES",
    "ConfuseGenerator",
    "IlGenerator",
    "MangledGenerator",
    "MangledShuffledGenerator",
    "NameGenerator",
    "NumberGenerator",
    "UnknownNameGeneratorError",
    "create_name_generator",
    "decode_id",
    "encode_id",
]
