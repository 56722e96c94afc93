"""Decoy literal helpers used by steps.

All helpers draw from an explicit `random.Random` (normally `StepContext.rng`)
so that output is reproducible for a given pipeline seed.
"""

import random
from collections.abc import Sequence
from typing import Final

from lunaveil.ast import Literal, Number, String
from lunaveil.steps.base import StepContext

CHARSET: Final[str] = "qwertyuiopasdfghjklzxcvbnmQWERTYUIOPASDFGHJKLZXCVBNM1234567890"
RANDOM_STRING_MIN_LENGTH: Final[int] = 2
RANDOM_STRING_MAX_LENGTH: Final[int] = 15

# Signed 24-bit range, shared with index and offset generation.
NUMBER_LITERAL_MIN: Final[int] = -8_388_608
NUMBER_LITERAL_MAX: Final[int] = 8_388_607


def random_string(rng: random.Random, words: Sequence[str] | None = None) -> str:
    """A word from `words` when given, otherwise random alphanumerics of length 2..15."""
    if words:
        return rng.choice(words)
    length = rng.randint(RANDOM_STRING_MIN_LENGTH, RANDOM_STRING_MAX_LENGTH)
    return "".join(rng.choice(CHARSET) for _ in range(length))


def random_string_expr(rng: random.Random, words: Sequence[str] | None = None) -> String:
    return String(value=random_string(rng, words))


def string_literal(context: StepContext) -> String:
    """A string literal shaped like a generated identifier."""
    return String(value=context.name_generator.generate())


def dictionary_literal(rng: random.Random) -> String:
    return random_string_expr(rng)


def number_literal(rng: random.Random) -> Number:
    return Number(value=float(rng.randint(NUMBER_LITERAL_MIN, NUMBER_LITERAL_MAX)))


def any_literal(context: StepContext) -> Literal:
    match context.rng.randint(1, 3):
        case 1:
            return string_literal(context)
        case 2:
            return number_literal(context.rng)
        case _:
            return dictionary_literal(context.rng)
