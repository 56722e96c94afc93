"""Bijective positional identifier encoding.

A positive counter value maps to a sequence of symbols: the first symbol comes
from a start alphabet (so names never begin with a digit), the remaining ones
from a continuation alphabet, least significant first. Every positive integer
gets exactly one encoding, so a generator driven by a strictly increasing
counter can never repeat a name.
"""

from collections.abc import Sequence


def encode_id[T](value: int, start: Sequence[T], rest: Sequence[T]) -> list[T]:
    if value < 1:
        raise ValueError(f"Identifier counter must be positive, got {value}")
    if not start or not rest:
        raise ValueError("Encoding alphabets must not be empty")

    base_start = len(start)
    base_rest = len(rest)

    digit = value % base_start
    value = (value - digit) // base_start
    symbols = [start[digit]]
    while value > 0:
        digit = value % base_rest
        value = (value - digit) // base_rest
        symbols.append(rest[digit])
    return symbols


def decode_id[T](symbols: Sequence[T], start: Sequence[T], rest: Sequence[T]) -> int:
    """Inverse of `encode_id` for any sequence it can produce."""
    if not symbols:
        raise ValueError("Cannot decode an empty identifier")

    start_index = {symbol: i for i, symbol in enumerate(start)}
    rest_index = {symbol: i for i, symbol in enumerate(rest)}
    try:
        value = start_index[symbols[0]]
        weight = len(start)
        for symbol in symbols[1:]:
            value += rest_index[symbol] * weight
            weight *= len(rest)
    except KeyError as exc:
        raise ValueError(f"Symbol {exc.args[0]!r} is not part of the alphabet") from exc
    return value
