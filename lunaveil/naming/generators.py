"""Deterministic identifier generators.

Every generator keeps a strictly increasing counter and encodes it with
`encode_id`, so names are unique per instance. Seeded variants permute their
alphabets once at construction with `random.Random(seed)` and are fully
reproducible for a given seed and call count.
"""

import random
import string
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Final, Protocol, runtime_checkable

from lunaveil.naming.encoding import encode_id
from lunaveil.naming.words import VAR_NAMES

MANGLED_START: Final[str] = string.ascii_lowercase + string.ascii_uppercase
MANGLED_DIGITS: Final[str] = MANGLED_START + string.digits + "_"

IL_START: Final[str] = "Il"
IL_DIGITS: Final[str] = "Il1"
IL_MIN_CHARACTERS: Final[int] = 5
IL_MAX_INITIAL_CHARACTERS: Final[int] = 10


class UnknownNameGeneratorError(ValueError):
    def __init__(self, strategy: str) -> None:
        known = ", ".join(NAME_GENERATORS)
        super().__init__(f"Unknown name generator `{strategy}` (expected one of: {known})")
        self.strategy = strategy


@runtime_checkable
class NameGenerator(Protocol):
    def generate(self) -> str: ...


class NumberGenerator:
    """Emits `_1`, `_2`, ..."""

    def __init__(self) -> None:
        self._counter = 0

    def generate(self) -> str:
        self._counter += 1
        return f"_{self._counter}"


class _AlphabetGenerator:
    def __init__(self, start: str, digits: str, offset: int = 0) -> None:
        self._counter = 0
        self._offset = offset
        self.start_alphabet = start
        self.alphabet = digits

    @property
    def counter(self) -> int:
        return self._counter

    def generate(self) -> str:
        self._counter += 1
        return "".join(encode_id(self._counter + self._offset, self.start_alphabet, self.alphabet))


class MangledGenerator(_AlphabetGenerator):
    """Short names over letters, then letters, digits and `_`."""

    def __init__(self) -> None:
        super().__init__(MANGLED_START, MANGLED_DIGITS)


class MangledShuffledGenerator(_AlphabetGenerator):
    def __init__(self, seed: int) -> None:
        rng = random.Random(seed)
        digits = list(MANGLED_DIGITS)
        start = list(MANGLED_START)
        rng.shuffle(digits)
        rng.shuffle(start)
        super().__init__("".join(start), "".join(digits))


class IlGenerator(_AlphabetGenerator):
    """Names made only of `I`, `l` and `1`.

    A seeded offset skips the shortest names so output never starts at the
    obviously patterned ones.
    """

    def __init__(self, seed: int) -> None:
        rng = random.Random(seed)
        digits = list(IL_DIGITS)
        start = list(IL_START)
        rng.shuffle(digits)
        rng.shuffle(start)
        offset = rng.randint(3**IL_MIN_CHARACTERS, 3**IL_MAX_INITIAL_CHARACTERS)
        super().__init__("".join(start), "".join(digits), offset)

    @property
    def offset(self) -> int:
        return self._offset


class ConfuseGenerator:
    """Joins seed-shuffled dictionary words with `_`, e.g. `loader_rawget`."""

    def __init__(self, seed: int) -> None:
        names = list(VAR_NAMES)
        random.Random(seed).shuffle(names)
        self._counter = 0
        self.names: tuple[str, ...] = tuple(names)

    def generate(self) -> str:
        self._counter += 1
        return "_".join(encode_id(self._counter, self.names, self.names))


NAME_GENERATORS: Final[Mapping[str, Callable[[int], NameGenerator]]] = MappingProxyType(
    {
        "Number": lambda seed: NumberGenerator(),
        "Mangled": lambda seed: MangledGenerator(),
        "MangledShuffled": MangledShuffledGenerator,
        "Il": IlGenerator,
        "Confuse": ConfuseGenerator,
    }
)


def create_name_generator(strategy: str, seed: int = 0) -> NameGenerator:
    try:
        factory = NAME_GENERATORS[strategy]
    except KeyError:
        raise UnknownNameGeneratorError(strategy) from None
    return factory(seed)
