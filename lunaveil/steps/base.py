"""Step protocol, shared base class and the context handed to `apply`."""

import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import ClassVar, Protocol, runtime_checkable

from lunaveil.ast import Block
from lunaveil.dialect import LuaVersion
from lunaveil.naming import NameGenerator
from lunaveil.steps.settings import SettingDescriptor, SettingValue, resolve_settings


@dataclass(frozen=True, slots=True)
class StepContext:
    """Read-only view of the pipeline a step runs in.

    `rng` is seeded from the pipeline seed, the step's position and its key,
    so every step draws a reproducible stream. Steps must not keep the context
    beyond `apply`.
    """

    dialect: LuaVersion
    var_name_prefix: str
    seed: int
    step_keys: tuple[str, ...]
    rng: random.Random = field(repr=False)
    name_generator: NameGenerator = field(repr=False)
    pretty_print: bool = False

    def generate_name(self) -> str:
        return f"{self.var_name_prefix}{self.name_generator.generate()}"

    def has_step(self, key: str) -> bool:
        return key in self.step_keys


@runtime_checkable
class Step(Protocol):
    key: str
    name: str
    description: str
    settings_descriptor: tuple[SettingDescriptor, ...]

    def apply(self, block: Block, context: StepContext) -> Block: ...


class StepBase:
    """Common plumbing for built-in steps.

    Subclasses declare `key` (the registry name), a display `name`, a
    `description` and their `settings_descriptor`; construction resolves the
    raw settings mapping against the descriptors.
    """

    key: ClassVar[str]
    name: ClassVar[str]
    description: ClassVar[str] = ""
    settings_descriptor: ClassVar[tuple[SettingDescriptor, ...]] = ()

    def __init__(self, settings: Mapping[str, object] | None = None) -> None:
        self.settings: dict[str, SettingValue] = resolve_settings(
            self.settings_descriptor, settings, owner=self.key
        )

    def apply(self, block: Block, context: StepContext) -> Block:
        raise NotImplementedError

    def _flag(self, name: str) -> bool:
        return bool(self.settings[name])

    def _number(self, name: str) -> float:
        return float(self.settings[name])

    def _integer(self, name: str) -> int:
        return int(self.settings[name])

    def _text(self, name: str) -> str:
        return str(self.settings[name])

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.settings!r})"
