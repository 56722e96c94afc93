"""Configuration-driven obfuscation pipeline."""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping

from lunaveil.config import Config
from lunaveil.dialect import LuaVersion
from lunaveil.lexer import tokenize
from lunaveil.naming import NameGenerator, UnknownNameGeneratorError, create_name_generator
from lunaveil.parser import parse_tokens
from lunaveil.pipeline.result import PipelineRunResult
from lunaveil.steps import BUILTIN_STEPS, Step, StepConstructor, StepContext
from lunaveil.text import as_byte_text

logger = logging.getLogger(__name__)

DEFAULT_NAME_GENERATOR = "MangledShuffled"


class PipelineConfigError(ValueError):
    """Raised while building a pipeline, before any program text is read."""


class UnknownStepError(PipelineConfigError):
    def __init__(self, step_name: str) -> None:
        super().__init__(f"Step `{step_name}` is not registered")
        self.step_name = step_name


class Pipeline:
    """Lex, parse, then run an ordered list of steps over a program.

    Steps run in the order they were added; the pipeline never reorders or
    deduplicates them. Each step gets its own `random.Random` derived from
    the seed, so a run is reproducible for a given configuration.
    """

    def __init__(
        self,
        lua_version: LuaVersion = LuaVersion.LUA51,
        *,
        pretty_print: bool = False,
        var_name_prefix: str = "",
        seed: int = 0,
        registry: Mapping[str, StepConstructor] | None = None,
    ) -> None:
        if seed < 0:
            raise PipelineConfigError(f"Seed must be non-negative, got {seed}")
        self.lua_version = lua_version
        self.pretty_print = pretty_print
        self.var_name_prefix = var_name_prefix
        self.seed = seed
        self.name_generator: NameGenerator = create_name_generator(DEFAULT_NAME_GENERATOR, seed)
        self._steps: list[Step] = []
        self._constructors: dict[str, StepConstructor] = dict(BUILTIN_STEPS if registry is None else registry)

    @classmethod
    def from_config(cls, config: Config, *, registry: Mapping[str, StepConstructor] | None = None) -> Pipeline:
        pipeline = cls(
            config.lua_version,
            pretty_print=config.pretty_print,
            var_name_prefix=config.var_name_prefix,
            seed=config.seed,
            registry=registry,
        )
        pipeline.set_name_generator(config.name_generator)
        for step_config in config.steps:
            pipeline.add_step(pipeline.create_step(step_config.name, step_config.settings))
        return pipeline

    @property
    def steps(self) -> tuple[Step, ...]:
        return tuple(self._steps)

    @property
    def registered_steps(self) -> tuple[str, ...]:
        return tuple(self._constructors)

    def register_step(self, name: str, constructor: StepConstructor) -> None:
        self._constructors[name] = constructor

    def set_name_generator(self, strategy: str) -> None:
        try:
            self.name_generator = create_name_generator(strategy, self.seed)
        except UnknownNameGeneratorError as exc:
            raise PipelineConfigError(str(exc)) from exc

    def create_step(self, name: str, settings: Mapping[str, object] | None = None) -> Step:
        constructor = self._constructors.get(name)
        if constructor is None:
            raise UnknownStepError(name)
        return constructor(settings or {})

    def add_step(self, step: Step) -> None:
        self._steps.append(step)

    def apply(self, code: str | bytes) -> PipelineRunResult:
        """Run the pipeline over `code`.

        `LexError` and `ParseFailed` propagate before any step runs.
        """
        text = code if isinstance(code, str) else as_byte_text(code)
        logger.info("Running pipeline (%s) with %d steps", self.lua_version, len(self._steps))

        tokens = tokenize(code, self.lua_version)
        parsed = parse_tokens(tokens, self.lua_version)
        block = parsed.unwrap()

        step_keys = tuple(step.key for step in self._steps)
        for index, step in enumerate(self._steps):
            logger.debug("Applying step %d/%d: %s", index + 1, len(self._steps), step.name)
            context = StepContext(
                dialect=self.lua_version,
                var_name_prefix=self.var_name_prefix,
                seed=self.seed,
                step_keys=step_keys,
                rng=random.Random(f"{self.seed}:{index}:{step.key}"),
                name_generator=self.name_generator,
                pretty_print=self.pretty_print,
            )
            block = step.apply(block, context)

        return PipelineRunResult(code=text, block=block, warnings=parsed.warnings)
