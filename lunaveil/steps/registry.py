"""Name to constructor table for the built-in steps."""

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Final

from lunaveil.steps.add_vararg import AddVararg
from lunaveil.steps.anti_tamper import AntiTamper
from lunaveil.steps.base import Step
from lunaveil.steps.constant_array import ConstantArray
from lunaveil.steps.numbers_to_expressions import NumbersToExpressions
from lunaveil.steps.placeholders import EncryptStrings, Vmify
from lunaveil.steps.proxify_locals import ProxifyLocals
from lunaveil.steps.split_strings import SplitStrings
from lunaveil.steps.watermark import Watermark, WatermarkCheck
from lunaveil.steps.wrap_in_function import WrapInFunction

type StepConstructor = Callable[[Mapping[str, object]], Step]

BUILTIN_STEPS: Final[Mapping[str, StepConstructor]] = MappingProxyType(
    {
        step.key: step
        for step in (
            ConstantArray,
            WrapInFunction,
            AntiTamper,
            AddVararg,
            NumbersToExpressions,
            SplitStrings,
            Watermark,
            EncryptStrings,
            ProxifyLocals,
            Vmify,
            WatermarkCheck,
        )
    }
)
