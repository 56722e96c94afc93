"""Transformation steps and their settings framework."""

from lunaveil.steps.add_vararg import AddVararg
from lunaveil.steps.anti_tamper import AntiTamper
from lunaveil.steps.base import Step, StepBase, StepContext
from lunaveil.steps.constant_array import ConstantArray
from lunaveil.steps.literals import (
    NUMBER_LITERAL_MAX,
    NUMBER_LITERAL_MIN,
    any_literal,
    dictionary_literal,
    number_literal,
    random_string,
    random_string_expr,
    string_literal,
)
from lunaveil.steps.numbers_to_expressions import NumbersToExpressions
from lunaveil.steps.placeholders import EncryptStrings, Vmify
from lunaveil.steps.proxify_locals import ProxifyLocals
from lunaveil.steps.registry import BUILTIN_STEPS, StepConstructor
from lunaveil.steps.settings import SettingDescriptor, SettingKind, SettingValue, resolve_settings
from lunaveil.steps.split_strings import SplitStrings
from lunaveil.steps.watermark import Watermark, WatermarkCheck
from lunaveil.steps.wrap_in_function import WrapInFunction

__all__ = [
    "BUILTIN_STEPS",
    "NUMBER_LITERAL_MAX",
    "NUMBER_LITERAL_MIN",
    "AddVararg",
    "AntiTamper",
    "ConstantArray",
    "EncryptStrings",
    "NumbersToExpressions",
    "ProxifyLocals",
    "SettingDescriptor",
    "SettingKind",
    "SettingValue",
    "SplitStrings",
    "Step",
    "StepBase",
    "StepConstructor",
    "StepContext",
    "Vmify",
    "Watermark",
    "WatermarkCheck",
    "WrapInFunction",
    "any_literal",
    "dictionary_literal",
    "number_literal",
    "random_string",
    "random_string_expr",
    "resolve_settings",
    "string_literal",
]
