"""Pipeline configuration model, presets and loaders."""

from lunaveil.config.load import load_config
from lunaveil.config.model import Config, StepConfig
from lunaveil.config.presets import PRESETS, UnknownPresetError, load_preset

__all__ = [
    "PRESETS",
    "Config",
    "StepConfig",
    "UnknownPresetError",
    "load_config",
    "load_preset",
]
