"""Built-in configuration presets."""

import copy
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Final

from lunaveil.config.model import Config

_CONSTANT_ARRAY: Final[dict[str, Any]] = {
    "Name": "ConstantArray",
    "Settings": {
        "Treshold": 1,
        "StringsOnly": True,
        "Shuffle": True,
        "Rotate": True,
        "LocalWrapperTreshold": 0,
    },
}


def _document(*steps: dict[str, Any]) -> dict[str, Any]:
    return {
        "LuaVersion": "Lua51",
        "VarNamePrefix": "",
        "NameGenerator": "MangledShuffled",
        "PrettyPrint": False,
        "Seed": 0,
        "Steps": list(steps),
    }


PRESETS: Final[Mapping[str, dict[str, Any]]] = MappingProxyType(
    {
        "Minify": _document(),
        "Weak": _document(
            {"Name": "Vmify", "Settings": {}},
            _CONSTANT_ARRAY,
            {"Name": "WrapInFunction", "Settings": {}},
        ),
        "Medium": _document(
            {"Name": "EncryptStrings", "Settings": {}},
            {"Name": "AntiTamper", "Settings": {"UseDebug": False}},
            {"Name": "Vmify", "Settings": {}},
            _CONSTANT_ARRAY,
            {"Name": "NumbersToExpressions", "Settings": {}},
            {"Name": "WrapInFunction", "Settings": {}},
        ),
        "Strong": _document(
            {"Name": "Vmify", "Settings": {}},
            {"Name": "EncryptStrings", "Settings": {}},
            {"Name": "AntiTamper", "Settings": {}},
            {"Name": "Vmify", "Settings": {}},
            _CONSTANT_ARRAY,
            {"Name": "NumbersToExpressions", "Settings": {}},
            {"Name": "WrapInFunction", "Settings": {}},
        ),
    }
)


class UnknownPresetError(ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown preset `{name}` (expected one of: {', '.join(PRESETS)})")
        self.name = name


def load_preset(name: str) -> Config:
    try:
        document = PRESETS[name]
    except KeyError:
        raise UnknownPresetError(name) from None
    return Config.from_document(copy.deepcopy(document))
