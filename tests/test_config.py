import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from lunaveil.config import PRESETS, Config, StepConfig, UnknownPresetError, load_config, load_preset
from lunaveil.dialect import LuaVersion


def test_defaults() -> None:
    config = Config()
    assert config.lua_version == LuaVersion.LUA51
    assert config.var_name_prefix == ""
    assert config.name_generator == "MangledShuffled"
    assert config.pretty_print is False
    assert config.seed == 0
    assert config.steps == []


def test_document_keys_map_to_fields() -> None:
    config = Config.from_document(
        {
            "LuaVersion": "LuaU",
            "VarNamePrefix": "v_",
            "NameGenerator": "Il",
            "PrettyPrint": True,
            "Seed": 42,
            "Steps": [{"Name": "WrapInFunction", "Settings": {"Iterations": 2}}, {"Name": "AddVararg"}],
        }
    )
    assert config.lua_version == LuaVersion.LUAU
    assert config.var_name_prefix == "v_"
    assert config.name_generator == "Il"
    assert config.pretty_print is True
    assert config.seed == 42
    assert config.steps == [
        StepConfig(name="WrapInFunction", settings={"Iterations": 2}),
        StepConfig(name="AddVararg", settings={}),
    ]
    assert config.step_names == ["WrapInFunction", "AddVararg"]


def test_unknown_keys_are_ignored_and_missing_keys_default() -> None:
    config = Config.from_document({"Seed": 5, "Comment": "ignored"})
    assert config.seed == 5
    assert config.name_generator == "MangledShuffled"
    assert not hasattr(config, "Comment")


def test_fields_can_be_populated_by_name() -> None:
    config = Config(lua_version=LuaVersion.LUAU, seed=3)
    assert config.lua_version == LuaVersion.LUAU


def test_to_document_round_trips_aliases() -> None:
    document = Config(seed=7, steps=[StepConfig(name="Vmify")]).to_document()
    assert document["Seed"] == 7
    assert document["LuaVersion"] == "Lua51"
    assert document["Steps"] == [{"Name": "Vmify", "Settings": {}}]


@pytest.mark.parametrize(
    "document",
    [{"LuaVersion": "Lua54"}, {"Seed": -1}, {"Steps": [{"Settings": {}}]}],
)
def test_invalid_documents_are_rejected(document: dict) -> None:
    with pytest.raises(ValidationError):
        Config.from_document(document)


def test_load_config_reads_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"NameGenerator": "Number", "Steps": [{"Name": "Watermark"}]}), encoding="utf-8")

    config = load_config(path)

    assert config.name_generator == "Number"
    assert config.step_names == ["Watermark"]


def test_load_config_requires_object(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_minify_preset_has_no_steps() -> None:
    config = load_preset("Minify")
    assert config.steps == []
    assert config == Config()


@pytest.mark.parametrize(
    ("name", "steps"),
    [
        ("Weak", ["Vmify", "ConstantArray", "WrapInFunction"]),
        (
            "Medium",
            ["EncryptStrings", "AntiTamper", "Vmify", "ConstantArray", "NumbersToExpressions", "WrapInFunction"],
        ),
        (
            "Strong",
            ["Vmify", "EncryptStrings", "AntiTamper", "Vmify", "ConstantArray", "NumbersToExpressions", "WrapInFunction"],
        ),
    ],
)
def test_preset_step_order(name: str, steps: list[str]) -> None:
    assert load_preset(name).step_names == steps


def test_presets_are_independent_copies() -> None:
    first = load_preset("Weak")
    first.steps[1].settings["Treshold"] = 0
    assert load_preset("Weak").steps[1].settings["Treshold"] == 1
    assert set(PRESETS) == {"Minify", "Weak", "Medium", "Strong"}


def test_unknown_preset() -> None:
    with pytest.raises(UnknownPresetError) as excinfo:
        load_preset("Extreme")
    assert "Extreme" in str(excinfo.value)
