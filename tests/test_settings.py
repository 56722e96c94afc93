import logging

import pytest

from lunaveil.steps import BUILTIN_STEPS, SettingDescriptor, SettingKind, resolve_settings

DESCRIPTORS = (
    SettingDescriptor.boolean("Enabled", "flag", True),
    SettingDescriptor.number("Ratio", "bounded float", 0.5, 0.0, 1.0),
    SettingDescriptor.number("Count", "bounded integer", 2, 1, 10, integral=True),
    SettingDescriptor.string("Label", "free text", "x"),
    SettingDescriptor.enumeration("Mode", "choice", "fast", ("fast", "slow")),
)


def test_missing_settings_take_defaults() -> None:
    assert resolve_settings(DESCRIPTORS, {}) == {
        "Enabled": True,
        "Ratio": 0.5,
        "Count": 2,
        "Label": "x",
        "Mode": "fast",
    }
    assert resolve_settings(DESCRIPTORS, None) == resolve_settings(DESCRIPTORS, {})


def test_valid_settings_are_kept() -> None:
    resolved = resolve_settings(
        DESCRIPTORS,
        {"Enabled": False, "Ratio": 0.25, "Count": 7, "Label": "y", "Mode": "slow"},
    )
    assert resolved == {"Enabled": False, "Ratio": 0.25, "Count": 7, "Label": "y", "Mode": "slow"}
    assert isinstance(resolved["Count"], int)
    assert isinstance(resolved["Ratio"], float)


@pytest.mark.parametrize(
    ("name", "raw"),
    [
        ("Enabled", "yes"),
        ("Enabled", 1),
        ("Ratio", "0.3"),
        ("Ratio", True),
        ("Ratio", float("nan")),
        ("Count", 2.5),
        ("Count", None),
        ("Label", 5),
        ("Mode", 1),
        ("Mode", "medium"),
    ],
)
def test_mistyped_or_invalid_values_fall_back_to_default(name: str, raw: object) -> None:
    defaults = resolve_settings(DESCRIPTORS, {})
    assert resolve_settings(DESCRIPTORS, {name: raw})[name] == defaults[name]


@pytest.mark.parametrize(
    ("name", "raw", "expected"),
    [
        ("Ratio", -1, 0.0),
        ("Ratio", 3.5, 1.0),
        ("Count", 0, 1),
        ("Count", 99, 10),
        ("Count", 4.0, 4),
    ],
)
def test_numbers_are_clamped_to_bounds(name: str, raw: float, expected: float) -> None:
    assert resolve_settings(DESCRIPTORS, {name: raw})[name] == expected


def test_clamping_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="lunaveil.steps.settings"):
        resolve_settings(DESCRIPTORS, {"Count": 50}, owner="Demo")
    assert any("Demo" in record.getMessage() and "clamped" in record.getMessage() for record in caplog.records)


def test_unknown_keys_are_ignored() -> None:
    assert "Other" not in resolve_settings(DESCRIPTORS, {"Other": 1})


def test_enumeration_default_must_be_allowed() -> None:
    with pytest.raises(ValueError):
        SettingDescriptor.enumeration("Mode", "choice", "medium", ("fast", "slow"))


def test_descriptor_constructors_set_kind() -> None:
    assert [descriptor.kind for descriptor in DESCRIPTORS] == [
        SettingKind.BOOLEAN,
        SettingKind.NUMBER,
        SettingKind.NUMBER,
        SettingKind.STRING,
        SettingKind.ENUM,
    ]
    assert DESCRIPTORS[4].values == ("fast", "slow")


@pytest.mark.parametrize("key", sorted(BUILTIN_STEPS))
def test_step_from_empty_settings_uses_every_default(key: str) -> None:
    step = BUILTIN_STEPS[key]({})
    assert step.key == key
    for descriptor in step.settings_descriptor:
        assert step.settings[descriptor.name] == descriptor.default


@pytest.mark.parametrize("key", sorted(BUILTIN_STEPS))
def test_step_descriptor_defaults_respect_their_bounds(key: str) -> None:
    for descriptor in BUILTIN_STEPS[key].settings_descriptor:
        if descriptor.kind != SettingKind.NUMBER:
            continue
        if descriptor.minimum is not None:
            assert descriptor.default >= descriptor.minimum
        if descriptor.maximum is not None:
            assert descriptor.default <= descriptor.maximum
