"""Typed, self-describing step settings."""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum

logger = logging.getLogger(__name__)

type SettingValue = bool | int | float | str


class SettingKind(StrEnum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ENUM = "enum"


@dataclass(frozen=True, slots=True)
class SettingDescriptor:
    """Static metadata for one configurable field of a step.

    Numbers flagged `integral` resolve to `int`; other numbers resolve to
    `float`. Enum settings accept only members of `values`.
    """

    name: str
    description: str
    kind: SettingKind
    default: SettingValue
    minimum: float | None = None
    maximum: float | None = None
    values: tuple[str, ...] = ()
    integral: bool = False

    @staticmethod
    def boolean(name: str, description: str, default: bool) -> "SettingDescriptor":
        return SettingDescriptor(name, description, SettingKind.BOOLEAN, default)

    @staticmethod
    def number(
        name: str,
        description: str,
        default: float,
        minimum: float | None = None,
        maximum: float | None = None,
        *,
        integral: bool = False,
    ) -> "SettingDescriptor":
        value: SettingValue = int(default) if integral else float(default)
        return SettingDescriptor(
            name,
            description,
            SettingKind.NUMBER,
            value,
            minimum=minimum,
            maximum=maximum,
            integral=integral,
        )

    @staticmethod
    def string(name: str, description: str, default: str) -> "SettingDescriptor":
        return SettingDescriptor(name, description, SettingKind.STRING, default)

    @staticmethod
    def enumeration(name: str, description: str, default: str, values: Sequence[str]) -> "SettingDescriptor":
        if default not in values:
            raise ValueError(f"Default `{default}` of setting `{name}` is not one of {list(values)}")
        return SettingDescriptor(name, description, SettingKind.ENUM, default, values=tuple(values))

    def resolve(self, raw: object, *, owner: str = "") -> SettingValue:
        """Coerce one configured value, falling back to the default when unusable."""
        match self.kind:
            case SettingKind.BOOLEAN:
                if isinstance(raw, bool):
                    return raw
            case SettingKind.NUMBER:
                number = self._as_number(raw)
                if number is not None:
                    return self._clamp(number, owner)
            case SettingKind.STRING:
                if isinstance(raw, str):
                    return raw
            case SettingKind.ENUM:
                if isinstance(raw, str) and raw in self.values:
                    return raw
                if isinstance(raw, str):
                    logger.warning(
                        "%s: `%s` is not a valid value for %s (expected one of %s); using `%s`",
                        owner or "settings",
                        raw,
                        self.name,
                        ", ".join(self.values),
                        self.default,
                    )
                    return self.default

        logger.warning(
            "%s: ignoring %s value %r for %s; using default %r",
            owner or "settings",
            type(raw).__name__,
            raw,
            self.name,
            self.default,
        )
        return self.default

    def _as_number(self, raw: object) -> float | int | None:
        # bool is an int subclass but never a valid number here
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            return None
        if isinstance(raw, float) and not math.isfinite(raw):
            return None
        if self.integral:
            if isinstance(raw, float) and not raw.is_integer():
                return None
            return int(raw)
        return float(raw)

    def _clamp(self, value: float | int, owner: str) -> SettingValue:
        clamped = value
        if self.minimum is not None and clamped < self.minimum:
            clamped = self.minimum
        if self.maximum is not None and clamped > self.maximum:
            clamped = self.maximum
        clamped = int(clamped) if self.integral else float(clamped)
        if clamped != value:
            logger.warning(
                "%s: %s=%s is outside [%s, %s]; clamped to %s",
                owner or "settings",
                self.name,
                value,
                "-inf" if self.minimum is None else self.minimum,
                "inf" if self.maximum is None else self.maximum,
                clamped,
            )
        return clamped


def resolve_settings(
    descriptors: Sequence[SettingDescriptor],
    raw: Mapping[str, object] | None = None,
    *,
    owner: str = "",
) -> dict[str, SettingValue]:
    """Resolve a raw settings mapping against `descriptors`.

    Missing keys take the descriptor default; keys no descriptor names are
    ignored.
    """
    raw = raw or {}
    resolved: dict[str, SettingValue] = {}
    for descriptor in descriptors:
        if descriptor.name in raw:
            resolved[descriptor.name] = descriptor.resolve(raw[descriptor.name], owner=owner)
        else:
            resolved[descriptor.name] = descriptor.default

    unknown = sorted(set(raw) - {descriptor.name for descriptor in descriptors})
    if unknown:
        logger.debug("%s: ignoring unknown settings %s", owner or "settings", ", ".join(unknown))
    return resolved
