"""Configuration document model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from lunaveil.dialect import LuaVersion


class StepConfig(BaseModel):
    """One `{Name, Settings}` entry of the `Steps` list."""

    name: str = Field(alias="Name")
    settings: dict[str, Any] = Field(default_factory=dict, alias="Settings")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class Config(BaseModel):
    """Pipeline configuration.

    Field aliases match the keys of the configuration document. Unknown keys
    are ignored and missing keys take their defaults.
    """

    lua_version: LuaVersion = Field(LuaVersion.LUA51, alias="LuaVersion")
    var_name_prefix: str = Field("", alias="VarNamePrefix")
    name_generator: str = Field("MangledShuffled", alias="NameGenerator")
    pretty_print: bool = Field(False, alias="PrettyPrint")
    seed: int = Field(0, ge=0, alias="Seed")
    steps: list[StepConfig] = Field(default_factory=list, alias="Steps")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> Config:
        return cls.model_validate(dict(document))

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self.steps]
