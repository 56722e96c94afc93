from collections.abc import Mapping
from typing import Final

from lunaveil.ast import Assignment, Block, String
from lunaveil.steps.base import StepBase, StepContext
from lunaveil.steps.settings import SettingDescriptor
from lunaveil.text import as_byte_text

DEFAULT_WATERMARK: Final[str] = "This Script is Part of the lunaveil Obfuscator"


class Watermark(StepBase):
    """Prepend `CustomVariable = Content`."""

    key = "Watermark"
    name = "Watermark"
    description = "This Step will add a watermark to the script"
    settings_descriptor = (
        SettingDescriptor.string("Content", "The Content of the Watermark", DEFAULT_WATERMARK),
        SettingDescriptor.string("CustomVariable", "The Variable that will be used for the Watermark", "_WATERMARK"),
    )

    def __init__(self, settings: Mapping[str, object] | None = None) -> None:
        super().__init__(settings)
        self.content = self._text("Content")
        self.custom_variable = self._text("CustomVariable")

    def apply(self, block: Block, context: StepContext) -> Block:
        variable = self.custom_variable or context.generate_name()
        return block.prepend(Assignment(name=variable, expr=String(value=as_byte_text(self.content))))


class WatermarkCheck(StepBase):
    """Embed the watermark under a generated variable name."""

    key = "WatermarkCheck"
    name = "WatermarkCheck"
    description = "This Step will add a watermark to the script"
    settings_descriptor = (
        SettingDescriptor.string("Content", "The Content of the WatermarkCheck", DEFAULT_WATERMARK),
    )

    def __init__(self, settings: Mapping[str, object] | None = None) -> None:
        super().__init__(settings)
        self.content = self._text("Content")

    def apply(self, block: Block, context: StepContext) -> Block:
        name = context.generate_name()
        return block.prepend(Assignment(name=name, expr=String(value=as_byte_text(self.content))))
