import logging
from collections.abc import Mapping

from lunaveil.ast import Block
from lunaveil.steps.base import StepBase, StepContext
from lunaveil.steps.settings import SettingDescriptor

logger = logging.getLogger(__name__)


class AntiTamper(StepBase):
    key = "AntiTamper"
    name = "Anti Tamper"
    description = (
        "This Step Breaks your Script when it is modified. This is only effective when using the new VM."
    )
    settings_descriptor = (
        SettingDescriptor.boolean(
            "UseDebug",
            "Use debug library. (Recommended, however scripts will not work without debug library.)",
            True,
        ),
    )

    def __init__(self, settings: Mapping[str, object] | None = None) -> None:
        super().__init__(settings)
        self.use_debug = self._flag("UseDebug")

    def apply(self, block: Block, context: StepContext) -> Block:
        if not context.has_step("Vmify"):
            logger.warning("AntiTamper has no effect without a Vmify step in the pipeline; skipping")
            return block
        # Integrity checks are emitted together with the VM.
        logger.debug("AntiTamper: deferring checks to the VM (use_debug=%s)", self.use_debug)
        return block
