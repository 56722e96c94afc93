"""Steps that are registered but do not rewrite the modeled AST yet."""

import logging

from lunaveil.ast import Block
from lunaveil.steps.base import StepBase, StepContext

logger = logging.getLogger(__name__)


class EncryptStrings(StepBase):
    key = "EncryptStrings"
    name = "Encrypt Strings"
    description = "This Step will encrypt strings within your Program."

    def apply(self, block: Block, context: StepContext) -> Block:
        logger.debug("EncryptStrings: not implemented, AST left unchanged")
        return block


class Vmify(StepBase):
    key = "Vmify"
    name = "Vmify"
    description = (
        "This Step will Compile your script into a fully-custom Bytecode Format and emit a vm for executing it."
    )

    def apply(self, block: Block, context: StepContext) -> Block:
        logger.debug("Vmify: bytecode compilation not available, AST left unchanged")
        return block
