"""Replace number literals with equivalent arithmetic."""

import math
import random
from collections.abc import Mapping
from typing import Final

from lunaveil.ast import AstTransformer, BinaryOp, Block, Expression, Number
from lunaveil.steps.base import StepBase, StepContext
from lunaveil.steps.settings import SettingDescriptor

MAX_DEPTH: Final[int] = 15
OPERAND_RANGE: Final[int] = 2**20


class NumbersToExpressions(StepBase):
    key = "NumbersToExpressions"
    name = "Numbers To Expressions"
    description = "This Step Converts number Literals to Expressions"
    settings_descriptor = (
        SettingDescriptor.number("Treshold", "The relative amount of nodes that will be affected", 1.0, 0.0, 1.0),
        SettingDescriptor.number("InternalTreshold", "Internal recursion treshold", 0.2, 0.0, 0.8),
    )

    def __init__(self, settings: Mapping[str, object] | None = None) -> None:
        super().__init__(settings)
        self.treshold = self._number("Treshold")
        self.internal_treshold = self._number("InternalTreshold")

    def apply(self, block: Block, context: StepContext) -> Block:
        return _NumberRewriter(self, context.rng).visit(block)

    def expand(self, value: float, rng: random.Random, depth: int = 0) -> Expression:
        """Build an expression evaluating exactly to `value`.

        Falls back to the plain literal when float rounding would change the
        result or the nesting limit is reached.
        """
        if depth > MAX_DEPTH or not math.isfinite(value):
            return Number(value=value)

        offset = float(rng.randint(-OPERAND_RANGE, OPERAND_RANGE))
        if rng.random() < 0.5:
            left, operator, right = value - offset, "+", offset
            exact = left + right == value
        else:
            left, operator, right = value + offset, "-", offset
            exact = left - right == value
        if not exact:
            return Number(value=value)

        return BinaryOp(
            left=self._operand(left, rng, depth),
            operator=operator,
            right=self._operand(right, rng, depth),
        )

    def _operand(self, value: float, rng: random.Random, depth: int) -> Expression:
        if rng.random() < self.internal_treshold:
            return self.expand(value, rng, depth + 1)
        return Number(value=value)


class _NumberRewriter(AstTransformer):
    def __init__(self, step: NumbersToExpressions, rng: random.Random) -> None:
        self._step = step
        self._rng = rng

    def visit_number(self, node: Number) -> Expression:
        if self._rng.random() >= self._step.treshold:
            return node
        return self._step.expand(node.value, self._rng)
