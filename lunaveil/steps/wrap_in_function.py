from collections.abc import Mapping

from lunaveil.ast import Block, Call, Function, Return, Vararg
from lunaveil.steps.base import StepBase, StepContext
from lunaveil.steps.settings import SettingDescriptor


class WrapInFunction(StepBase):
    """Wrap the program as `return (function(...) <body> end)(...)`."""

    key = "WrapInFunction"
    name = "Wrap in Function"
    description = "This Step Wraps the Entire Script into a Function"
    settings_descriptor = (
        SettingDescriptor.number("Iterations", "The Number Of Iterations", 1, 1, None, integral=True),
    )

    def __init__(self, settings: Mapping[str, object] | None = None) -> None:
        super().__init__(settings)
        self.iterations = self._integer("Iterations")

    def apply(self, block: Block, context: StepContext) -> Block:
        for _ in range(self.iterations):
            wrapper = Function(params=(), is_vararg=True, body=block)
            block = Block(statements=(Return(expr=Call(callee=wrapper, args=(Vararg(),))),))
        return block
