from lunaveil.ast import AstTransformer, Block, Function
from lunaveil.steps.base import StepBase, StepContext


class _VarargAdder(AstTransformer):
    def visit_function(self, node: Function) -> Function:
        return Function(params=node.params, is_vararg=True, body=self.visit(node.body))


class AddVararg(StepBase):
    key = "AddVararg"
    name = "Add Vararg"
    description = "This Step Adds Vararg to all Functions"

    def apply(self, block: Block, context: StepContext) -> Block:
        return _VarargAdder().visit(block)
