"""Visitor pattern for AST traversal and rebuilding."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from lunaveil.ast.model import (
    Assignment,
    BinaryOp,
    Block,
    Call,
    ExpressionStatement,
    Function,
    Index,
    LocalAssignment,
    Return,
    Table,
    TableField,
)


class AstTransformer:
    """Base visitor that rebuilds the tree bottom-up.

    Override specific visit_* methods to customize behavior. The default
    implementations visit child nodes and return a new node only through the
    constructors, so the input tree is never mutated.
    """

    def visit(self, node: Any) -> Any:
        """Dispatch to the appropriate visit_* method."""
        method_name = f"visit_{type(node).__name__.lower()}"
        method = getattr(self, method_name, self.generic_visit)
        return method(node)

    def generic_visit(self, node: Any) -> Any:
        return node

    def visit_block(self, node: Block) -> Block:
        return Block(statements=tuple(self.visit(statement) for statement in node.statements))

    def visit_localassignment(self, node: LocalAssignment) -> Any:
        return LocalAssignment(name=node.name, expr=self.visit(node.expr))

    def visit_assignment(self, node: Assignment) -> Any:
        return Assignment(name=node.name, expr=self.visit(node.expr))

    def visit_return(self, node: Return) -> Any:
        if node.expr is None:
            return node
        return Return(expr=self.visit(node.expr))

    def visit_expressionstatement(self, node: ExpressionStatement) -> Any:
        return ExpressionStatement(expr=self.visit(node.expr))

    def visit_binaryop(self, node: BinaryOp) -> Any:
        # Parsed operator chains lean left and can be deeper than the
        # recursion limit, so the left spine is unwound with an explicit stack.
        # Children are still visited left to right.
        spine = [node]
        if type(self).visit_binaryop is AstTransformer.visit_binaryop:
            while isinstance(spine[-1].left, BinaryOp):
                spine.append(spine[-1].left)
        result = self.visit(spine[-1].left)
        for op in reversed(spine):
            result = BinaryOp(left=result, operator=op.operator, right=self.visit(op.right))
        return result

    def visit_function(self, node: Function) -> Any:
        return Function(params=node.params, is_vararg=node.is_vararg, body=self.visit(node.body))

    def visit_call(self, node: Call) -> Any:
        return Call(callee=self.visit(node.callee), args=tuple(self.visit(arg) for arg in node.args))

    def visit_index(self, node: Index) -> Any:
        return Index(target=self.visit(node.target), key=self.visit(node.key))

    def visit_table(self, node: Table) -> Any:
        return Table(fields=tuple(self.visit(field) for field in node.fields))

    def visit_tablefield(self, node: TableField) -> Any:
        key = self.visit(node.key) if node.key is not None else None
        return TableField(value=self.visit(node.value), key=key)


def iter_children(node: Any) -> Iterator[Any]:
    match node:
        case Block(statements=statements):
            yield from statements
        case LocalAssignment(expr=expr) | Assignment(expr=expr) | ExpressionStatement(expr=expr):
            yield expr
        case Return(expr=expr):
            if expr is not None:
                yield expr
        case BinaryOp(left=left, right=right):
            yield left
            yield right
        case Function(body=body):
            yield body
        case Call(callee=callee, args=args):
            yield callee
            yield from args
        case Index(target=target, key=key):
            yield target
            yield key
        case Table(fields=fields):
            yield from fields
        case TableField(key=key, value=value):
            if key is not None:
                yield key
            yield value


def walk(node: Any) -> Iterator[Any]:
    """Yield `node` and all of its descendants in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_children(current))))
