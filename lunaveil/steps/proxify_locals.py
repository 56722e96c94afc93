"""Wrap locals into single-entry proxy tables."""

from collections.abc import Callable, Mapping

from lunaveil.ast import (
    Assignment,
    AstTransformer,
    Block,
    Expression,
    Function,
    Index,
    Literal,
    LocalAssignment,
    Table,
    TableField,
    Variable,
)
from lunaveil.steps.base import StepBase, StepContext
from lunaveil.steps.literals import any_literal, dictionary_literal, number_literal, string_literal
from lunaveil.steps.settings import SettingDescriptor


class ProxifyLocals(StepBase):
    """Turn `local x = v` into `local x = {[key] = v}` and reads of `x` into `x[key]`.

    Locals are tracked per block, and function parameters shadow outer
    locals of the same name.
    """

    key = "ProxifyLocals"
    name = "Proxify Locals"
    description = "This Step wraps all locals into Proxy Objects"
    settings_descriptor = (
        SettingDescriptor.enumeration(
            "LiteralType",
            "The type of the randomly generated literals",
            "string",
            ("dictionary", "number", "string", "any"),
        ),
    )

    def __init__(self, settings: Mapping[str, object] | None = None) -> None:
        super().__init__(settings)
        self.literal_type = self._text("LiteralType")

    def apply(self, block: Block, context: StepContext) -> Block:
        return _Proxifier(lambda: self.make_key(context)).visit(block)

    def make_key(self, context: StepContext) -> Literal:
        match self.literal_type:
            case "dictionary":
                return dictionary_literal(context.rng)
            case "number":
                return number_literal(context.rng)
            case "any":
                return any_literal(context)
        return string_literal(context)


class _Proxifier(AstTransformer):
    def __init__(self, make_key: Callable[[], Literal]) -> None:
        self._make_key = make_key
        # `None` marks a name that shadows a proxied local without being one.
        self._scopes: list[dict[str, Literal | None]] = []

    def _lookup(self, name: str) -> Literal | None:
        for scope in reversed(self._scopes):
            if name in scope:
                return scope[name]
        return None

    def visit_block(self, node: Block) -> Block:
        self._scopes.append({})
        try:
            return super().visit_block(node)
        finally:
            self._scopes.pop()

    def visit_function(self, node: Function) -> Function:
        self._scopes.append({param: None for param in node.params})
        try:
            return super().visit_function(node)
        finally:
            self._scopes.pop()

    def visit_localassignment(self, node: LocalAssignment) -> LocalAssignment:
        # The initializer still sees any outer binding of the same name.
        expr = self.visit(node.expr)
        key = self._make_key()
        self._scopes[-1][node.name] = key
        return LocalAssignment(name=node.name, expr=Table(fields=(TableField(value=expr, key=key),)))

    def visit_assignment(self, node: Assignment) -> Assignment:
        expr = self.visit(node.expr)
        key = self._lookup(node.name)
        if key is None:
            return Assignment(name=node.name, expr=expr)
        return Assignment(name=node.name, expr=Table(fields=(TableField(value=expr, key=key),)))

    def visit_variable(self, node: Variable) -> Expression:
        key = self._lookup(node.name)
        if key is None:
            return node
        return Index(target=node, key=key)
