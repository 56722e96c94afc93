"""AST data model for the modeled Lua subset."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Number:
    value: float


@dataclass(frozen=True, slots=True)
class String:
    """Lua string literal. `value` holds raw bytes, one character per byte."""

    value: str


@dataclass(frozen=True, slots=True)
class Variable:
    name: str


@dataclass(frozen=True, slots=True)
class BinaryOp:
    """Binary operation; `operator` is the operator symbol, e.g. `+` or `..`."""

    left: Expression
    operator: str
    right: Expression


# Nodes below are never produced by the parser. Steps build them when a
# rewrite needs functions, calls or tables.


@dataclass(frozen=True, slots=True)
class Vararg:
    pass


@dataclass(frozen=True, slots=True)
class Function:
    """Anonymous function literal `function(params, ...) body end`."""

    params: tuple[str, ...]
    is_vararg: bool
    body: Block


@dataclass(frozen=True, slots=True)
class Call:
    callee: Expression
    args: tuple[Expression, ...] = ()


@dataclass(frozen=True, slots=True)
class Index:
    """`target[key]`."""

    target: Expression
    key: Expression


@dataclass(frozen=True, slots=True)
class TableField:
    """One table constructor entry; positional when `key` is None."""

    value: Expression
    key: Expression | None = None


@dataclass(frozen=True, slots=True)
class Table:
    fields: tuple[TableField, ...] = ()

    @staticmethod
    def array(items: tuple[Expression, ...] | list[Expression]) -> Table:
        return Table(fields=tuple(TableField(value=item) for item in items))


type Literal = Number | String
type Expression = Number | String | Variable | BinaryOp | Vararg | Function | Call | Index | Table


@dataclass(frozen=True, slots=True)
class LocalAssignment:
    name: str
    expr: Expression


@dataclass(frozen=True, slots=True)
class Assignment:
    name: str
    expr: Expression


@dataclass(frozen=True, slots=True)
class Return:
    expr: Expression | None = None


@dataclass(frozen=True, slots=True)
class Break:
    pass


@dataclass(frozen=True, slots=True)
class Continue:
    pass


@dataclass(frozen=True, slots=True)
class ExpressionStatement:
    expr: Expression


type Statement = LocalAssignment | Assignment | Return | Break | Continue | ExpressionStatement


@dataclass(frozen=True, slots=True)
class Block:
    """Ordered statement sequence; the root of every parsed program."""

    statements: tuple[Statement, ...] = ()

    def prepend(self, *statements: Statement) -> Block:
        return Block(statements=(*statements, *self.statements))
