"""AST for the modeled Lua subset."""

from lunaveil.ast.model import (
    Assignment,
    BinaryOp,
    Block,
    Break,
    Call,
    Continue,
    Expression,
    ExpressionStatement,
    Function,
    Index,
    Literal,
    LocalAssignment,
    Number,
    Return,
    Statement,
    String,
    Table,
    TableField,
    Vararg,
    Variable,
)
from lunaveil.ast.visitor import AstTransformer, iter_children, walk

__all__ = [
    "Assignment",
    "AstTransformer",
    "BinaryOp",
    "Block",
    "Break",
    "Call",
    "Continue",
    "Expression",
    "ExpressionStatement",
    "Function",
    "Index",
    "Literal",
    "LocalAssignment",
    "Number",
    "Return",
    "Statement",
    "String",
    "Table",
    "TableField",
    "Vararg",
    "Variable",
    "iter_children",
    "walk",
]
