import dataclasses

import pytest

from lunaveil.ast import (
    Assignment,
    AstTransformer,
    BinaryOp,
    Block,
    Call,
    Function,
    Index,
    LocalAssignment,
    Number,
    Return,
    String,
    Table,
    TableField,
    Vararg,
    Variable,
    iter_children,
    walk,
)
from lunaveil.parser import parse_source


class _DoubleNumbers(AstTransformer):
    def visit_number(self, node: Number) -> Number:
        return Number(value=node.value * 2)


def test_nodes_are_immutable() -> None:
    node = Number(value=1.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.value = 2.0  # type: ignore[misc]


def test_nodes_compare_structurally() -> None:
    assert BinaryOp(Number(1.0), "+", Variable("a")) == BinaryOp(Number(1.0), "+", Variable("a"))
    assert Number(1.0) != String("1")


def test_empty_block_is_truthy() -> None:
    assert Block()


def test_prepend_returns_new_block() -> None:
    block = parse_source("a = 1").unwrap()
    extended = block.prepend(LocalAssignment(name="b", expr=String(value="x")))

    assert len(block.statements) == 1
    assert extended.statements[0] == LocalAssignment(name="b", expr=String(value="x"))
    assert extended.statements[1:] == block.statements


def test_transformer_rebuilds_without_mutating_input() -> None:
    block = parse_source("local a = 1 + 2\nreturn a - 3").unwrap()

    doubled = _DoubleNumbers().visit(block)

    assert [node.value for node in walk(block) if isinstance(node, Number)] == [1.0, 2.0, 3.0]
    assert [node.value for node in walk(doubled) if isinstance(node, Number)] == [2.0, 4.0, 6.0]


def test_transformer_descends_into_step_only_nodes() -> None:
    body = Block(statements=(Return(expr=Call(callee=Variable("f"), args=(Number(1.0), Vararg()))),))
    tree = Block(
        statements=(
            Assignment(
                name="t",
                expr=Table(
                    fields=(
                        TableField(value=Function(params=("x",), is_vararg=False, body=body)),
                        TableField(value=Number(2.0), key=Number(3.0)),
                    )
                ),
            ),
            Assignment(name="y", expr=Index(target=Variable("t"), key=Number(4.0))),
        )
    )

    doubled = _DoubleNumbers().visit(tree)

    assert [node.value for node in walk(doubled) if isinstance(node, Number)] == [2.0, 6.0, 4.0, 8.0]


def test_walk_is_pre_order() -> None:
    block = parse_source("x = 1 + a").unwrap()
    names = [type(node).__name__ for node in walk(block)]
    assert names == ["Block", "Assignment", "BinaryOp", "Number", "Variable"]


def test_iter_children_of_leaves_is_empty() -> None:
    assert list(iter_children(Number(1.0))) == []
    assert list(iter_children(Variable("a"))) == []
    assert list(iter_children(Return())) == []


def test_table_array_builds_positional_fields() -> None:
    table = Table.array([String("a"), Number(1.0)])
    assert table.fields == (TableField(value=String("a")), TableField(value=Number(1.0)))
    assert all(field.key is None for field in table.fields)
