import base64
import logging
import random

import pytest

from lunaveil.ast import (
    Assignment,
    BinaryOp,
    Block,
    Call,
    Expression,
    ExpressionStatement,
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
    walk,
)
from lunaveil.dialect import LuaVersion
from lunaveil.naming import NumberGenerator
from lunaveil.parser import parse_source
from lunaveil.steps import (
    AddVararg,
    AntiTamper,
    ConstantArray,
    EncryptStrings,
    NumbersToExpressions,
    ProxifyLocals,
    SplitStrings,
    StepContext,
    Vmify,
    Watermark,
    WatermarkCheck,
    WrapInFunction,
)


def make_context(*step_keys: str, seed: int = 0, prefix: str = "") -> StepContext:
    return StepContext(
        dialect=LuaVersion.LUA51,
        var_name_prefix=prefix,
        seed=seed,
        step_keys=step_keys,
        rng=random.Random(seed),
        name_generator=NumberGenerator(),
    )


def parse(source: str) -> Block:
    return parse_source(source).unwrap()


def evaluate(expr: Expression) -> float | str:
    """Evaluate the arithmetic and concatenation subset steps produce."""
    match expr:
        case Number(value=value) | String(value=value):
            return value
        case BinaryOp(left=left, operator="+", right=right):
            return evaluate(left) + evaluate(right)
        case BinaryOp(left=left, operator="-", right=right):
            return evaluate(left) - evaluate(right)
        case BinaryOp(left=left, operator="..", right=right):
            return f"{evaluate(left)}{evaluate(right)}"
    raise AssertionError(f"cannot evaluate {expr!r}")


def literals_of(node: object) -> list[Number | String]:
    return [child for child in walk(node) if isinstance(child, (Number, String))]


# ConstantArray


def _array_items(block: Block) -> tuple[str, list[Expression]]:
    declaration = block.statements[0]
    assert isinstance(declaration, LocalAssignment)
    assert isinstance(declaration.expr, Table)
    return declaration.name, [field.value for field in declaration.expr.fields]


def test_constant_array_hoists_strings_and_numbers() -> None:
    block = parse('a = "x"\nb = 2\nc = "x"')
    step = ConstantArray({"Encoding": "none", "Shuffle": False, "Rotate": False})

    result = step.apply(block, make_context())

    name, items = _array_items(result)
    assert name == "_1"
    assert items == [String("x"), Number(2.0)]
    assert result.statements[1:] == (
        Assignment("a", Index(Variable("_1"), Number(1.0))),
        Assignment("b", Index(Variable("_1"), Number(2.0))),
        Assignment("c", Index(Variable("_1"), Number(1.0))),
    )


def test_constant_array_strings_only_keeps_numbers_inline() -> None:
    block = parse('a = "x" + 2')
    step = ConstantArray({"Encoding": "none", "StringsOnly": True})

    result = step.apply(block, make_context())

    _, items = _array_items(result)
    assert items == [String("x")]
    assert result.statements[1] == Assignment("a", BinaryOp(Index(Variable("_1"), Number(1.0)), "+", Number(2.0)))


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_constant_array_indices_follow_shuffle_and_rotation(seed: int) -> None:
    block = parse('a = "p"\nb = "q"\nc = "r"\nd = "s"')
    step = ConstantArray({"Encoding": "none", "Shuffle": True, "Rotate": True})

    result = step.apply(block, make_context(seed=seed))

    _, items = _array_items(result)
    assert sorted(item.value for item in items) == ["p", "q", "r", "s"]
    for original, rewritten in zip(block.statements, result.statements[1:]):
        assert isinstance(rewritten.expr, Index)
        position = int(rewritten.expr.key.value)
        assert items[position - 1] == original.expr


def test_constant_array_base64_encodes_and_wraps_reads() -> None:
    block = parse('a = "hello"')
    step = ConstantArray({"Shuffle": False, "Rotate": False})

    result = step.apply(block, make_context())

    _, items = _array_items(result)
    assert items == [String(base64.b64encode(b"hello").decode("ascii"))]
    assert result.statements[1] == Assignment(
        "a", Call(callee=Variable("_2"), args=(Index(Variable("_1"), Number(1.0)),))
    )


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        (r'local s = "\255"', b"\xff"),
        (r'local s = "\xc3\xa9"', "é".encode("utf-8")),
        ('local s = "é"', "é".encode("utf-8")),
        (r'local s = "\u{20AC}"', "€".encode("utf-8")),
    ],
)
def test_constant_array_base64_keeps_string_bytes(source: str, expected: bytes) -> None:
    step = ConstantArray({"Shuffle": False, "Rotate": False})

    result = step.apply(parse(source), make_context())

    _, items = _array_items(result)
    assert base64.b64decode(items[0].value) == expected


def test_constant_array_zero_treshold_leaves_uses_inline() -> None:
    block = parse('a = "x"')
    result = ConstantArray({"Treshold": 0}).apply(block, make_context())
    assert result.statements[1] == block.statements[0]


def test_constant_array_without_literals_is_noop() -> None:
    block = parse("a = b")
    assert ConstantArray().apply(block, make_context()) is block


def test_constant_array_exposes_local_wrapper_settings() -> None:
    step = ConstantArray({"LocalWrapperCount": 1000, "LocalWrapperArgCount": 0})
    assert step.local_wrapper_count == 512
    assert step.local_wrapper_arg_count == 1
    assert step.max_wrapper_offset == 65535
    assert step.local_wrapper_treshold == 1.0


# WrapInFunction


def test_wrap_in_function_wraps_body() -> None:
    block = parse("return 1")

    result = WrapInFunction().apply(block, make_context())

    assert result == Block(
        statements=(Return(Call(callee=Function(params=(), is_vararg=True, body=block), args=(Vararg(),))),)
    )


def test_wrap_in_function_iterations() -> None:
    block = parse("return 1")
    result = WrapInFunction({"Iterations": 3}).apply(block, make_context())

    depth = 0
    current = result
    while current != block:
        call = current.statements[0].expr
        assert isinstance(call, Call)
        current = call.callee.body
        depth += 1
    assert depth == 3


def test_wrap_in_function_minimum_one_iteration() -> None:
    assert WrapInFunction({"Iterations": 0}).iterations == 1


# AntiTamper


def test_anti_tamper_without_vmify_warns_and_skips(caplog: pytest.LogCaptureFixture) -> None:
    block = parse("a = 1")
    with caplog.at_level(logging.WARNING, logger="lunaveil.steps.anti_tamper"):
        result = AntiTamper().apply(block, make_context("AntiTamper"))
    assert result is block
    assert any("Vmify" in record.getMessage() for record in caplog.records)


def test_anti_tamper_with_vmify_is_silent(caplog: pytest.LogCaptureFixture) -> None:
    block = parse("a = 1")
    with caplog.at_level(logging.WARNING, logger="lunaveil.steps.anti_tamper"):
        result = AntiTamper({"UseDebug": False}).apply(block, make_context("Vmify", "AntiTamper"))
    assert result is block
    assert not caplog.records


# AddVararg


def test_add_vararg_marks_every_function() -> None:
    inner = Function(params=("b",), is_vararg=False, body=Block())
    outer = Function(params=("a",), is_vararg=False, body=Block((Return(inner),)))
    block = Block((LocalAssignment("f", outer),))

    result = AddVararg().apply(block, make_context())

    functions = [node for node in walk(result) if isinstance(node, Function)]
    assert len(functions) == 2
    assert all(function.is_vararg for function in functions)
    assert [function.params for function in functions] == [("a",), ("b",)]


def test_add_vararg_without_functions_is_structurally_unchanged() -> None:
    block = parse("a = 1 + b")
    assert AddVararg().apply(block, make_context()) == block


# NumbersToExpressions


@pytest.mark.parametrize("seed", range(5))
def test_numbers_to_expressions_preserves_values(seed: int) -> None:
    block = parse("a = 1\nb = 42.5\nc = 0 - 7")
    step = NumbersToExpressions({"InternalTreshold": 0.8})

    result = step.apply(block, make_context(seed=seed))

    for original, rewritten in zip(block.statements, result.statements):
        assert isinstance(rewritten.expr, BinaryOp)
        assert evaluate(rewritten.expr) == evaluate(original.expr)


def test_numbers_to_expressions_zero_treshold_is_noop() -> None:
    block = parse("a = 1")
    assert NumbersToExpressions({"Treshold": 0}).apply(block, make_context()) == block


def test_numbers_to_expressions_clamps_internal_treshold() -> None:
    assert NumbersToExpressions({"InternalTreshold": 1}).internal_treshold == 0.8


# SplitStrings


def test_split_strings_strcat() -> None:
    block = parse('a = "abcdefghijkl"')
    step = SplitStrings({"ConcatenationType": "strcat", "MinLength": 5, "MaxLength": 5})

    result = step.apply(block, make_context())

    expr = result.statements[0].expr
    assert evaluate(expr) == "abcdefghijkl"
    assert [literal.value for literal in literals_of(expr)] == ["abcde", "fghij", "kl"]


def test_split_strings_table_concat() -> None:
    block = parse('a = "abcdefgh"')
    step = SplitStrings({"ConcatenationType": "table", "MinLength": 4, "MaxLength": 4})

    result = step.apply(block, make_context())

    assert result.statements[0] == Assignment(
        "a",
        Call(
            callee=Index(Variable("table"), String("concat")),
            args=(Table.array([String("abcd"), String("efgh")]),),
        ),
    )


def test_split_strings_custom_global_helper() -> None:
    block = parse('a = "abcdefgh"')
    step = SplitStrings({"MinLength": 4, "MaxLength": 4})

    result = step.apply(block, make_context())

    helper = result.statements[0]
    assert isinstance(helper, Assignment)
    assert helper.name == "_1"
    assert isinstance(helper.expr, Function)
    assert helper.expr.is_vararg
    assert result.statements[1] == Assignment("a", Call(Variable("_1"), (String("abcd"), String("efgh"))))


def test_split_strings_custom_local_helpers() -> None:
    block = parse('a = "abcdefgh"\nb = "ijklmnop"')
    step = SplitStrings({"MinLength": 4, "MaxLength": 4, "CustomFunctionType": "local", "CustomLocalFunctionsCount": 3})

    result = step.apply(block, make_context())

    helpers = result.statements[:3]
    assert all(isinstance(helper, LocalAssignment) for helper in helpers)
    assert [helper.name for helper in helpers] == ["_1", "_2", "_3"]
    for statement in result.statements[3:]:
        assert isinstance(statement.expr, Call)
        assert statement.expr.callee.name in {"_1", "_2", "_3"}


def test_split_strings_custom_inline_helper() -> None:
    block = parse('a = "abcdefgh"')
    step = SplitStrings({"MinLength": 4, "MaxLength": 4, "CustomFunctionType": "inline"})

    result = step.apply(block, make_context())

    assert len(result.statements) == 1
    call = result.statements[0].expr
    assert isinstance(call, Call)
    assert isinstance(call.callee, Function)
    assert call.args == (String("abcd"), String("efgh"))


@pytest.mark.parametrize("seed", range(5))
def test_split_strings_random_chunk_lengths(seed: int) -> None:
    text = "the quick brown fox jumps over the lazy dog"
    block = Block((Assignment("a", String(text)),))
    step = SplitStrings({"ConcatenationType": "strcat", "MinLength": 2, "MaxLength": 6})

    result = step.apply(block, make_context(seed=seed))

    chunks = [literal.value for literal in literals_of(result.statements[0].expr)]
    assert "".join(chunks) == text
    assert all(2 <= len(chunk) <= 6 for chunk in chunks[:-1])


def test_split_strings_short_strings_untouched() -> None:
    block = parse('a = "abc"')
    assert SplitStrings().apply(block, make_context()) is block


# Watermark


def test_watermark_prepends_assignment() -> None:
    block = parse("a = 1")
    step = Watermark({"Content": "mark", "CustomVariable": "_MARK"})

    result = step.apply(block, make_context())

    assert result.statements == (Assignment("_MARK", String("mark")), *block.statements)


def test_watermark_content_is_stored_as_utf8_bytes() -> None:
    result = Watermark({"Content": "\u00a9 lunaveil"}).apply(parse("a = 1"), make_context())
    assert result.statements[0].expr.value.encode("latin-1") == "\u00a9 lunaveil".encode("utf-8")


def test_watermark_check_uses_generated_name() -> None:
    block = parse("a = 1")
    result = WatermarkCheck({"Content": "mark"}).apply(block, make_context(prefix="p_"))
    assert result.statements[0] == Assignment("p__1", String("mark"))


# Placeholders


@pytest.mark.parametrize("step_type", [EncryptStrings, Vmify])
def test_placeholder_steps_leave_ast_unchanged(step_type) -> None:
    block = parse('a = "x"')
    assert step_type().apply(block, make_context()) is block


# ProxifyLocals


def test_proxify_locals_wraps_declarations_and_reads() -> None:
    block = parse("local a = 1\nb = a + 2\na = 3")

    result = ProxifyLocals().apply(block, make_context())

    key = String("_1")
    assert result.statements == (
        LocalAssignment("a", Table((TableField(value=Number(1.0), key=key),))),
        Assignment("b", BinaryOp(Index(Variable("a"), key), "+", Number(2.0))),
        Assignment("a", Table((TableField(value=Number(3.0), key=key),))),
    )


def test_proxify_locals_leaves_globals_alone() -> None:
    block = parse("b = c")
    assert ProxifyLocals().apply(block, make_context()) == block


def test_proxify_locals_initializer_sees_outer_binding() -> None:
    block = parse("local a = 1\nlocal a = a")

    result = ProxifyLocals().apply(block, make_context())

    second = result.statements[1]
    assert second.expr.fields[0].value == Index(Variable("a"), String("_1"))
    assert second.expr.fields[0].key == String("_2")


def test_proxify_locals_parameters_shadow_locals() -> None:
    function = Function(params=("a",), is_vararg=False, body=Block((Return(Variable("a")),)))
    block = Block((LocalAssignment("a", Number(1.0)), ExpressionStatement(function)))

    result = ProxifyLocals().apply(block, make_context())

    assert result.statements[1] == ExpressionStatement(function)


@pytest.mark.parametrize(
    ("literal_type", "kind"),
    [("number", Number), ("dictionary", String), ("string", String)],
)
def test_proxify_locals_key_literal_type(literal_type: str, kind: type) -> None:
    block = parse("local a = 1")
    result = ProxifyLocals({"LiteralType": literal_type}).apply(block, make_context())
    assert isinstance(result.statements[0].expr.fields[0].key, kind)


# Deep trees


@pytest.mark.parametrize(
    "step",
    [
        NumbersToExpressions({"Treshold": 0}),
        NumbersToExpressions(),
        ConstantArray({"Encoding": "none"}),
        SplitStrings({"MinLength": 1, "MaxLength": 1}),
        ProxifyLocals(),
        AddVararg(),
    ],
    ids=lambda step: step.key,
)
def test_steps_rewrite_long_operator_chains(step) -> None:
    block = parse("local x = " + " + ".join(['"ab"', "1"] * 1500))

    result = step.apply(block, make_context())

    assert sum(1 for node in walk(result) if isinstance(node, BinaryOp) and node.operator == "+") >= 2999
