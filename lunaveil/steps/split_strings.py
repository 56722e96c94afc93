"""Split string literals into concatenated chunks."""

import logging
import random
from collections.abc import Mapping

from lunaveil.ast import (
    Assignment,
    AstTransformer,
    BinaryOp,
    Block,
    Call,
    Expression,
    Function,
    Index,
    LocalAssignment,
    Return,
    Statement,
    String,
    Table,
    Vararg,
    Variable,
)
from lunaveil.steps.base import StepBase, StepContext
from lunaveil.steps.settings import SettingDescriptor

logger = logging.getLogger(__name__)


def table_concat(argument: Expression) -> Call:
    """`table.concat(argument)`."""
    return Call(callee=Index(target=Variable(name="table"), key=String(value="concat")), args=(argument,))


def concat_helper() -> Function:
    """`function(...) return table.concat({...}) end`."""
    body = Block(statements=(Return(expr=table_concat(Table.array([Vararg()]))),))
    return Function(params=(), is_vararg=True, body=body)


def split_chunks(value: str, min_length: int, max_length: int, rng: random.Random) -> list[str]:
    chunks: list[str] = []
    position = 0
    while position < len(value):
        length = rng.randint(min_length, max_length)
        chunks.append(value[position : position + length])
        position += length
    return chunks


class SplitStrings(StepBase):
    """Split strings into chunks of `MinLength..MaxLength` characters.

    `ConcatenationType` picks how chunks are joined back together: a `..`
    chain, a `table.concat{...}` call, or a call to a helper function placed
    according to `CustomFunctionType`.
    """

    key = "SplitStrings"
    name = "Split Strings"
    description = "This Step splits Strings to a specific or random length"
    settings_descriptor = (
        SettingDescriptor.number("Treshold", "The relative amount of nodes that will be affected", 1.0, 0.0, 1.0),
        SettingDescriptor.number(
            "MinLength", "The minimal length for the chunks in that the Strings are splitted", 5, 1, None, integral=True
        ),
        SettingDescriptor.number(
            "MaxLength", "The maximal length for the chunks in that the Strings are splitted", 5, 1, None, integral=True
        ),
        SettingDescriptor.enumeration(
            "ConcatenationType",
            "The Functions used for Concatenation. Note that when using custom, the String Array will also be Shuffled",
            "custom",
            ("strcat", "table", "custom"),
        ),
        SettingDescriptor.enumeration(
            "CustomFunctionType",
            "The Type of Function code injection. This option only applies when custom Concatenation is selected.",
            "global",
            ("global", "local", "inline"),
        ),
        SettingDescriptor.number(
            "CustomLocalFunctionsCount",
            "The number of local functions per scope. This option only applies when CustomFunctionType = local",
            2,
            1,
            None,
            integral=True,
        ),
    )

    def __init__(self, settings: Mapping[str, object] | None = None) -> None:
        super().__init__(settings)
        self.treshold = self._number("Treshold")
        self.min_length = self._integer("MinLength")
        self.max_length = max(self.min_length, self._integer("MaxLength"))
        self.concatenation_type = self._text("ConcatenationType")
        self.custom_function_type = self._text("CustomFunctionType")
        self.custom_local_functions_count = self._integer("CustomLocalFunctionsCount")

    def apply(self, block: Block, context: StepContext) -> Block:
        helpers: list[str] = []
        declarations: list[Statement] = []
        if self.concatenation_type == "custom":
            match self.custom_function_type:
                case "global":
                    helpers.append(context.generate_name())
                    declarations.append(Assignment(name=helpers[0], expr=concat_helper()))
                case "local":
                    for _ in range(self.custom_local_functions_count):
                        helper = context.generate_name()
                        helpers.append(helper)
                        declarations.append(LocalAssignment(name=helper, expr=concat_helper()))

        splitter = _StringSplitter(self, context.rng, helpers)
        rewritten = splitter.visit(block)
        if splitter.split_count == 0:
            return block
        logger.debug("SplitStrings: split %d string literals", splitter.split_count)
        return rewritten.prepend(*declarations)

    def join(self, chunks: list[str], rng: random.Random, helpers: list[str]) -> Expression:
        parts: list[Expression] = [String(value=chunk) for chunk in chunks]
        match self.concatenation_type:
            case "strcat":
                joined = parts[0]
                for part in parts[1:]:
                    joined = BinaryOp(left=joined, operator="..", right=part)
                return joined
            case "table":
                return table_concat(Table.array(parts))
        if helpers:
            return Call(callee=Variable(name=rng.choice(helpers)), args=tuple(parts))
        return Call(callee=concat_helper(), args=tuple(parts))


class _StringSplitter(AstTransformer):
    def __init__(self, step: SplitStrings, rng: random.Random, helpers: list[str]) -> None:
        self._step = step
        self._rng = rng
        self._helpers = helpers
        self.split_count = 0

    def visit_string(self, node: String) -> Expression:
        if self._rng.random() >= self._step.treshold:
            return node
        chunks = split_chunks(node.value, self._step.min_length, self._step.max_length, self._rng)
        if len(chunks) < 2:
            return node
        self.split_count += 1
        return self._step.join(chunks, self._rng, self._helpers)
