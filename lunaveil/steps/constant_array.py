"""Hoist literals into a single constant array."""

import base64
import logging
import random
from collections.abc import Mapping

from lunaveil.ast import (
    AstTransformer,
    Block,
    Call,
    Expression,
    Index,
    LocalAssignment,
    Number,
    String,
    Table,
    Variable,
    walk,
)
from lunaveil.steps.base import StepBase, StepContext
from lunaveil.steps.settings import SettingDescriptor

logger = logging.getLogger(__name__)

type ConstantKey = tuple[type, str | float]


class ConstantArray(StepBase):
    """Replace literals with reads from one `local` table declared up front.

    With `Rotate` the table is stored rotated by a random amount and every
    index already points at the rotated slot. With `Encoding=base64` strings
    are stored encoded and each read goes through a decoder call.
    """

    key = "ConstantArray"
    name = "Constant Array"
    description = "This Step will Extract all Constants and put them into an Array at the beginning of the script"
    settings_descriptor = (
        SettingDescriptor.number("Treshold", "The relative amount of nodes that will be affected", 1.0, 0.0, 1.0),
        SettingDescriptor.boolean("StringsOnly", "Whether to only Extract Strings", False),
        SettingDescriptor.boolean("Shuffle", "Whether to shuffle the order of Elements in the Array", True),
        SettingDescriptor.boolean(
            "Rotate",
            "Whether to rotate the String Array by a specific (random) amount. This will be undone on runtime.",
            True,
        ),
        SettingDescriptor.number(
            "LocalWrapperTreshold", "The relative amount of functions that will get local wrappers", 1.0, 0.0, 1.0
        ),
        SettingDescriptor.number(
            "LocalWrapperCount",
            "The number of Local wrapper Functions per scope. "
            "This only applies if LocalWrapperTreshold is greater than 0",
            0,
            0,
            512,
            integral=True,
        ),
        SettingDescriptor.number(
            "LocalWrapperArgCount", "The number of Arguments to the Local wrapper Functions", 10, 1, 200, integral=True
        ),
        SettingDescriptor.number(
            "MaxWrapperOffset", "The Max Offset for the Wrapper Functions", 65535, 0, None, integral=True
        ),
        SettingDescriptor.enumeration("Encoding", "The Encoding to use for the Strings", "base64", ("none", "base64")),
    )

    def __init__(self, settings: Mapping[str, object] | None = None) -> None:
        super().__init__(settings)
        self.treshold = self._number("Treshold")
        self.strings_only = self._flag("StringsOnly")
        self.shuffle = self._flag("Shuffle")
        self.rotate = self._flag("Rotate")
        self.local_wrapper_treshold = self._number("LocalWrapperTreshold")
        self.local_wrapper_count = self._integer("LocalWrapperCount")
        self.local_wrapper_arg_count = self._integer("LocalWrapperArgCount")
        self.max_wrapper_offset = self._integer("MaxWrapperOffset")
        self.encoding = self._text("Encoding")

    def apply(self, block: Block, context: StepContext) -> Block:
        constants = self._collect(block)
        if not constants:
            return block

        rng = context.rng
        if self.shuffle:
            rng.shuffle(constants)
        if self.rotate and len(constants) > 1:
            shift = rng.randint(1, len(constants) - 1)
            constants = constants[shift:] + constants[:shift]

        positions = {constant_key(literal): position for position, literal in enumerate(constants, start=1)}
        array_name = context.generate_name()
        decoder_name = context.generate_name() if self.encoding == "base64" else None

        rewriter = _ConstantRewriter(
            positions=positions,
            array_name=array_name,
            decoder_name=decoder_name,
            treshold=self.treshold,
            strings_only=self.strings_only,
            rng=rng,
        )
        rewritten = rewriter.visit(block)
        stored = [self._store(literal) for literal in constants]
        logger.debug("ConstantArray: hoisted %d constants into `%s`", len(stored), array_name)
        return rewritten.prepend(LocalAssignment(name=array_name, expr=Table.array(stored)))

    def _collect(self, block: Block) -> list[Number | String]:
        seen: set[ConstantKey] = set()
        constants: list[Number | String] = []
        for node in walk(block):
            if isinstance(node, String) or (isinstance(node, Number) and not self.strings_only):
                key = constant_key(node)
                if key not in seen:
                    seen.add(key)
                    constants.append(node)
        return constants

    def _store(self, literal: Number | String) -> Expression:
        if isinstance(literal, String) and self.encoding == "base64":
            return String(value=encode_base64(literal.value))
        return literal


class _ConstantRewriter(AstTransformer):
    def __init__(
        self,
        *,
        positions: dict[ConstantKey, int],
        array_name: str,
        decoder_name: str | None,
        treshold: float,
        strings_only: bool,
        rng: random.Random,
    ) -> None:
        self._positions = positions
        self._array_name = array_name
        self._decoder_name = decoder_name
        self._treshold = treshold
        self._strings_only = strings_only
        self._rng = rng

    def _read(self, literal: Number | String) -> Expression:
        if self._rng.random() >= self._treshold:
            return literal
        read: Expression = Index(
            target=Variable(name=self._array_name),
            key=Number(value=float(self._positions[constant_key(literal)])),
        )
        if self._decoder_name is not None and isinstance(literal, String):
            read = Call(callee=Variable(name=self._decoder_name), args=(read,))
        return read

    def visit_string(self, node: String) -> Expression:
        return self._read(node)

    def visit_number(self, node: Number) -> Expression:
        if self._strings_only:
            return node
        return self._read(node)


def constant_key(literal: Number | String) -> ConstantKey:
    return (type(literal), literal.value)


def encode_base64(value: str) -> str:
    return base64.b64encode(value.encode("latin-1")).decode("ascii")
