"""Pipeline run carrier."""

from __future__ import annotations

from dataclasses import dataclass

from lunaveil.ast import Block
from lunaveil.diagnostics import Diagnostic


@dataclass(frozen=True, slots=True)
class PipelineRunResult:
    """Output of one pipeline run.

    `code` is the emitted program text. Until an emitter exists this is the
    input text unchanged, while `block` carries the transformed AST.
    """

    code: str
    block: Block
    warnings: tuple[Diagnostic, ...] = ()

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)
