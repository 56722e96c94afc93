"""Pipeline orchestration and run results."""

from lunaveil.pipeline.pipeline import (
    DEFAULT_NAME_GENERATOR,
    Pipeline,
    PipelineConfigError,
    UnknownStepError,
)
from lunaveil.pipeline.result import PipelineRunResult

__all__ = [
    "DEFAULT_NAME_GENERATOR",
    "Pipeline",
    "PipelineConfigError",
    "PipelineRunResult",
    "UnknownStepError",
]
