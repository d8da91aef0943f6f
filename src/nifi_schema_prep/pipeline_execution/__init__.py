"""Pipeline execution exports."""

from .pipeline_contracts import PipelineOutcome, PipelineRequest, PipelineState
from .schema_preparation_use_case import (
    PipelineExecutionError,
    execute_schema_preparation,
    prepare_from_configuration,
)

__all__ = [
    "PipelineOutcome",
    "PipelineRequest",
    "PipelineState",
    "PipelineExecutionError",
    "execute_schema_preparation",
    "prepare_from_configuration",
]
