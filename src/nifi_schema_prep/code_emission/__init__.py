"""Code emission exports."""

from .source_emitter import (
    EmissionError,
    TypeGenerator,
    commit_artifacts,
    generate_source,
    load_type_generator,
    render_root_schema,
    write_generated_source,
    write_root_schema,
)

__all__ = [
    "EmissionError",
    "TypeGenerator",
    "commit_artifacts",
    "generate_source",
    "load_type_generator",
    "render_root_schema",
    "write_generated_source",
    "write_root_schema",
]
