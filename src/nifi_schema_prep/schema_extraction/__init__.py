"""Schema extraction exports."""

from .extraction_models import JSON_SCHEMA_DIALECT, ExtractionResult, RootSchema
from .schema_extractor import SchemaCastError, build_root_schema, extract_schemas

__all__ = [
    "JSON_SCHEMA_DIALECT",
    "ExtractionResult",
    "RootSchema",
    "SchemaCastError",
    "build_root_schema",
    "extract_schemas",
]
