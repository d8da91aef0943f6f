"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_SPEC_PATH = "spec/nifi/openapi/2.6.0/swagger.json"
DEFAULT_ROOT_SCHEMA_FILENAME = "root_schema.json"
DEFAULT_SOURCE_FILENAME = "generated_types.py"
SOURCE_HASH_FILENAME = ".source-hash"


@dataclass(frozen=True)
class SpecSettings:
    """Location of the API description to prepare."""

    path: Path


@dataclass(frozen=True)
class OutputSettings:
    """Build artifact locations."""

    directory: Path
    root_schema_filename: str = DEFAULT_ROOT_SCHEMA_FILENAME
    source_filename: str = DEFAULT_SOURCE_FILENAME
    generator: str | None = None

    @property
    def root_schema_path(self) -> Path:
        return self.directory / self.root_schema_filename

    @property
    def source_path(self) -> Path:
        return self.directory / self.source_filename

    @property
    def source_hash_path(self) -> Path:
        return self.directory / SOURCE_HASH_FILENAME


@dataclass(frozen=True)
class TargetedFieldConfig:
    """Extra `schema.field` map location to mark nullable."""

    schema: str
    field: str


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    spec: SpecSettings
    output: OutputSettings
    targeted_fields: tuple[TargetedFieldConfig, ...] = ()
