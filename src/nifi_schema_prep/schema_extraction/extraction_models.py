"""Schema extraction entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

JSON_SCHEMA_DIALECT = "http://json-schema.org/draft-07/schema#"


@dataclass(frozen=True)
class ExtractionResult:
    """Corrected schema definitions keyed by name, in source document order."""

    definitions: dict[str, Any]

    def __len__(self) -> int:
        return len(self.definitions)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self.definitions)


@dataclass(frozen=True)
class RootSchema:
    """Root schema container handed to a type generator."""

    definitions: dict[str, Any]
    dialect: str = JSON_SCHEMA_DIALECT
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_json_value(self) -> dict[str, Any]:
        value: dict[str, Any] = {"$schema": self.dialect}
        value.update(self.metadata)
        value["definitions"] = self.definitions
        return value
