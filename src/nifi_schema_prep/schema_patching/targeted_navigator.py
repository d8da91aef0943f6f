"""Fixed-path rewrite of one known-bad map field."""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

from .patch_models import NULLABLE_STRING_TYPE

_LOGGER = logging.getLogger(__name__)


class PathResolutionError(Exception):
    """Raised when a targeted patch path no longer exists in the document."""

    def __init__(self, schema_name: str, field_name: str, segment: str) -> None:
        super().__init__(
            f"Cannot resolve '{segment}' for targeted patch {schema_name}.{field_name}; "
            "the specification changed shape."
        )
        self.schema_name = schema_name
        self.field_name = field_name
        self.segment = segment

    @property
    def parts(self) -> tuple[str, str, str]:
        return (self.schema_name, self.field_name, self.segment)


def resolve_map_field(
    schemas: Mapping[str, Any], schema_name: str, field_name: str
) -> tuple[MutableMapping[str, Any], MutableMapping[str, Any]]:
    """Return `(field, additionalProperties child)` for `schema_name.field_name`."""
    schema = _require_object(schemas, schema_name, schema_name, field_name)
    properties = _require_object(schema, "properties", schema_name, field_name)
    field = _require_object(properties, field_name, schema_name, field_name)
    child = _require_object(field, "additionalProperties", schema_name, field_name)
    return field, child


def _require_object(
    node: Mapping[str, Any], segment: str, schema_name: str, field_name: str
) -> MutableMapping[str, Any]:
    child = node.get(segment)
    if not isinstance(child, MutableMapping):
        raise PathResolutionError(schema_name, field_name, segment)
    return child


def mark_map_field_nullable(
    field: MutableMapping[str, Any], child: MutableMapping[str, Any]
) -> bool:
    """Apply the nullable-map correction to one field; return whether anything changed."""
    changed = field.get("nullable") is not True
    field["nullable"] = True

    child_type = child.get("type")
    if child_type == "string":
        child["type"] = list(NULLABLE_STRING_TYPE)
        return True
    if isinstance(child_type, list) and "null" in child_type:
        return changed
    if child.get("nullable") is not True:
        child["nullable"] = True
        return True
    return changed


class NullableMapFieldPatch:
    """Mark `schema.field` and its map values nullable, failing if the path is gone."""

    def __init__(self, schema_name: str, field_name: str) -> None:
        self.schema_name = schema_name
        self.field_name = field_name

    @property
    def name(self) -> str:
        return f"nullable-map:{self.schema_name}.{self.field_name}"

    def apply(self, schemas: MutableMapping[str, Any]) -> int:
        field, child = resolve_map_field(schemas, self.schema_name, self.field_name)
        if not mark_map_field_nullable(field, child):
            return 0
        _LOGGER.debug("Rewrote map field %s.%s", self.schema_name, self.field_name)
        return 1

    def __repr__(self) -> str:
        return f"NullableMapFieldPatch({self.schema_name!r}, {self.field_name!r})"
