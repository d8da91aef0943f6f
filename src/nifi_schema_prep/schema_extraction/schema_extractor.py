"""Extraction of patched schema definitions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from nifi_schema_prep.document_loading import SpecDocument, schemas_section

from .extraction_models import ExtractionResult, RootSchema

_LOGGER = logging.getLogger(__name__)

INSTANCE_TYPES = frozenset({"null", "boolean", "object", "array", "number", "string", "integer"})

_SCHEMA_MAP_KEYWORDS = ("properties", "patternProperties", "definitions")
_SCHEMA_LIST_KEYWORDS = ("allOf", "anyOf", "oneOf")
_SCHEMA_KEYWORDS = ("not", "propertyNames", "contains", "if", "then", "else")
_BOOLEAN_KEYWORDS = (
    "nullable",
    "readOnly",
    "writeOnly",
    "deprecated",
    "uniqueItems",
    "exclusiveMinimum",
    "exclusiveMaximum",
)


class SchemaCastError(Exception):
    """Raised when a schemas entry cannot be read as a schema node."""

    def __init__(self, schema_name: str, detail: str) -> None:
        super().__init__(f"Schema '{schema_name}' is not a valid schema node: {detail}")
        self.schema_name = schema_name
        self.detail = detail


def extract_schemas(document: SpecDocument) -> ExtractionResult:
    """Return every `components.schemas` entry, validated, in document order."""
    definitions: dict[str, Any] = {}
    for name, node in schemas_section(document).items():
        if not isinstance(node, Mapping):
            raise SchemaCastError(name, f"expected an object, found {_json_type_name(node)}")
        problem = _validate_node(node, path=name)
        if problem:
            raise SchemaCastError(name, problem)
        definitions[name] = node
    _LOGGER.info("Extracted %d schema definition(s)", len(definitions))
    return ExtractionResult(definitions=definitions)


def build_root_schema(result: ExtractionResult, **metadata: Any) -> RootSchema:
    """Wrap extracted definitions in the root container expected by type generators."""
    return RootSchema(definitions=dict(result.definitions), metadata=dict(metadata))


def _validate_node(node: Any, *, path: str) -> str | None:
    """Return a description of the first shape violation under `node`, if any."""
    if not isinstance(node, Mapping):
        return f"{path} must be an object, found {_json_type_name(node)}"

    problem = _validate_type_keyword(node.get("type"), path=path) if "type" in node else None
    if problem:
        return problem

    for keyword in _SCHEMA_MAP_KEYWORDS:
        if keyword not in node:
            continue
        members = node[keyword]
        if not isinstance(members, Mapping):
            return f"{path}.{keyword} must be an object"
        for key, child in members.items():
            problem = _validate_node(child, path=f"{path}.{keyword}.{key}")
            if problem:
                return problem

    if "additionalProperties" in node and not isinstance(node["additionalProperties"], bool):
        problem = _validate_node(node["additionalProperties"], path=f"{path}.additionalProperties")
        if problem:
            return problem

    if "items" in node:
        problem = _validate_items(node["items"], path=f"{path}.items")
        if problem:
            return problem

    for keyword in _SCHEMA_LIST_KEYWORDS:
        if keyword not in node:
            continue
        members = node[keyword]
        if not isinstance(members, list) or not members:
            return f"{path}.{keyword} must be a non-empty array"
        for index, child in enumerate(members):
            problem = _validate_node(child, path=f"{path}.{keyword}[{index}]")
            if problem:
                return problem

    for keyword in _SCHEMA_KEYWORDS:
        if keyword in node:
            problem = _validate_node(node[keyword], path=f"{path}.{keyword}")
            if problem:
                return problem

    return _validate_scalar_keywords(node, path=path)


def _validate_type_keyword(value: Any, *, path: str) -> str | None:
    if isinstance(value, str):
        if value not in INSTANCE_TYPES:
            return f"{path}.type has unknown instance type '{value}'"
        return None
    if isinstance(value, list):
        if not value:
            return f"{path}.type must not be an empty array"
        if not all(isinstance(item, str) and item in INSTANCE_TYPES for item in value):
            return f"{path}.type contains an unknown instance type"
        if len(set(value)) != len(value):
            return f"{path}.type contains duplicate instance types"
        return None
    return f"{path}.type must be a string or array of strings"


def _validate_items(value: Any, *, path: str) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, list):
        for index, child in enumerate(value):
            problem = _validate_node(child, path=f"{path}[{index}]")
            if problem:
                return problem
        return None
    return _validate_node(value, path=path)


def _validate_scalar_keywords(node: Mapping[str, Any], *, path: str) -> str | None:
    required = node.get("required")
    if "required" in node and not (
        isinstance(required, list) and all(isinstance(item, str) for item in required)
    ):
        return f"{path}.required must be an array of strings"
    if "enum" in node and not isinstance(node["enum"], list):
        return f"{path}.enum must be an array"
    if "$ref" in node and not isinstance(node["$ref"], str):
        return f"{path}.$ref must be a string"
    for keyword in _BOOLEAN_KEYWORDS:
        if keyword in node and not isinstance(node[keyword], bool):
            # Draft-06+ numeric exclusive bounds are also accepted.
            if keyword.startswith("exclusive") and _is_number(node[keyword]):
                continue
            return f"{path}.{keyword} must be a boolean"
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if _is_number(value):
        return "number"
    return type(value).__name__
