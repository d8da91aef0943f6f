"""Targeted map-field patch tests."""

from __future__ import annotations

import copy
from typing import Any

import pytest
from nifi_schema_prep.schema_patching.structural_matcher import NullableStringMapPatch
from nifi_schema_prep.schema_patching.targeted_navigator import (
    NullableMapFieldPatch,
    PathResolutionError,
    resolve_map_field,
)


def _schemas(additional: Any) -> dict[str, Any]:
    return {
        "Foo": {
            "type": "object",
            "properties": {"bar": {"type": "object", "additionalProperties": additional}},
        }
    }


def test_string_values_become_a_nullable_type_set() -> None:
    schemas = _schemas({"type": "string"})

    rewritten = NullableMapFieldPatch("Foo", "bar").apply(schemas)

    assert rewritten == 1
    assert schemas["Foo"]["properties"]["bar"] == {
        "type": "object",
        "additionalProperties": {"type": ["string", "null"]},
        "nullable": True,
    }


def test_non_string_values_fall_back_to_nullable_marker() -> None:
    schemas = _schemas({"$ref": "#/components/schemas/Baz"})

    NullableMapFieldPatch("Foo", "bar").apply(schemas)

    field = schemas["Foo"]["properties"]["bar"]
    assert field["nullable"] is True
    assert field["additionalProperties"] == {
        "$ref": "#/components/schemas/Baz",
        "nullable": True,
    }


def test_missing_additional_properties_names_segment() -> None:
    schemas = {"Foo": {"type": "object", "properties": {"bar": {"type": "object"}}}}

    with pytest.raises(PathResolutionError) as excinfo:
        NullableMapFieldPatch("Foo", "bar").apply(schemas)

    assert excinfo.value.parts == ("Foo", "bar", "additionalProperties")
    assert schemas == {"Foo": {"type": "object", "properties": {"bar": {"type": "object"}}}}


@pytest.mark.parametrize(
    ("schemas", "segment"),
    [
        ({}, "Foo"),
        ({"Foo": "not-an-object"}, "Foo"),
        ({"Foo": {"type": "object"}}, "properties"),
        ({"Foo": {"properties": {"other": {}}}}, "bar"),
        ({"Foo": {"properties": {"bar": {"additionalProperties": True}}}}, "additionalProperties"),
    ],
)
def test_unresolvable_segment_is_reported(schemas: dict[str, Any], segment: str) -> None:
    with pytest.raises(PathResolutionError) as excinfo:
        resolve_map_field(schemas, "Foo", "bar")

    assert excinfo.value.schema_name == "Foo"
    assert excinfo.value.field_name == "bar"
    assert excinfo.value.segment == segment
    assert "Foo.bar" in str(excinfo.value)


def test_is_idempotent() -> None:
    schemas = _schemas({"type": "string"})
    patch = NullableMapFieldPatch("Foo", "bar")

    patch.apply(schemas)
    once = copy.deepcopy(schemas)

    assert patch.apply(schemas) == 0
    assert schemas == once


def test_after_structural_patch_no_double_encoding() -> None:
    schemas = _schemas({"type": "string"})

    NullableStringMapPatch().apply(schemas)
    rewritten = NullableMapFieldPatch("Foo", "bar").apply(schemas)

    field = schemas["Foo"]["properties"]["bar"]
    assert rewritten == 0
    assert field["nullable"] is True
    assert field["additionalProperties"] == {"type": ["string", "null"]}


def test_patch_name_identifies_target() -> None:
    assert NullableMapFieldPatch("Foo", "bar").name == "nullable-map:Foo.bar"
