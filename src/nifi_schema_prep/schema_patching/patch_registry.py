"""Ordered registry of schema patches."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .patch_models import SchemaPatch
from .structural_matcher import NullableStringMapPatch
from .targeted_navigator import NullableMapFieldPatch

# NiFi reports unset processor properties as JSON null.
DEFAULT_MAP_FIELD_TARGETS: tuple[tuple[str, str], ...] = (("ProcessorConfigDTO", "properties"),)


class PatchRegistryError(Exception):
    """Raised for empty or conflicting patch registries."""


def default_patch_registry() -> tuple[SchemaPatch, ...]:
    """Return the built-in patches in application order."""
    return build_patch_registry(())


def build_patch_registry(extra_targets: Iterable[tuple[str, str]]) -> tuple[SchemaPatch, ...]:
    """Return the built-in patches followed by one targeted patch per extra target."""
    patches: list[SchemaPatch] = [NullableStringMapPatch()]
    for schema_name, field_name in (*DEFAULT_MAP_FIELD_TARGETS, *extra_targets):
        patches.append(NullableMapFieldPatch(schema_name, field_name))
    _ensure_unique_names(patches)
    return tuple(patches)


def _ensure_unique_names(patches: Sequence[SchemaPatch]) -> None:
    seen: set[str] = set()
    for patch in patches:
        if patch.name in seen:
            raise PatchRegistryError(f"Duplicate schema patch registered: {patch.name}")
        seen.add(patch.name)
