"""Schema patching exports."""

from .patch_engine import MissingSectionError, apply_patches
from .patch_models import PatchReport, PatchResult, SchemaPatch
from .patch_registry import (
    DEFAULT_MAP_FIELD_TARGETS,
    PatchRegistryError,
    build_patch_registry,
    default_patch_registry,
)
from .structural_matcher import NullableStringMapPatch, iter_string_maps
from .targeted_navigator import NullableMapFieldPatch, PathResolutionError

__all__ = [
    "DEFAULT_MAP_FIELD_TARGETS",
    "MissingSectionError",
    "NullableMapFieldPatch",
    "NullableStringMapPatch",
    "PatchRegistryError",
    "PatchReport",
    "PatchResult",
    "PathResolutionError",
    "SchemaPatch",
    "apply_patches",
    "build_patch_registry",
    "default_patch_registry",
    "iter_string_maps",
]
