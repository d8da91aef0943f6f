"""Patch engine applying the registry to `components.schemas`."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from nifi_schema_prep.document_loading import MissingSectionError, SpecDocument, schemas_section

from .patch_models import PatchReport, PatchResult, SchemaPatch
from .patch_registry import PatchRegistryError

_LOGGER = logging.getLogger(__name__)

__all__ = ["MissingSectionError", "apply_patches"]


def apply_patches(document: SpecDocument, patches: Sequence[SchemaPatch]) -> PatchReport:
    """Apply every patch in order to the document's schemas, in place.

    Raises:
      PatchRegistryError: If no patches are given.
      MissingSectionError: If the document has no `components.schemas` object.
    """
    if not patches:
        raise PatchRegistryError("At least one schema patch must be registered.")
    schemas = schemas_section(document)

    results: list[PatchResult] = []
    for patch in patches:
        rewritten = patch.apply(schemas)
        _LOGGER.info("Applied patch %s (%d node(s) rewritten)", patch.name, rewritten)
        results.append(PatchResult(name=patch.name, rewritten=rewritten))
    return PatchReport(results=tuple(results))
