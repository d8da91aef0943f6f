"""Section lookup helpers for parsed specification documents."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from .spec_document import SpecDocument


class MissingSectionError(Exception):
    """Raised when a required document section is absent."""

    def __init__(self, section: str) -> None:
        super().__init__(f"Specification document does not contain '{section}'.")
        self.section = section


def schemas_section(document: SpecDocument) -> MutableMapping[str, Any]:
    """Return the live `components.schemas` mapping of a document."""
    root = document.root
    components = root.get("components") if isinstance(root, MutableMapping) else None
    if not isinstance(components, MutableMapping):
        raise MissingSectionError("components")
    schemas = components.get("schemas")
    if not isinstance(schemas, MutableMapping):
        raise MissingSectionError("components.schemas")
    return schemas
