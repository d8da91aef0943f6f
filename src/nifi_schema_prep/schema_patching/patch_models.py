"""Schema patching entities."""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, Protocol

NULLABLE_STRING_TYPE: tuple[str, str] = ("string", "null")


class SchemaPatch(Protocol):
    """Named, idempotent correction applied to `components.schemas` in place."""

    @property
    def name(self) -> str: ...

    def apply(self, schemas: MutableMapping[str, Any]) -> int:
        """Rewrite the schemas mapping and return the number of rewritten nodes."""
        ...


@dataclass(frozen=True)
class PatchResult:
    """Outcome of one applied patch."""

    name: str
    rewritten: int


@dataclass(frozen=True)
class PatchReport:
    """Ordered outcomes of one patch engine pass."""

    results: tuple[PatchResult, ...]

    @property
    def total_rewritten(self) -> int:
        return sum(result.rewritten for result in self.results)
