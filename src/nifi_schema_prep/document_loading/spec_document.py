"""Document loading entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class SpecDocument:
    """Parsed API description owned by a single pipeline run.

    `root` is the mutable JSON tree; patches rewrite it in place.
    """

    root: Any
    content_hash: str
    source_path: Path | None = None
