"""Pipeline execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from nifi_schema_prep.configuration.runtime_settings import OutputSettings, TargetedFieldConfig
from nifi_schema_prep.schema_patching import PatchReport


class PipelineState(Enum):
    """Forward-only stages of one preparation run."""

    LOADED = 1
    PATCHED = 2
    EXTRACTED = 3


@dataclass(frozen=True)
class PipelineRequest:
    """Input contract for one preparation run."""

    spec_path: Path
    output: OutputSettings
    targeted_fields: tuple[TargetedFieldConfig, ...] = ()
    force: bool = False


@dataclass(frozen=True)
class PipelineOutcome:
    """Output contract for one completed or skipped run."""

    root_schema_path: Path
    source_path: Path | None
    fingerprint: str
    definitions: int | None
    patch_report: PatchReport | None
    skipped: bool = False
