"""Schema preparation use-case service."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Sequence
from pathlib import Path

from nifi_schema_prep.code_emission import (
    EmissionError,
    TypeGenerator,
    commit_artifacts,
    generate_source,
    load_type_generator,
    render_root_schema,
)
from nifi_schema_prep.configuration import ConfigurationError, load_configuration
from nifi_schema_prep.document_loading import (
    MissingSectionError,
    ParseError,
    SpecDocument,
    read_spec_document,
)
from nifi_schema_prep.schema_extraction import (
    ExtractionResult,
    SchemaCastError,
    build_root_schema,
    extract_schemas,
)
from nifi_schema_prep.schema_patching import (
    PatchRegistryError,
    PatchReport,
    PathResolutionError,
    SchemaPatch,
    apply_patches,
    build_patch_registry,
)

from .pipeline_contracts import PipelineOutcome, PipelineRequest, PipelineState

_LOGGER = logging.getLogger(__name__)

_STAGE_ERRORS = (
    ParseError,
    MissingSectionError,
    PathResolutionError,
    PatchRegistryError,
    SchemaCastError,
    EmissionError,
)


class PipelineExecutionError(Exception):
    """Raised when a preparation run cannot be completed."""

    def __init__(self, message: str, state: PipelineState | None) -> None:
        super().__init__(message)
        self.state = state


class _PipelineRun:
    """Tracks the stage reached by one run; stages only move forward."""

    def __init__(self) -> None:
        self.state: PipelineState | None = None

    def advance(self, state: PipelineState) -> None:
        current = self.state.value if self.state else 0
        if state.value != current + 1:
            raise RuntimeError(f"Illegal pipeline transition {self.state} -> {state}")
        self.state = state
        _LOGGER.debug("Pipeline state: %s", state.name)


def prepare_from_configuration(
    config_path: Path | str,
    *,
    force: bool = False,
    type_generator: TypeGenerator | None = None,
    generator_reference: str | None = None,
) -> PipelineOutcome:
    """Load the configuration file and run the preparation pipeline it describes.

    An explicit `type_generator` wins over `generator_reference`, which wins over
    the configured `output.generator`.
    """
    try:
        configuration = load_configuration(config_path)
        reference = generator_reference or configuration.output.generator
        if type_generator is None and reference:
            type_generator = load_type_generator(reference)
    except (ConfigurationError, EmissionError) as exc:
        raise PipelineExecutionError(str(exc), None) from exc
    request = PipelineRequest(
        spec_path=configuration.spec.path,
        output=configuration.output,
        targeted_fields=configuration.targeted_fields,
        force=force,
    )
    return execute_schema_preparation(request, type_generator=type_generator)


def execute_schema_preparation(
    request: PipelineRequest,
    *,
    type_generator: TypeGenerator | None = None,
    patches: Sequence[SchemaPatch] | None = None,
) -> PipelineOutcome:
    """Load, patch and extract the specification, then write build artifacts.

    Nothing is written unless every stage succeeds.
    """
    run = _PipelineRun()
    try:
        resolved_patches = patches if patches is not None else _registry_for(request)
        document = read_spec_document(request.spec_path)
        run.advance(PipelineState.LOADED)

        fingerprint = _fingerprint(document, resolved_patches)
        if not request.force and _is_up_to_date(request, fingerprint, type_generator):
            _LOGGER.info("Specification unchanged; skipping preparation")
            return PipelineOutcome(
                root_schema_path=request.output.root_schema_path.resolve(),
                source_path=request.output.source_path.resolve() if type_generator else None,
                fingerprint=fingerprint,
                definitions=None,
                patch_report=None,
                skipped=True,
            )

        report = apply_patches(document, resolved_patches)
        run.advance(PipelineState.PATCHED)

        result = extract_schemas(document)
        run.advance(PipelineState.EXTRACTED)

        return _emit(request, result, report, fingerprint, type_generator)
    except _STAGE_ERRORS as exc:
        raise PipelineExecutionError(str(exc), run.state) from exc


def _registry_for(request: PipelineRequest) -> tuple[SchemaPatch, ...]:
    return build_patch_registry((target.schema, target.field) for target in request.targeted_fields)


def _emit(
    request: PipelineRequest,
    result: ExtractionResult,
    report: PatchReport,
    fingerprint: str,
    type_generator: TypeGenerator | None,
) -> PipelineOutcome:
    root_schema = build_root_schema(result)
    # No artifact is written until the generator has succeeded.
    source_text = generate_source(type_generator, root_schema) if type_generator else None

    artifacts = [(request.output.root_schema_path, render_root_schema(root_schema))]
    if source_text is not None:
        artifacts.append((request.output.source_path, source_text))
    # The stamp goes last so a stale stamp never vouches for new outputs.
    artifacts.append((request.output.source_hash_path, fingerprint + "\n"))
    written = commit_artifacts(artifacts)

    root_schema_path = written[0]
    source_path = written[1] if source_text is not None else None
    return PipelineOutcome(
        root_schema_path=root_schema_path,
        source_path=source_path,
        fingerprint=fingerprint,
        definitions=len(result),
        patch_report=report,
    )


def _fingerprint(document: SpecDocument, patches: Sequence[SchemaPatch]) -> str:
    digest = hashlib.sha256(document.content_hash.encode("utf-8"))
    for patch in patches:
        digest.update(b"\0" + patch.name.encode("utf-8"))
    return digest.hexdigest()


def _is_up_to_date(
    request: PipelineRequest, fingerprint: str, type_generator: TypeGenerator | None
) -> bool:
    outputs = [request.output.root_schema_path]
    if type_generator:
        outputs.append(request.output.source_path)
    if not all(path.exists() for path in outputs):
        return False
    stamp = request.output.source_hash_path
    try:
        return stamp.read_text(encoding="utf-8").strip() == fingerprint
    except FileNotFoundError:
        return False

