"""Writers for generated build artifacts."""

from __future__ import annotations

import importlib
import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from nifi_schema_prep.schema_extraction import RootSchema

_LOGGER = logging.getLogger(__name__)

_STAGED_SUFFIX = ".tmp"
_BACKUP_SUFFIX = ".bak"


class EmissionError(Exception):
    """Raised when generated artifacts cannot be produced or written."""


class TypeGenerator(Protocol):
    """Downstream generator turning a root schema into source text."""

    def generate(self, root_schema: RootSchema) -> str: ...


def load_type_generator(reference: str) -> TypeGenerator:
    """Import a generator from a `package.module:attribute` reference.

    The attribute may be a generator instance, a class or a zero-argument factory.
    """
    module_name, separator, attribute = reference.partition(":")
    if not separator or not module_name or not attribute:
        raise EmissionError(
            f"Type generator reference must look like 'package.module:attribute': {reference}"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise EmissionError(f"Cannot import type generator module '{module_name}': {exc}") from exc
    try:
        target = getattr(module, attribute)
    except AttributeError as exc:
        raise EmissionError(f"Module '{module_name}' has no attribute '{attribute}'.") from exc

    if isinstance(target, type) or (callable(target) and not hasattr(target, "generate")):
        generator = target()
    else:
        generator = target
    if not callable(getattr(generator, "generate", None)):
        raise EmissionError(f"Type generator '{reference}' has no generate() method.")
    return generator


def render_root_schema(root_schema: RootSchema) -> str:
    """Serialize a root schema as indented JSON, preserving definition order."""
    return json.dumps(root_schema.to_json_value(), indent=2, ensure_ascii=False) + "\n"


def write_root_schema(root_schema: RootSchema, output_path: Path | str) -> Path:
    """Write the corrected root schema JSON and return the resolved path."""
    return _write_text(Path(output_path), render_root_schema(root_schema))


def generate_source(generator: TypeGenerator, root_schema: RootSchema) -> str:
    """Run a type generator and normalize its output."""
    text = generator.generate(root_schema)
    if not isinstance(text, str) or not text.strip():
        raise EmissionError("Type generator produced no source text.")
    return text if text.endswith("\n") else text + "\n"


def write_generated_source(text: str, output_path: Path | str) -> Path:
    """Write generated source text and return the resolved path."""
    if not text.strip():
        raise EmissionError("Refusing to write empty generated source.")
    return _write_text(Path(output_path), text)


def commit_artifacts(artifacts: Sequence[tuple[Path, str]]) -> tuple[Path, ...]:
    """Write several artifacts so that either all of them land or none change.

    Every artifact is staged next to its destination first; destinations are only
    replaced once all staging writes succeeded, and replaced files are restored
    if a later replacement fails.
    """
    staged: list[tuple[Path, Path]] = []
    try:
        for destination, text in artifacts:
            staging = _sibling(destination, _STAGED_SUFFIX)
            destination.parent.mkdir(parents=True, exist_ok=True)
            staging.write_text(text, encoding="utf-8")
            staged.append((staging, destination))
    except OSError as exc:
        _discard(staging for staging, _ in staged)
        raise EmissionError(f"Failed to stage build artifacts: {exc}") from exc

    committed: list[tuple[Path, Path | None]] = []
    try:
        for staging, destination in staged:
            backup = None
            if destination.is_file():
                backup = _sibling(destination, _BACKUP_SUFFIX)
                os.replace(destination, backup)
            committed.append((destination, backup))
            os.replace(staging, destination)
    except OSError as exc:
        _roll_back(committed)
        _discard(staging for staging, _ in staged)
        raise EmissionError(f"Failed to write build artifacts: {exc}") from exc

    _discard(backup for _, backup in committed if backup is not None)
    for destination, _ in committed:
        _LOGGER.info("Wrote %s", destination)
    return tuple(destination.resolve() for _, destination in staged)


def _roll_back(committed: Sequence[tuple[Path, Path | None]]) -> None:
    for destination, backup in reversed(committed):
        if backup is not None and backup.exists():
            os.replace(backup, destination)
        elif backup is None and destination.is_file():
            destination.unlink()


def _discard(paths) -> None:
    for path in paths:
        if path.is_file():
            path.unlink()


def _sibling(destination: Path, suffix: str) -> Path:
    return destination.with_name(f".{destination.name}{suffix}")


def _write_text(destination: Path, text: str) -> Path:
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise EmissionError(f"Failed to write {destination}: {exc}") from exc
    _LOGGER.info("Wrote %s", destination)
    return destination.resolve()
