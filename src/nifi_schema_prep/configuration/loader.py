"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_ROOT_SCHEMA_FILENAME,
    DEFAULT_SOURCE_FILENAME,
    Configuration,
    OutputSettings,
    SpecSettings,
    TargetedFieldConfig,
)


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Failed to read configuration file {path}: {exc}") from exc

    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.parent
    return Configuration(
        path=path,
        spec=_parse_spec_section(parsed.get("spec"), base_path),
        output=_parse_output_section(parsed.get("output"), base_path),
        targeted_fields=_parse_patches_section(parsed.get("patches")),
    )


def _parse_spec_section(value: Any, base_path: Path) -> SpecSettings:
    section = _require_mapping(value, "spec")
    raw_path = _require_non_empty_string(section.get("path"), "spec.path")
    return SpecSettings(path=_resolve_path(base_path, raw_path))


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _require_mapping(value, "output")
    directory = _require_non_empty_string(section.get("directory"), "output.directory")
    root_schema_filename = _require_filename(
        section.get("root_schema_filename", DEFAULT_ROOT_SCHEMA_FILENAME),
        "output.root_schema_filename",
    )
    source_filename = _require_filename(
        section.get("source_filename", DEFAULT_SOURCE_FILENAME), "output.source_filename"
    )
    if root_schema_filename == source_filename:
        raise ConfigurationError(
            "output.root_schema_filename and output.source_filename must differ."
        )
    return OutputSettings(
        directory=_resolve_path(base_path, directory),
        root_schema_filename=root_schema_filename,
        source_filename=source_filename,
        generator=_parse_generator_reference(section.get("generator")),
    )


def _parse_generator_reference(value: Any) -> str | None:
    if value is None:
        return None
    reference = _require_non_empty_string(value, "output.generator")
    module_name, separator, attribute = reference.partition(":")
    if not separator or not module_name or not attribute:
        raise ConfigurationError("output.generator must look like 'package.module:attribute'.")
    return reference


def _parse_patches_section(value: Any) -> tuple[TargetedFieldConfig, ...]:
    if value is None:
        return ()
    section = _require_mapping(value, "patches")
    targeted = section.get("targeted")
    if targeted is None:
        return ()
    if isinstance(targeted, str) or not isinstance(targeted, Sequence):
        raise ConfigurationError("patches.targeted must be a list of mappings.")

    fields: list[TargetedFieldConfig] = []
    for index, entry in enumerate(targeted):
        label = f"patches.targeted[{index}]"
        if not isinstance(entry, Mapping):
            raise ConfigurationError(f"{label} must be a mapping with schema and field.")
        fields.append(
            TargetedFieldConfig(
                schema=_require_non_empty_string(entry.get("schema"), f"{label}.schema"),
                field=_require_non_empty_string(entry.get("field"), f"{label}.field"),
            )
        )
    return tuple(fields)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_filename(value: Any, field_name: str) -> str:
    filename = _require_non_empty_string(value, field_name)
    if Path(filename).name != filename:
        raise ConfigurationError(f"{field_name} must be a plain file name.")
    return filename
