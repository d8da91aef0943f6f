"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

from .runtime_settings import (
    DEFAULT_ROOT_SCHEMA_FILENAME,
    DEFAULT_SOURCE_FILENAME,
    DEFAULT_SPEC_PATH,
)

DEFAULT_CONFIG_FILENAME = "nifi-schema-prep.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = f"""# Pipeline configuration template for nifi-schema-prep.
# Relative paths are resolved against the directory of this file.

spec:
  # NiFi REST API description (OpenAPI JSON).
  path: "{DEFAULT_SPEC_PATH}"

output:
  # Build artifacts directory; created when missing.
  directory: "<REQUIRED>"
  root_schema_filename: "{DEFAULT_ROOT_SCHEMA_FILENAME}"
  source_filename: "{DEFAULT_SOURCE_FILENAME}"
  # Type generator whose output goes to source_filename, as "package.module:attribute".
  # Without one only the corrected root schema is written.
  # generator: "<OPTIONAL>"

patches:
  # Extra map fields whose values may be null, on top of the built-in patches.
  # Each entry must exist in components.schemas or the run fails.
  targeted: []
  # targeted:
  #   - schema: "ControllerServiceDTO"
  #     field: "properties"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML pipeline configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder pipeline configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
