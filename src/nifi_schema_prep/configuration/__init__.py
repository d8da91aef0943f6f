"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration
from .runtime_settings import (
    DEFAULT_SPEC_PATH,
    Configuration,
    OutputSettings,
    SpecSettings,
    TargetedFieldConfig,
)

__all__ = [
    "Configuration",
    "OutputSettings",
    "SpecSettings",
    "TargetedFieldConfig",
    "ConfigurationError",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "DEFAULT_SPEC_PATH",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
