"""Configuration loader tests."""

from __future__ import annotations

import json
import re
from pathlib import Path

import pytest
from nifi_schema_prep.configuration.loader import ConfigurationError, load_configuration
from nifi_schema_prep.configuration.runtime_settings import TargetedFieldConfig


def _write_file(path: Path, contents: str) -> Path:
    path.write_text(contents, encoding="utf-8")
    return path


def test_loads_yaml_configuration_with_defaults(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        """
spec:
  path: spec/nifi/openapi/2.6.0/swagger.json
output:
  directory: build/generated
""",
    )

    configuration = load_configuration(config_path)

    assert configuration.path == config_path
    assert configuration.spec.path == (tmp_path / "spec/nifi/openapi/2.6.0/swagger.json").resolve()
    assert configuration.output.directory == (tmp_path / "build/generated").resolve()
    assert configuration.output.root_schema_filename == "root_schema.json"
    assert configuration.output.source_filename == "generated_types.py"
    assert configuration.output.root_schema_path.name == "root_schema.json"
    assert configuration.targeted_fields == ()
    assert configuration.output.generator is None


def test_loads_json_configuration_with_targeted_fields(tmp_path: Path) -> None:
    absolute_spec = tmp_path / "elsewhere" / "swagger.json"
    config_path = _write_file(
        tmp_path / "config.json",
        json.dumps(
            {
                "spec": {"path": str(absolute_spec)},
                "output": {
                    "directory": "out",
                    "root_schema_filename": "nifi.schema.json",
                    "source_filename": "nifi_types.py",
                },
                "patches": {
                    "targeted": [
                        {"schema": "ControllerServiceDTO", "field": "properties"},
                        {"schema": " ReportingTaskDTO ", "field": "properties"},
                    ]
                },
            }
        ),
    )

    configuration = load_configuration(config_path)

    assert configuration.spec.path == absolute_spec
    assert configuration.output.source_path == (tmp_path / "out" / "nifi_types.py").resolve()
    assert configuration.targeted_fields == (
        TargetedFieldConfig(schema="ControllerServiceDTO", field="properties"),
        TargetedFieldConfig(schema="ReportingTaskDTO", field="properties"),
    )


@pytest.mark.parametrize(
    ("contents", "message"),
    [
        ("- a\n- b\n", "root must be a mapping"),
        ("output:\n  directory: out\n", "'spec' is required"),
        ("spec:\n  path: ''\noutput:\n  directory: out\n", "spec.path must not be empty"),
        ("spec:\n  path: s.json\n", "'output' is required"),
        ("spec:\n  path: s.json\noutput:\n  directory: 3\n", "output.directory must be a string"),
        (
            "spec:\n  path: s.json\noutput:\n  directory: out\n  source_filename: a/b.py\n",
            "plain file name",
        ),
        (
            "spec:\n  path: s.json\noutput:\n  directory: out\n"
            "  root_schema_filename: same\n  source_filename: same\n",
            "must differ",
        ),
        (
            "spec:\n  path: s.json\noutput:\n  directory: out\npatches:\n  targeted: Foo.bar\n",
            "patches.targeted must be a list",
        ),
        (
            "spec:\n  path: s.json\noutput:\n  directory: out\npatches:\n  targeted:\n"
            "    - schema: Foo\n",
            "patches.targeted[0].field must be a string",
        ),
        ("spec: [\n", "Failed to parse configuration file"),
    ],
)
def test_invalid_configuration_raises(tmp_path: Path, contents: str, message: str) -> None:
    config_path = _write_file(tmp_path / "config.yaml", contents)

    with pytest.raises(ConfigurationError, match=re.escape(message)):
        load_configuration(config_path)


def test_missing_configuration_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_configuration(tmp_path / "absent.yaml")


def test_directory_configuration_path_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Failed to read configuration file"):
        load_configuration(tmp_path)


def test_non_utf8_configuration_raises(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_bytes(b"spec:\n  path: \xff\xfe.json\n")

    with pytest.raises(ConfigurationError, match="Failed to read configuration file"):
        load_configuration(config_path)


def test_generator_reference_is_read_from_output_section(tmp_path: Path) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        "spec:\n  path: s.json\noutput:\n  directory: out\n"
        "  generator: my_codegen.nifi:Generator\n",
    )

    configuration = load_configuration(config_path)

    assert configuration.output.generator == "my_codegen.nifi:Generator"


@pytest.mark.parametrize("reference", ["my_codegen.nifi", ":Generator", "my_codegen:", "  "])
def test_malformed_generator_reference_raises(tmp_path: Path, reference: str) -> None:
    config_path = _write_file(
        tmp_path / "config.yaml",
        f"spec:\n  path: s.json\noutput:\n  directory: out\n  generator: '{reference}'\n",
    )

    with pytest.raises(ConfigurationError, match="output.generator"):
        load_configuration(config_path)
