"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from nifi_schema_prep.code_emission import EmissionError, render_root_schema, write_root_schema
from nifi_schema_prep.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from nifi_schema_prep.document_loading import (
    MissingSectionError,
    ParseError,
    read_spec_document,
)
from nifi_schema_prep.pipeline_execution import (
    PipelineExecutionError,
    prepare_from_configuration,
)
from nifi_schema_prep.schema_extraction import (
    SchemaCastError,
    build_root_schema,
    extract_schemas,
)
from nifi_schema_prep.schema_patching import (
    PathResolutionError,
    apply_patches,
    default_patch_registry,
)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="nifi-schema-prep")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log every rewrite.")
def cli(verbose: bool) -> None:
    """Prepare the NiFi REST API description for type generation."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=_LOG_FORMAT)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML pipeline configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML pipeline configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="prepare")
@click.option(
    "--config",
    "config_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON pipeline configuration file",
)
@click.option(
    "--force",
    is_flag=True,
    default=False,
    help="Re-run even when the specification has not changed.",
)
@click.option(
    "--generator",
    "generator_reference",
    required=False,
    type=str,
    help="Type generator as package.module:attribute; overrides output.generator",
)
def prepare(config_path: str, force: bool, generator_reference: str | None) -> None:
    """Patch and extract the configured specification into build artifacts."""
    try:
        outcome = prepare_from_configuration(
            config_path, force=force, generator_reference=generator_reference
        )
    except PipelineExecutionError as exc:
        raise CliError(str(exc)) from exc
    if outcome.skipped:
        click.echo(f"up to date: {outcome.root_schema_path}")
        return
    click.echo(str(outcome.root_schema_path))
    if outcome.source_path:
        click.echo(str(outcome.source_path))


@cli.command(name="extract")
@click.option(
    "--spec",
    "spec_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the OpenAPI JSON specification",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional file for the corrected root schema; printed to stdout otherwise",
)
def extract(spec_path: str, output_path: str | None) -> None:
    """Apply the built-in patches and emit the corrected root schema."""
    try:
        document = read_spec_document(spec_path)
        apply_patches(document, default_patch_registry())
        root_schema = build_root_schema(extract_schemas(document))
        if output_path:
            click.echo(str(write_root_schema(root_schema, Path(output_path))))
        else:
            click.echo(render_root_schema(root_schema), nl=False)
    except (
        ParseError,
        MissingSectionError,
        PathResolutionError,
        SchemaCastError,
        EmissionError,
    ) as exc:
        raise CliError(str(exc)) from exc


@cli.command(name="list-patches")
def list_patches() -> None:
    """List the built-in schema patches in application order."""
    for patch in default_patch_registry():
        click.echo(patch.name)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
