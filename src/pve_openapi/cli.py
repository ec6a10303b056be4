"""CLI entry point for pve-openapi."""

import logging
from pathlib import Path

import click

from pve_openapi.config import DEFAULT_OUTPUT_NAME, DEFAULT_VARIABLE, DocumentSettings
from pve_openapi.converter.document import build_document, count_operations, write_document
from pve_openapi.converter.walker import collect_paths
from pve_openapi.parser.apidata import ApiDataError, load_apidata
from pve_openapi.parser.base import SourceNode

_DEFAULTS = DocumentSettings()


def _load_source(source_path: Path, variable: str) -> list[SourceNode]:
    """Load the schema tree, turning decode failures into a CLI error."""
    try:
        return load_apidata(source_path, variable)
    except ApiDataError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log every converted node.")
def main(verbose: bool):
    """pve-openapi: convert the Proxmox VE API schema to OpenAPI 3.0."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


@main.command()
@click.argument("source_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help=f"Output file (.json or .yaml). Defaults to {DEFAULT_OUTPUT_NAME} next to the source.")
@click.option("--variable", default=DEFAULT_VARIABLE, show_default=True, help="Variable the schema tree is assigned to.")
@click.option("--title", default=_DEFAULTS.title, show_default=True, help="Document title.")
@click.option("--api-version", default=_DEFAULTS.version, show_default=True, help="Document version.")
@click.option("--host", default=_DEFAULTS.host, show_default=True, help="Default value of the server host variable.")
def convert(source_path: Path, output: Path | None, variable: str, title: str, api_version: str, host: str):
    """Convert an apidata.js file into an OpenAPI document."""
    click.echo("Converting Proxmox API data to OpenAPI 3.0 format...")
    nodes = _load_source(source_path, variable)

    settings = DocumentSettings(title=title, version=api_version, host=host)
    document = build_document(nodes, settings)

    output = output or source_path.parent / DEFAULT_OUTPUT_NAME
    write_document(document, output)

    click.echo("Conversion complete!")
    click.echo(f"Total paths: {len(document['paths'])}")
    click.echo(f"Total endpoints: {count_operations(document)}")
    click.echo(f"Output saved to: {output}")
    click.echo("\nYou can import this file into:")
    click.echo("- Swagger UI/Editor (https://editor.swagger.io)")
    click.echo(f"- Postman (Import > File > {output.name})")


@main.command()
@click.argument("source_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--variable", default=DEFAULT_VARIABLE, show_default=True, help="Variable the schema tree is assigned to.")
def paths(source_path: Path, variable: str):
    """List derived paths and their methods without writing anything."""
    collected = collect_paths(_load_source(source_path, variable))
    for path in sorted(collected):
        methods = ",".join(m.upper() for m in collected[path])
        click.echo(f"{methods:<20} {path}")
    click.echo(f"{len(collected)} paths")
