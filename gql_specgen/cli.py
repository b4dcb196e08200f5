"""Command-line interface for gql-specgen."""

import asyncio
import json
import logging
from pathlib import Path

import click

from .core.config import CodegenConfig, load_config
from .core.errors import CodegenError, GenerationError
from .core.fetch import SchemaFetcher
from .core.generator import CodeGenerator
from .core.hooks import AddHeaderHook, HookRunner
from .core.introspection import load_schema, schema_from_introspection
from .core.schema import Schema
from .logger import configure_logging

logger = logging.getLogger(__name__)


def parse_headers(values: tuple[str, ...]) -> dict[str, str]:
    """Turn repeated ``--header "Name: value"`` options into a dict."""
    headers = {}
    for value in values:
        name, sep, content = value.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected 'Name: value', got {value!r}", param_hint="--header")
        headers[name.strip()] = content.strip()
    return headers


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


async def fetch_introspection(url: str, headers: dict[str, str]) -> dict:
    async with SchemaFetcher(url, headers=headers) as fetcher:
        return await fetcher.fetch()


def read_schema(source: str, headers: dict[str, str]) -> Schema:
    """Load a schema from a file path or a GraphQL endpoint URL."""
    if is_url(source):
        return schema_from_introspection(asyncio.run(fetch_introspection(source, headers)))
    if not Path(source).exists():
        raise click.BadParameter(f"Path '{source}' does not exist.", param_hint="--schema")
    return load_schema(source)


@click.group()
@click.version_option(package_name="gql-specgen")
def main():
    """GraphQL request generator for Python.

    Generate typed request classes and minimal fragments from an
    introspected GraphQL schema.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    help="Introspection JSON file, SDL file (.graphql, .graphqls, .gql) or endpoint URL.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output file for the generated module (e.g., requests.py).",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON config with scalar mappings, selections and a header.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="HTTP header for URL schemas, as 'Name: value'. Repeatable.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    output: str,
    config: str | None,
    template_dir: str | None,
    headers: tuple[str, ...],
    verbose: bool,
):
    """Generate a Python module of request classes from a GraphQL schema.

    Examples:

        gql-specgen generate --schema ./schema.json --output ./client/requests.py

        gql-specgen generate -s ./schema.graphql -o requests.py -c codegen.json

        gql-specgen generate -s https://api.example.com/graphql -H "Authorization: Bearer $TOKEN" -o requests.py
    """
    configure_logging(verbose)
    output_path = Path(output).resolve()

    try:
        click.echo("Loading schema...")
        loaded = read_schema(schema, parse_headers(headers))
        codegen_config = load_config(config) if config else CodegenConfig()

        if verbose:
            click.echo(f"  Objects: {len(loaded.objects)}")
            click.echo(f"  Enums: {len(loaded.enums)}")
            click.echo(f"  Inputs: {len(loaded.input_objects)}")
            for operation in loaded.operations:
                click.echo(f"  {operation.kind.value.capitalize()} fields: {len(operation.fields)}")

        hooks = HookRunner()
        if codegen_config.header:
            hooks.add_post_hook(AddHeaderHook(codegen_config.header))

        click.echo("Generating code...")
        generator = CodeGenerator(loaded, codegen_config, hooks=hooks, template_dir=template_dir)
        generator.generate(output_path)
    except GenerationError as e:
        for error in e.errors:
            logger.debug("%s: %s", type(error).__name__, error)
        raise click.ClickException(str(e)) from e
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Done! Generated {output_path}")


@main.command()
@click.option(
    "--url",
    "-u",
    required=True,
    help="GraphQL endpoint URL.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output file for the introspection result (JSON).",
)
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    help="HTTP header as 'Name: value'. Repeatable.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def fetch(url: str, output: str, headers: tuple[str, ...], verbose: bool):
    """Save a GraphQL endpoint's introspection result as JSON.

    Examples:

        gql-specgen fetch --url https://api.example.com/graphql --output schema.json

        gql-specgen fetch -u http://localhost:4000/graphql -H "X-Api-Key: secret" -o schema.json
    """
    configure_logging(verbose)
    output_path = Path(output).resolve()

    try:
        click.echo(f"Fetching schema from {url}...")
        data = asyncio.run(fetch_introspection(url, parse_headers(headers)))
        schema = schema_from_introspection(data)
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"  Types: {len(schema.types)}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps({"data": data}, indent=2))
    click.echo(f"Done! Wrote {output_path}")


if __name__ == "__main__":
    main()
