"""CLI entry point for the persisted query extractor."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import ExtractorConfig, KeyFormat, OutputFormat
from .manifest_builder import ManifestBuilder, SourceParseError
from .output import ManifestJSONFormatter, SummaryFormatter, write_manifest
from .transformers import QueryTransformerError

app = typer.Typer(
    name="persisted-query-extractor",
    help="Extract GraphQL queries into a persisted query manifest.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from . import __version__
        console.print(f"persisted-query-extractor v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version", "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Persisted Query Extractor - build persisted query manifests from GraphQL sources."""
    pass


@app.command()
def extract(
    paths: Annotated[
        list[Path],
        typer.Argument(
            help="Files or directories to extract GraphQL queries from.",
            exists=True,
        ),
    ],
    output: Annotated[
        Path,
        typer.Option(
            "--output", "-o",
            help="Output file for the manifest ('-' writes to stdout).",
        ),
    ] = Path("extracted_queries.json"),
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format", "-f",
            help="Output format: 'manifest' or 'query-map'.",
        ),
    ] = OutputFormat.MANIFEST,
    key_format: Annotated[
        KeyFormat,
        typer.Option(
            "--key-format",
            help="Manifest key format: 'query' (printed query) or 'sha256'.",
        ),
    ] = KeyFormat.QUERY,
    add_typename: Annotated[
        bool,
        typer.Option(
            "--add-typename",
            help="Add __typename to every non-root selection set before storing.",
        ),
    ] = False,
    js: Annotated[
        bool,
        typer.Option(
            "--js",
            help="Also extract tagged template literals from .js/.jsx/.ts/.tsx files.",
        ),
    ] = False,
    literal_tag: Annotated[
        str,
        typer.Option(
            "--literal-tag",
            help="Template literal tag marking GraphQL in JavaScript files.",
        ),
    ] = "gql",
    extensions: Annotated[
        Optional[list[str]],
        typer.Option(
            "--ext", "-e",
            help="Filter files by extension (can be used multiple times, e.g., --ext .graphql --ext .js).",
        ),
    ] = None,
    include_mutations: Annotated[
        bool,
        typer.Option(
            "--include-mutations",
            help="Also extract mutations and subscriptions.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging."),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only show warnings and errors."),
    ] = False,
) -> None:
    """
    Extract GraphQL queries into a persisted query manifest.

    Every distinct query gets a stable integer id. Each stored query is
    minimized to the fragments it actually uses.

    Examples:

        # Extract all .graphql/.gql files under a directory
        persisted-query-extractor extract src/graphql -o extracted_queries.json

        # Include gql`...` literals from JavaScript and add __typename fields
        persisted-query-extractor extract src --js --add-typename
    """
    configure_logging(verbose, quiet)

    config = ExtractorConfig(
        input_paths=paths,
        output_path=None if str(output) == "-" else output,
        output_format=output_format,
        key_format=key_format,
        add_typename=add_typename,
        extract_from_js=js,
        literal_tag=literal_tag,
        extensions=extensions,
        operation_types=["query", "mutation", "subscription"] if include_mutations else ["query"],
    )

    builder = ManifestBuilder(config.create_engine(), config.create_collector())

    try:
        manifest = builder.build(config.input_paths, config.extensions)
    except SourceParseError as e:
        err_console.print(f"[red]Syntax error: {e}[/red]")
        raise typer.Exit(1)
    except QueryTransformerError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if config.output_path is None:
        ManifestJSONFormatter(config.output_format).format(manifest)
        raise typer.Exit(0)

    try:
        write_manifest(manifest, config.output_path, config.output_format)
    except OSError as e:
        err_console.print(f"[red]Error writing {config.output_path}: {e}[/red]")
        raise typer.Exit(1)

    if not quiet:
        SummaryFormatter(console).format(manifest)
        console.print(f"[green]Wrote {len(manifest)} queries to {config.output_path}[/green]")


if __name__ == "__main__":
    app()
