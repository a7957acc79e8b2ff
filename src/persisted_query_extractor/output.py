"""Output formatters - manifest JSON and human-readable summary."""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, TextIO

from graphql import print_ast
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .config import OutputFormat
from .engine import ManifestEntry


def manifest_to_dict(
    manifest: Mapping[str, ManifestEntry],
    fmt: OutputFormat = OutputFormat.MANIFEST,
) -> dict:
    """
    Convert a manifest to plain data for JSON output.

    Args:
        manifest: Identity key to manifest entry mapping
        fmt: Output layout

    Returns:
        For MANIFEST, {key: {"id", "transformedQuery"}}; for QUERY_MAP,
        {printed transformed query: id}
    """
    if fmt == OutputFormat.QUERY_MAP:
        return {print_ast(entry.transformed_query): entry.id for entry in manifest.values()}
    return {key: entry.to_dict() for key, entry in manifest.items()}


class ManifestJSONFormatter:
    """Writes a manifest as JSON."""

    def __init__(self, fmt: OutputFormat = OutputFormat.MANIFEST, pretty: bool = True) -> None:
        self.fmt = fmt
        self.pretty = pretty

    def format(
        self,
        manifest: Mapping[str, ManifestEntry],
        output: Optional[TextIO] = None,
    ) -> None:
        """Format and write the manifest (to stdout by default)."""
        output = output or sys.stdout
        data = manifest_to_dict(manifest, self.fmt)

        if self.pretty:
            json_str = json.dumps(data, indent=2)
        else:
            json_str = json.dumps(data)

        output.write(json_str)
        output.write("\n")


def write_manifest(
    manifest: Mapping[str, ManifestEntry],
    output_path: Path,
    fmt: OutputFormat = OutputFormat.MANIFEST,
) -> None:
    """
    Write a manifest to a JSON file, creating parent directories.

    Raises:
        OSError: If the file cannot be written
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        ManifestJSONFormatter(fmt).format(manifest, f)


class SummaryFormatter:
    """Human-readable manifest summary using Rich."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def format(self, manifest: Mapping[str, ManifestEntry]) -> None:
        """Print a table of the extracted operations."""
        if not manifest:
            self.console.print("[yellow]No operations extracted.[/yellow]")
            return

        table = Table(title="Persisted Queries", show_header=True, header_style="bold")
        table.add_column("Id", justify="right")
        table.add_column("Operation")
        table.add_column("Fragments", justify="right")

        for entry in sorted(manifest.values(), key=lambda e: e.id):
            name = entry.operation_name or Text("(anonymous)", style="dim")
            table.add_row(str(entry.id), name, str(entry.fragment_count))

        self.console.print(table)
