"""solr-query CLI.

Reads JSON from a file (or stdin with ``-``) and prints the rendered query:

    solr-query render query.json
    echo '{"eq": ["a", "b"]}' | solr-query simple - --kind string
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

import typer

from solr_query.config import settings
from solr_query.contracts.errors import UnsupportedPrimitiveKind
from solr_query.contracts.validation_output import ValidationMessage
from solr_query.serializer import render, to_solr_query
from solr_query.simple import simple_term_value
from solr_query.util.logging import configure_logging

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    """Render Lucene/Solr queries from JSON query trees."""
    configure_logging("DEBUG" if verbose else settings.log_level)


def _load_json(source: str) -> Any:
    if source == "-":
        text = sys.stdin.read()
    else:
        path = Path(source)
        if not path.exists():
            typer.echo(f"Input file not found: {path}")
            raise typer.Exit(1)
        text = path.read_text()
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        typer.echo(f"Invalid JSON: {e}")
        raise typer.Exit(1)


def _print_errors(errors: list[ValidationMessage]) -> None:
    typer.echo("\n".join(str(e) for e in errors))


@app.command("render")
def render_cmd(
    source: str = typer.Argument("-", help="JSON file with a query element, or '-' for stdin"),
    max_depth: Optional[int] = typer.Option(
        None, "--max-depth", help="Nesting bound (default: SOLR_QUERY_MAX_DEPTH)"
    ),
) -> None:
    """Validate a query element and print its query string."""
    result = to_solr_query(_load_json(source), max_depth=max_depth)
    if not result.ok:
        _print_errors(result.errors)
        raise typer.Exit(1)
    typer.echo(result.data)


@app.command("simple")
def simple_cmd(
    source: str = typer.Argument("-", help="JSON file with a flat filter, or '-' for stdin"),
    kind: str = typer.Option(..., "--kind", "-k", help="Primitive kind: string, number or date"),
) -> None:
    """Adapt a flat comparison filter and print its query string."""
    data = _load_json(source)
    try:
        result = simple_term_value(data, kind)
    except UnsupportedPrimitiveKind as e:
        typer.echo(str(e))
        raise typer.Exit(2)
    if not result.ok:
        _print_errors(result.errors)
        raise typer.Exit(1)
    typer.echo(render(result.data))
