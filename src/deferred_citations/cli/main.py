"""CLI for deferred-citations: parse / markers commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from deferred_citations.core.config import ObservabilityConfig, ParserSettings
from deferred_citations.exceptions import InvalidInputError
from deferred_citations.hooks.logging_config import setup_logging
from deferred_citations.models import Citation
from deferred_citations.parsing.markers import get_citation_marker_ids, replace_deferred_markers
from deferred_citations.parsing.normalize import deferred_citation_to_citation
from deferred_citations.parsing.parser import DeferredCitationParser

app = typer.Typer(name="deferred-citations", help="Recover deferred citation data from LLM responses")
console = Console()


def _configure_logging(verbose: bool) -> None:
    config = ObservabilityConfig()
    if verbose:
        config = ObservabilityConfig(log_level="DEBUG", json_logs=config.json_logs)
    setup_logging(config)


def _read_response(source: Path) -> str:
    """Read a response from a file, or stdin when ``source`` is ``-``."""
    if str(source) == "-":
        return sys.stdin.read()
    try:
        return source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidInputError(f"Cannot read {source}: {exc}") from exc


def _build_parser(start_delimiter: Optional[str], end_delimiter: Optional[str]) -> DeferredCitationParser:
    return DeferredCitationParser(
        ParserSettings(),
        start_delimiter=start_delimiter,
        end_delimiter=end_delimiter,
    )


def _citation_table(citations: list[Citation]) -> Table:
    table = Table(title="Citations")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Attachment")
    table.add_column("Page", justify="right")
    table.add_column("Lines")
    table.add_column("Anchor", style="green")
    table.add_column("Full phrase", max_width=60)

    for citation in citations:
        table.add_row(
            str(citation.citation_number) if citation.citation_number is not None else "-",
            citation.attachment_id or "-",
            str(citation.page_number) if citation.page_number is not None else "-",
            ",".join(str(line_id) for line_id in citation.line_ids or []) or "-",
            citation.anchor_text or "",
            citation.full_phrase or "",
        )
    return table


@app.command()
def parse(
    source: Path = typer.Argument(..., help="File holding the LLM response, or - for stdin"),
    as_json: bool = typer.Option(False, "--json", help="Print the parse result as JSON"),
    start_delimiter: Optional[str] = typer.Option(None, "--start-delimiter", help="Citation block start marker"),
    end_delimiter: Optional[str] = typer.Option(None, "--end-delimiter", help="Citation block end marker"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Split a response into visible text and normalized citations."""
    _configure_logging(verbose)

    try:
        response = _read_response(source)
    except InvalidInputError as exc:
        console.print(str(exc), style="red", markup=False)
        raise typer.Exit(code=2)

    result = _build_parser(start_delimiter, end_delimiter).parse(response)

    if as_json:
        typer.echo(result.model_dump_json(by_alias=True, exclude_none=True, indent=2))
    elif result.success:
        console.print("[bold]Visible text:[/bold]")
        console.print(result.visible_text, markup=False)
        citations = [deferred_citation_to_citation(record) for record in result.citations]
        if citations:
            console.print(_citation_table(citations))
        else:
            console.print("[yellow]No citation data found[/yellow]")
        if result.repairs:
            console.print(f"[dim]Repairs: {', '.join(result.repairs)}[/dim]")
    else:
        console.print(result.error, style="red", markup=False)

    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def markers(
    source: Path = typer.Argument(..., help="File holding the LLM response, or - for stdin"),
    strip: bool = typer.Option(False, "--strip", help="Print the visible text with markers removed"),
    start_delimiter: Optional[str] = typer.Option(None, "--start-delimiter"),
    end_delimiter: Optional[str] = typer.Option(None, "--end-delimiter"),
) -> None:
    """List [N] markers in the visible text, or strip them."""
    try:
        response = _read_response(source)
    except InvalidInputError as exc:
        console.print(str(exc), style="red", markup=False)
        raise typer.Exit(code=2)

    visible_text = _build_parser(start_delimiter, end_delimiter).extract_visible_text(response)

    if strip:
        typer.echo(replace_deferred_markers(visible_text))
    else:
        typer.echo(" ".join(str(marker_id) for marker_id in get_citation_marker_ids(visible_text)))


if __name__ == "__main__":
    app()
