"""Command line interface for rankedsearch."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from rankedsearch.config import AppConfig
from rankedsearch.index.highlight import Highlighter, HighlightError
from rankedsearch.index.indexer import Indexer
from rankedsearch.index.search import RankedSearcher
from rankedsearch.models import HighlightedLine, SearchResult
from rankedsearch.utils.text import iter_terms


console = Console()
app = typer.Typer(help="rankedsearch - TF-IDF ranked full-text search over a directory")

MATCH_STYLE = "bold bright_blue"
LINE_NUMBER_STYLE = "bright_yellow"


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _render_line(line: HighlightedLine) -> Text:
    body = Text(line.text)
    for start, end in line.spans:
        body.stylize(MATCH_STYLE, start, end)
    rendered = Text(str(line.number), style=LINE_NUMBER_STYLE)
    rendered.append(":")
    rendered.append_text(body)
    return rendered


def _stats_table(result: SearchResult) -> Table:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Term")
    table.add_column("Frequency", justify="right")
    table.add_column("Doc frequency", justify="right")
    table.add_column("Rank", justify="right")
    for stat in result.stats:
        table.add_row(
            stat.term,
            str(stat.term_frequency),
            str(stat.document_frequency),
            f"{stat.rank:.4f}",
        )
    table.caption = f"rank {result.rank:.4f} over {result.document_count} documents"
    return table


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    root: Optional[Path] = typer.Argument(None, help="Directory to index (default: current directory)"),
    workers: Optional[int] = typer.Option(None, "--workers", "-j", min=1, help="Indexing threads"),
    stem: bool = typer.Option(AppConfig().stem, "--stem/--no-stem", help="Stem indexed and query terms"),
    whole_word: bool = typer.Option(False, "--whole-word", "-w", help="Only highlight whole words"),
    hidden: bool = typer.Option(False, "--hidden", help="Index hidden files and directories"),
    top_k: Optional[int] = typer.Option(None, "--top-k", "-k", min=1, help="Number of results to display"),
    stats: bool = typer.Option(False, "--stats", help="Show per-term ranking statistics"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Index ROOT and print the documents matching QUERY, most relevant first."""
    _setup_logging(verbose)
    config = AppConfig(
        workers=workers,
        stem=stem,
        whole_word=whole_word,
        include_hidden=hidden,
        top_k=top_k,
    )
    resolved_root = config.resolve_root(root)
    if not resolved_root.is_dir():
        raise typer.BadParameter(f"Not a directory: {resolved_root}")

    indexer = Indexer(
        workers=config.workers,
        stem=config.stem,
        include_hidden=config.include_hidden,
        skip_dirs=config.skip_dirs,
        lock_timeout=config.lock_timeout,
    )
    index = indexer.index(resolved_root)

    searcher = RankedSearcher(index)
    terms = searcher.query_terms(query)
    results = searcher.search(terms, limit=config.top_k)
    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    # Stems are not always substrings of the words they came from.
    highlighter = Highlighter(terms | set(iter_terms(query, stem=False)), whole_word=config.whole_word)
    for result in results:
        console.print()
        console.print(Text(str(result.path), style="bold"), soft_wrap=True)
        if stats:
            console.print(_stats_table(result))
        try:
            lines = highlighter.highlight(result.document)
        except HighlightError as exc:
            console.print(Text(f"Could not highlight {result.path}: {exc}", style="yellow"))
            continue
        for line in lines:
            console.print(_render_line(line), soft_wrap=True)
