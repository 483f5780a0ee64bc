"""Search and query CLI commands."""

from pathlib import Path

import click
import msgspec
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from bibquery.core.models import Entry, SearchFlag
from bibquery.search import (
    AndQuery,
    DatabaseSearcher,
    ParsedQuery,
    QueryParser,
    SearchQuery,
    TermQuery,
)
from bibquery.storage import BibtexImporter


def load_entries(console: Console, paths: tuple[Path, ...]) -> list[Entry]:
    """Load entries from BibTeX files, reporting import problems."""
    entries, errors = BibtexImporter().import_batch(list(paths))
    for error in errors:
        console.print(f"[yellow]Warning:[/yellow] {escape(error)}")
    return entries


@click.command()
@click.argument("query")
@click.argument(
    "bibfiles",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--case-sensitive/--ignore-case",
    "-c/-i",
    default=None,
    help="Match case exactly",
)
@click.option(
    "--regex/--plain",
    "-r/-p",
    default=None,
    help="Treat search terms as regular expressions",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "keys", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def search(
    ctx: click.Context,
    query: str,
    bibfiles: tuple[Path, ...],
    case_sensitive: bool | None,
    regex: bool | None,
    output_format: str,
) -> None:
    """Search bibliography entries.

    Supports the query syntax:
    - Free text: quantum
    - Field search: author=Knuth
    - Conjunction: author=Knuth and title=TeX
    """
    console = ctx.obj.console
    defaults = ctx.obj.settings.search

    flags = SearchFlag.from_options(
        case_sensitive=defaults.case_sensitive
        if case_sensitive is None
        else case_sensitive,
        regex=defaults.regex if regex is None else regex,
    )
    search_query = SearchQuery(query, flags)

    entries = load_entries(console, bibfiles)
    matches = DatabaseSearcher(search_query, entries).get_matches()

    if search_query.error is not None:
        warning = escape(str(search_query.error))
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    _display_results(console, search_query, matches, output_format)


@click.command()
@click.argument("query")
@click.pass_context
def parse_command(ctx: click.Context, query: str) -> None:
    """Show how a query is parsed."""
    console = ctx.obj.console
    parser = QueryParser()
    parsed = parser.parse(query)

    console.print(f"[bold]Query:[/bold] {escape(parsed.to_string())}")
    tree = Tree(_node_label(parsed))
    _build_tree(tree, parsed)
    console.print(tree)

    for warning in parser.validate_query(parsed):
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}")


def _node_label(query: ParsedQuery) -> str:
    if isinstance(query, TermQuery):
        value = escape(repr(query.value))
        if query.field is None:
            return f"[cyan]any field[/cyan] contains [green]{value}[/green]"
        return f"[cyan]{escape(query.field)}[/cyan] contains [green]{value}[/green]"
    return "[bold]and[/bold]"


def _build_tree(tree: Tree, query: ParsedQuery) -> None:
    if isinstance(query, AndQuery):
        for child in (query.left, query.right):
            _build_tree(tree.add(_node_label(child)), child)


def _display_results(
    console: Console,
    search_query: SearchQuery,
    matches: list[Entry],
    output_format: str,
) -> None:
    """Display search results in the requested format."""
    if output_format == "keys":
        for entry in matches:
            console.print(entry.key or "", markup=False, highlight=False)
        return

    if output_format == "json":
        data = [entry.to_dict() for entry in matches]
        console.print_json(msgspec.json.encode(data).decode())
        return

    if not matches:
        console.print(
            f"[yellow]No results found for '{escape(search_query.query)}'[/yellow]"
        )
        return

    table = Table(title=f"Results for '{escape(search_query.query)}'")
    table.add_column("Key", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Author")
    table.add_column("Title")
    table.add_column("Year", justify="right")

    for entry in matches:
        table.add_row(
            escape(entry.key or ""),
            escape(entry.type),
            escape(entry.field_value("author") or ""),
            escape(entry.field_value("title") or ""),
            escape(entry.field_value("year") or ""),
        )

    console.print(table)
    summary = escape(search_query.describe())
    console.print(f"\n{len(matches)} matching entries ({summary})")
