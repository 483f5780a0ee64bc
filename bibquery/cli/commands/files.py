"""CLI command for finding the files of an entry."""

from pathlib import Path

import click
from rich.markup import escape

from bibquery.search.locate import CitationKeyBasedFileFinder, FileScanError


@click.command()
@click.argument("key")
@click.option(
    "--dir",
    "-d",
    "directories",
    multiple=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to search (repeatable, default: configured directories)",
)
@click.option(
    "--ext",
    "-e",
    "extensions",
    multiple=True,
    help="Accepted extension without dot (repeatable, default: configured)",
)
@click.option(
    "--exact/--prefix",
    default=None,
    help="Only accept files named exactly like the key",
)
@click.pass_context
def files(
    ctx: click.Context,
    key: str,
    directories: tuple[Path, ...],
    extensions: tuple[str, ...],
    exact: bool | None,
) -> None:
    """Find files belonging to a citation key."""
    console = ctx.obj.console
    settings = ctx.obj.settings

    search_dirs = list(directories) or settings.file_directories
    accepted = [e.lstrip(".") for e in extensions] or settings.files.extensions
    finder = CitationKeyBasedFileFinder(
        exact_key_only=settings.files.exact_key_only if exact is None else exact,
        appendix_characters=settings.files.appendix_characters,
    )

    if not search_dirs:
        console.print("[yellow]No directories to search[/yellow]")
        return

    try:
        found = finder.find_associated_files(key, search_dirs, accepted)
    except FileScanError as e:
        if ctx.obj.debug:
            raise
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)

    if not found:
        console.print(f"[yellow]No files found for '{escape(key)}'[/yellow]")
        return

    for path in found:
        console.print(str(path), markup=False, highlight=False, soft_wrap=True)
