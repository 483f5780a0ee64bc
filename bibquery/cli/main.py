"""Main CLI entry point and application setup."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import click
from click.exceptions import Exit
from rich.console import Console

from bibquery import __version__
from bibquery.cli.commands import files, search
from bibquery.cli.config import Settings, load_settings


@dataclass
class Context:
    """CLI context that holds shared resources."""

    console: Console
    settings: Settings
    debug: bool = False


def setup_logging(
    verbose: bool = False, quiet: bool = False, debug: bool = False
) -> None:
    """Configure logging based on CLI flags."""
    if quiet:
        level = logging.WARNING
    elif verbose or debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
        if not debug
        else "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_console(no_color: bool = False, width: int | None = None) -> Console:
    """Create Rich console with appropriate settings."""
    return Console(
        no_color=no_color,
        width=width or 120,
        highlight=not no_color,
        color_system=None if no_color else "auto",
    )


class BibQueryGroup(click.Group):
    """Custom group that handles KeyboardInterrupt."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except KeyboardInterrupt:
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print("[yellow]Interrupted[/yellow]")
            ctx.exit(130)
        except (click.ClickException, click.Abort, Exit, SystemExit):
            # Let Click exceptions and exits propagate with their exit codes
            raise
        except Exception as e:
            debug = getattr(ctx.obj, "debug", False) if ctx.obj else False
            if debug:
                raise
            console = getattr(ctx.obj, "console", None) if ctx.obj else None
            if console:
                console.print(f"[red]Error:[/red] {e}")
            else:
                click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


@click.group(cls=BibQueryGroup)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--debug", is_flag=True, help="Enable debug mode with full tracebacks")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.version_option(
    version=__version__, prog_name="bibquery", message="bibquery version %(version)s"
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    no_color: bool,
    debug: bool,
    config_file: Path | None,
) -> None:
    """Search bibliography files and find the files of their entries.

    Queries are free text (``quantum``), field searches (``author=Knuth``)
    or several of those joined with a lowercase ``and``.
    """
    setup_logging(verbose=verbose, quiet=quiet, debug=debug)

    console = create_console(no_color=no_color)

    try:
        settings = load_settings(config_file)
    except ValueError as e:
        if debug:
            raise
        console.print(f"[red]Error loading configuration:[/red] {e}")
        ctx.exit(1)

    ctx.obj = Context(console=console, settings=settings, debug=debug)


cli.add_command(search.search)
cli.add_command(search.parse_command, name="parse")
cli.add_command(files.files)


def main() -> None:
    """Main entry point for the CLI application."""
    try:
        cli()
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
