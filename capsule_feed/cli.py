"""
Command-line interface for capsule-feed.

Uses Typer to provide a CLI with options for every feed setting. Values
from an optional YAML config file are loaded first and then overridden by
the options given on the command line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import AppConfig, load_config
from .runner import run_pipeline
from .validation import parse_category_spec, validate_directory, validate_gemini_url

app = typer.Typer(add_completion=False)
console = Console()


def _validated(validator: Callable) -> Callable:
    """Wrap a ValueError-raising validator as a Typer option callback."""

    def callback(value):
        if value is None:
            return value
        try:
            return validator(value)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc

    return callback


def _validate_categories(values: list[str] | None) -> list[str] | None:
    for value in values or []:
        try:
            parse_category_spec(value)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    return values


def _check_settings(cfg: AppConfig) -> None:
    """Validate the merged settings so YAML values fail like bad options do."""
    checks = [
        (cfg.site_root, "'--directory' / '-d'"),
        (cfg.base_url, "'--base' / '-b'"),
        (cfg.category_assignment, "'--category' / '-c'"),
        (cfg.time_source, "'--mtime'"),
        (cfg.limit, "'-n'"),
    ]
    for accessor, hint in checks:
        try:
            accessor()
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint=hint) from exc


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"capsule-feed {__version__}")
        raise typer.Exit()


@app.command()
def run(
    author: str | None = typer.Option(None, "--author", "-a", metavar="NAME", help="Author name."),
    base: str | None = typer.Option(
        None,
        "--base",
        "-b",
        metavar="URL",
        help="Base URL for feed and entries.",
        callback=_validated(validate_gemini_url),
    ),
    category: list[str] | None = typer.Option(
        None,
        "--category",
        "-c",
        metavar="DIR:TYPE",
        help="Category of a subdirectory, 'flat' or 'tree'. Repeatable.",
        callback=_validate_categories,
    ),
    clean_title: bool = typer.Option(
        False, "--clean-title", "-C", help="Replace underscores with spaces in derived titles."
    ),
    directory: Path | None = typer.Option(
        None,
        "--directory",
        "-d",
        metavar="DIR",
        help="Root directory of the site.",
        callback=_validated(validate_directory),
    ),
    email: str | None = typer.Option(None, "--email", "-e", metavar="EMAIL", help="Author's email address."),
    limit: int | None = typer.Option(
        None, "-n", min=0, metavar="N", help="Include the N most recently updated files (default 10)."
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", metavar="FILE", help="Output file name (default atom.xml)."
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not write on stdout under non-error conditions."),
    subtitle: str | None = typer.Option(None, "--subtitle", "-s", metavar="STR", help="Feed subtitle."),
    title: str | None = typer.Option(None, "--title", "-t", metavar="STR", help="Feed title."),
    mtime: bool = typer.Option(False, "--mtime", help="Use file modification time, not file status change time."),
    config: Path | None = typer.Option(
        None, "--config", exists=True, dir_okay=False, help="YAML config file."
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit."
    ),
):
    """Generate an Atom feed out of a Gemini site.

    Scans the configured categories of the site, keeps the most recently
    updated articles and writes the feed under the site root.

    Args:
        author: Feed author name
        base: gemini:// base URL for the feed and its entries
        category: Category specifications as DIR:TYPE
        clean_title: Underscore to space substitution in derived titles
        directory: Site root directory
        email: Feed author email
        limit: Maximum number of entries
        output: Output file name
        quiet: Suppress informational output
        subtitle: Feed subtitle
        title: Feed title override
        mtime: Use modification time instead of status change time
        config: Optional path to YAML config file
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    try:
        cfg = load_config(str(config) if config else None)
    except (OSError, ValueError, TypeError) as exc:
        raise typer.BadParameter(str(exc), param_hint="'--config'") from exc

    # Override with CLI options
    if directory is not None:
        cfg.site.directory = str(directory)
    if base:
        cfg.site.base_url = base
    if category:
        cfg.site.categories = dict(parse_category_spec(value) for value in category)
    if author is not None:
        cfg.feed.author = author
    if email is not None:
        cfg.feed.email = email
    if limit is not None:
        cfg.feed.limit = limit
    if output:
        cfg.feed.output = output
    if subtitle is not None:
        cfg.feed.subtitle = subtitle
    if title is not None:
        cfg.feed.title = title
    if clean_title:
        cfg.feed.clean_title = True
    if mtime:
        cfg.feed.time_source = "mtime"
    if quiet:
        cfg.logging.quiet = True
    if log_level:
        cfg.logging.level = log_level

    _check_settings(cfg)

    try:
        output_path = run_pipeline(cfg, console=console)
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if output_path is not None and not cfg.logging.quiet:
        console.print(f"Feed generated: {output_path}")


if __name__ == "__main__":
    app()
