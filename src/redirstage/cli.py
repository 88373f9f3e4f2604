"""CLI interface for Redirstage.

Command-line tool for generating redirects for static documentation sites.
"""

import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn

import click

from redirstage.config import Config
from redirstage.core.redirects import RedirectConflictError
from redirstage.core.rules import RulesReadError


def _config_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by every build command."""
    options = [
        click.option(
            "--config",
            "-c",
            "config_path",
            type=click.Path(exists=True, path_type=Path),
            default=None,
            help="Path to configuration file (default: auto-discover redirstage.toml)",
        ),
        click.option(
            "--source-dir",
            "-s",
            type=click.Path(exists=True, path_type=Path, file_okay=False),
            default=None,
            help="Documentation source directory (overrides config)",
        ),
        click.option(
            "--output-dir",
            "-o",
            type=click.Path(path_type=Path, file_okay=False),
            default=None,
            help="Output directory for generated redirects (overrides config)",
        ),
        click.option(
            "--meta-refresh/--no-meta-refresh",
            default=None,
            help="Enable/disable meta-refresh redirect pages (overrides config, default: enabled)",
        ),
        click.option(
            "--netlify/--no-netlify",
            default=None,
            help="Enable/disable the Netlify _redirects file (overrides config, default: disabled)",
        ),
        click.option(
            "--prefix-redirects/--no-prefix-redirects",
            default=None,
            help="Enable/disable escape-prefix redirects in _redirects (overrides config)",
        ),
        click.option(
            "--redirect-prefix",
            default=None,
            help='Escape prefix marking redirected segments (overrides config, default: "^")',
        ),
        click.option(
            "--verbose",
            "-v",
            is_flag=True,
            help="Enable verbose output",
        ),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def _load_config(
    config_path: Path | None,
    source_dir: Path | None,
    output_dir: Path | None,
    meta_refresh: bool | None,
    netlify: bool | None,
    prefix_redirects: bool | None,
    redirect_prefix: str | None,
) -> Config:
    """Load configuration and apply CLI overrides."""
    try:
        return Config.load(config_path).with_overrides(
            source_dir=source_dir,
            output_dir=output_dir,
            meta_refresh=meta_refresh,
            netlify=netlify,
            netlify_prefix=prefix_redirects,
            prefix=redirect_prefix,
        )
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))


def _configure_logging(verbose: bool) -> None:
    """Route library logging to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


@click.group()
def cli() -> None:
    """Redirstage - redirects for moved documentation pages."""


@cli.command()
@_config_options
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show the artifacts that would be written without writing them",
)
@click.option(
    "--workers",
    "-j",
    type=click.IntRange(min=1),
    default=None,
    help="Worker threads for scanning documents",
)
def build(
    config_path: Path | None,
    source_dir: Path | None,
    output_dir: Path | None,
    meta_refresh: bool | None,
    netlify: bool | None,
    prefix_redirects: bool | None,
    redirect_prefix: str | None,
    verbose: bool,
    dry_run: bool,
    workers: int | None,
) -> None:
    """Generate redirect pages and the _redirects file."""
    from redirstage.build import build_site

    _configure_logging(verbose)
    config = _load_config(
        config_path,
        source_dir,
        output_dir,
        meta_refresh,
        netlify,
        prefix_redirects,
        redirect_prefix,
    )

    click.echo(f"Source directory: {config.docs.source_dir}")
    try:
        result = build_site(config, dry_run=dry_run, workers=workers)
    except (RedirectConflictError, RulesReadError, FileNotFoundError, ValueError) as e:
        _fail(str(e))

    if not result.artifacts:
        click.echo("No redirects to generate.")
        return

    verb = "Would write" if dry_run else "Wrote"
    for artifact in result.artifacts:
        click.echo(f"  -> {artifact.destination}")
    click.echo(
        click.style(
            f"{verb} {len(result.artifacts)} artifacts to {config.docs.output_dir}",
            fg="green",
        )
    )


@cli.command(name="list")
@_config_options
def list_redirects(
    config_path: Path | None,
    source_dir: Path | None,
    output_dir: Path | None,
    meta_refresh: bool | None,
    netlify: bool | None,
    prefix_redirects: bool | None,
    redirect_prefix: str | None,
    verbose: bool,
) -> None:
    """List computed redirects without writing anything."""
    from redirstage.core.scanner import scan
    from redirstage.loader import DocumentLoader

    _configure_logging(verbose)
    config = _load_config(
        config_path,
        source_dir,
        output_dir,
        meta_refresh,
        netlify,
        prefix_redirects,
        redirect_prefix,
    )

    try:
        documents = DocumentLoader(config.docs.source_dir).load()
        redirects = scan(documents, config.redirects)
    except (RedirectConflictError, FileNotFoundError, ValueError) as e:
        _fail(str(e))

    if not redirects:
        click.echo("No redirects.")
        return

    for mapping in redirects:
        click.echo(f"{mapping.kind.value:<9} {mapping.source} {mapping.target}")


@cli.command()
@_config_options
def watch(
    config_path: Path | None,
    source_dir: Path | None,
    output_dir: Path | None,
    meta_refresh: bool | None,
    netlify: bool | None,
    prefix_redirects: bool | None,
    redirect_prefix: str | None,
    verbose: bool,
) -> None:
    """Generate redirects and regenerate them when sources change."""
    import asyncio

    from redirstage.build import build_site
    from redirstage.watch import RedirectWatcher

    _configure_logging(verbose)
    config = _load_config(
        config_path,
        source_dir,
        output_dir,
        meta_refresh,
        netlify,
        prefix_redirects,
        redirect_prefix,
    )

    try:
        build_site(config)
    except (RedirectConflictError, RulesReadError, FileNotFoundError, ValueError) as e:
        _fail(str(e))

    click.echo(f"Watching {config.docs.source_dir} for changes (Ctrl+C to stop)")
    watcher = RedirectWatcher(
        config.docs.source_dir,
        lambda: build_site(config),
        watch_patterns=config.watch.patterns,
    )
    try:
        asyncio.run(watcher.run())
    except KeyboardInterrupt:
        click.echo("Stopped.")
