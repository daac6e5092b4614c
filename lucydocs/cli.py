"""Command-line interface for lucydocs.

This module defines the CLI commands using the Click framework.

Commands:
- build: Build the site into the output directory.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__


@click.group()
@click.version_option(version=__version__, prog_name="lucydocs")
def cli():
    """Lucy documentation site builder."""


@cli.command()
@click.option(
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    required=False,
    help="Directory to write the site to (overrides lucydocs.yaml output_dir)",
)
def build(output: Path | None):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import BuildError, build_site
    from .errors import ConfigError

    output_dir = output.resolve() if output is not None else None
    try:
        result = build_site(project_root, output_dir_override=output_dir)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    except BuildError as exc:
        try:
            rel_path = exc.source_path.relative_to(project_root)
        except ValueError:
            rel_path = exc.source_path
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")


def main():
    """Entry point for the CLI application."""
    cli()
