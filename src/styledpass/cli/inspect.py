"""CLI command: styledpass inspect -- list the styled call sites of a module."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from styledpass.cli.options import echo_diagnostics, resolve_options
from styledpass.model.component import describe_kind
from styledpass.pipeline import transform_source


@click.command()
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None)
@click.option("--root", type=click.Path(file_okay=False), default=None, help="Project root for slugs.")
def inspect(source_file: str, config_path: str | None, root: str | None) -> None:
    """Show each styled call site of SOURCE_FILE.

    Lists what every site wraps, its class name and its interpolations.
    """
    options = resolve_options(config_path, root)
    path = Path(source_file).resolve()
    result = transform_source(path.read_text(encoding="utf-8"), filename=str(path), options=options)

    click.echo(f"File:  {path.name}")
    click.echo(f"Sites: {len(result.sites)}")
    click.echo()

    for item in result.sites:
        processor = item.processor
        loc = item.site.loc
        where = f"{loc.start.line}:{loc.start.column}" if loc else "?"
        click.echo(f"  {where}  {processor}")
        parts = [
            f"    name={processor.display_name}",
            f"class={processor.class_name}",
            f"slug={processor.slug}",
            f"wraps={describe_kind(processor.component)}",
        ]
        click.echo("  ".join(parts))
        for interpolation in processor.interpolations:
            unit = f" unit={interpolation.unit}" if interpolation.unit else ""
            click.echo(f"      --{interpolation.id}: {interpolation.source}{unit}")

    if result.dependencies:
        click.echo()
        click.echo("Dependencies: " + ", ".join(result.dependencies))

    echo_diagnostics(result.diagnostics)
    if result.has_errors:
        sys.exit(1)
