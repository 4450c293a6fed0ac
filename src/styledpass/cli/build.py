"""CLI command: styledpass build -- transform a module and extract its CSS."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from styledpass.cli.options import echo_diagnostics, resolve_options
from styledpass.pipeline import MODES, transform_source


@click.command()
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--mode",
    type=click.Choice(MODES),
    default="runtime",
    show_default=True,
    help="Replace call sites with runtime wrappers or eval-time metadata.",
)
@click.option("--css/--no-css", "show_css", default=False, help="Print extracted CSS after the code.")
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None, help="Write code here.")
@click.option("--css-output", type=click.Path(dir_okay=False), default=None, help="Write CSS here.")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None)
@click.option("--root", type=click.Path(file_okay=False), default=None, help="Project root for slugs.")
def build(
    source_file: str,
    mode: str,
    show_css: bool,
    output: str | None,
    css_output: str | None,
    config_path: str | None,
    root: str | None,
) -> None:
    """Transform every styled call site of SOURCE_FILE.

    Prints the transformed module (and, with --css, the extracted rules).
    Diagnostics go to stderr; exits with code 1 if any call site failed.
    """
    options = resolve_options(config_path, root)
    path = Path(source_file).resolve()
    result = transform_source(
        path.read_text(encoding="utf-8"), filename=str(path), options=options, mode=mode
    )

    if output:
        Path(output).write_text(result.code, encoding="utf-8")
    else:
        click.echo(result.code, nl=False)

    if css_output:
        Path(css_output).write_text(result.css + "\n", encoding="utf-8")
    elif show_css and result.rules:
        click.echo()
        click.echo(result.css)

    echo_diagnostics(result.diagnostics)
    if result.has_errors:
        sys.exit(1)
