"""Option helpers shared by CLI commands."""

from __future__ import annotations

import dataclasses
import sys

import click

from styledpass.config import StyledOptions, load_options
from styledpass.model.diagnostic import Diagnostic


def resolve_options(config_path: str | None, root: str | None) -> StyledOptions:
    """Load options from *config_path* (if any) and apply CLI overrides."""
    if config_path is None:
        options = StyledOptions()
    else:
        try:
            options = load_options(config_path)
        except ValueError as exc:
            click.echo(f"Config error: {exc}", err=True)
            sys.exit(2)
    if root is not None:
        options = dataclasses.replace(options, root=root)
    return options


def echo_diagnostics(diagnostics: list[Diagnostic]) -> None:
    for diag in diagnostics:
        click.echo(str(diag), err=True)
        if diag.fix:
            click.echo(f"  fix: {diag.fix}", err=True)
