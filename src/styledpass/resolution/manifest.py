"""Locate and read ``package.json`` manifests."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from styledpass.resolution.resolver import DEFAULT_EXTENSIONS, resolve_module

__all__ = ["find_package_json", "read_components_mask", "find_up"]

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


def find_up(start: str | Path, name: str = MANIFEST_NAME) -> str | None:
    """Return the first *name* file in *start* or any of its parents."""
    directory = Path(start).resolve()
    if not directory.is_dir():
        directory = directory.parent
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / name
        if candidate.is_file():
            return str(candidate)
    return None


def find_package_json(
    specifier: str,
    filename: str | None,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> str | None:
    """Return the manifest that owns the module *specifier*.

    ``"."`` means the importing file itself. Returns None when the module
    cannot be resolved or no manifest exists above it.
    """
    if specifier == "." and filename:
        module_path = os.path.abspath(filename)
    else:
        basedir = os.path.dirname(filename) if filename else os.getcwd()
        try:
            module_path = resolve_module(specifier, basedir, extensions)
        except ModuleNotFoundError:
            logger.debug("No manifest for unresolvable module %r", specifier)
            return None
    return find_up(module_path)


def read_components_mask(manifest_path: str | Path) -> str | None:
    """Return the ``linaria.components`` glob declared by a manifest, if any.

    Raises:
        OSError: if the manifest cannot be read.
        ValueError: if it is not valid JSON.
    """
    data = json.loads(Path(manifest_path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        return None
    section = data.get("linaria")
    if not isinstance(section, dict):
        return None
    mask = section.get("components")
    return mask if isinstance(mask, str) else None
