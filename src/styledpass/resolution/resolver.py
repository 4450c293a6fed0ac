"""Node.js-style module resolution.

Resolution order for ``resolve_module(specifier, basedir)``:

1. Relative or absolute specifiers (``./x``, ``../x``, ``/x``) are resolved
   against *basedir*: first as a file (exact, then each extension), then as
   a directory (``package.json`` ``main``, then ``index`` + extension).
2. Bare specifiers are looked up in every ``node_modules`` directory from
   *basedir* up to the filesystem root.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

__all__ = ["resolve_module", "DEFAULT_EXTENSIONS"]

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".js",)


def _is_path_specifier(specifier: str) -> bool:
    return specifier in (".", "..") or specifier.startswith(("./", "../", "/"))


def _load_as_file(path: Path, extensions: Sequence[str]) -> Path | None:
    if path.is_file():
        return path
    for ext in extensions:
        candidate = path.with_name(path.name + ext)
        if candidate.is_file():
            return candidate
    return None


def _load_index(path: Path, extensions: Sequence[str]) -> Path | None:
    for ext in extensions:
        candidate = path / f"index{ext}"
        if candidate.is_file():
            return candidate
    return None


def _package_main(path: Path) -> str | None:
    manifest = path / "package.json"
    if not manifest.is_file():
        return None
    try:
        data = json.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.debug("Ignoring unreadable manifest %s", manifest)
        return None
    main = data.get("main") if isinstance(data, dict) else None
    return main if isinstance(main, str) and main else None


def _load_as_directory(path: Path, extensions: Sequence[str]) -> Path | None:
    if not path.is_dir():
        return None
    main = _package_main(path)
    if main:
        target = path / main
        found = _load_as_file(target, extensions) or _load_index(target, extensions)
        if found:
            return found
    return _load_index(path, extensions)


def _node_modules_dirs(basedir: Path) -> list[Path]:
    dirs: list[Path] = []
    for directory in (basedir, *basedir.parents):
        if directory.name == "node_modules":
            continue
        dirs.append(directory / "node_modules")
    return dirs


def resolve_module(
    specifier: str,
    basedir: str | Path,
    extensions: Sequence[str] = DEFAULT_EXTENSIONS,
) -> str:
    """Resolve *specifier* imported from *basedir* to an absolute file path.

    Raises:
        ModuleNotFoundError: if no file can be found.
    """
    base = Path(basedir).resolve()
    if _is_path_specifier(specifier):
        target = base / specifier
        found = _load_as_file(target, extensions) or _load_as_directory(target, extensions)
    else:
        found = None
        for modules_dir in _node_modules_dirs(base):
            target = modules_dir / specifier
            found = _load_as_file(target, extensions) or _load_as_directory(target, extensions)
            if found:
                break
    if found is None:
        raise ModuleNotFoundError(f"Cannot find module '{specifier}' from '{base}'")
    return str(found.resolve())
