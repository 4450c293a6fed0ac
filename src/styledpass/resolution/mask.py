"""Glob matching for ``linaria.components`` masks."""

from __future__ import annotations

import posixpath

from wcmatch import glob

# minimatch semantics: ``**`` crosses directories, ``{a,b}`` expands,
# leading dots are not matched by wildcards.
_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.EXTGLOB


def to_posix(path: str) -> str:
    return path.replace("\\", "/")


def full_mask(package_dir: str, mask: str) -> str:
    """Join *mask* onto the manifest directory using forward slashes."""
    return posixpath.normpath(posixpath.join(to_posix(package_dir), to_posix(mask)))


def matches_mask(path: str, package_dir: str, mask: str) -> bool:
    """True when the file *path* is covered by *mask* relative to *package_dir*."""
    return glob.globmatch(to_posix(path), full_mask(package_dir, mask), flags=_FLAGS)
