"""Slugs, class names and CSS-safe identifiers."""

from __future__ import annotations

import hashlib
import re
from collections.abc import Mapping
from pathlib import PurePath, PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from styledpass.config import StyledOptions

__all__ = [
    "slugify",
    "to_valid_css_identifier",
    "build_slug",
    "class_name_and_slug",
]

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"

_INVALID_CSS_CHARS_RE = re.compile(r"[^-_a-zA-Z0-9\u00a0-\uffff]")
_LEADING_DIGIT_RE = re.compile(r"^\d")
_PLACEHOLDER_RE = re.compile(r"\[(.*?)]")


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def slugify(text: str) -> str:
    """Return a short, stable slug for *text*."""
    digest = hashlib.sha1(text.encode("utf-8")).hexdigest()
    return _to_base36(int(digest[:8], 16))


def to_valid_css_identifier(text: str) -> str:
    """Replace characters that may not appear in a CSS identifier."""
    return _LEADING_DIGIT_RE.sub("_", _INVALID_CSS_CHARS_RE.sub("_", text))


def build_slug(pattern: str, values: Mapping[str, object]) -> str:
    """Substitute ``[name]`` placeholders in *pattern* with *values*.

    Callable values are invoked only when their placeholder is present.
    Unknown placeholders render as an empty string.
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            return ""
        value = values[name]
        if callable(value):
            value = value()
        return str(value)

    return _PLACEHOLDER_RE.sub(_replace, pattern)


def _relative_filename(filename: str | None, root: str | None) -> str:
    if not filename:
        return "unknown"
    path = PurePath(filename)
    if root:
        try:
            path = path.relative_to(root)
        except ValueError:
            pass
    return path.as_posix()


def class_name_and_slug(
    display_name: str,
    idx: int,
    options: "StyledOptions",
    filename: str | None = None,
) -> tuple[str, str]:
    """Compute ``(class_name, slug)`` for the *idx*-th call site of a file."""
    relative = _relative_filename(filename, options.root)
    slug = to_valid_css_identifier(
        f"{display_name[:1].lower()}{slugify(f'{relative}:{idx}')}"
    )

    posix = PurePosixPath(relative)
    slug_vars: dict[str, object] = {
        "hash": slug,
        "title": display_name,
        "index": idx,
        "file": relative,
        "ext": posix.suffix,
        "name": posix.stem,
        "dir": posix.parent.name,
    }

    if options.display_name:
        class_name = f"{to_valid_css_identifier(display_name)}_{slug}"
    else:
        class_name = slug

    custom = options.class_name_slug
    if callable(custom):
        class_name = to_valid_css_identifier(custom(slug, display_name, slug_vars))
    elif isinstance(custom, str):
        class_name = to_valid_css_identifier(build_slug(custom, slug_vars))

    return class_name, slug
