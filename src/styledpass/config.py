from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Union

from styledpass.model.interpolation import VariableContext

VariableNameSlug = Union[str, Callable[[VariableContext], str], None]
ClassNameSlug = Union[str, Callable[[str, str, dict], str], None]

DEFAULT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs")


@dataclass(frozen=True)
class StyledOptions:
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    variable_name_slug: VariableNameSlug = None
    display_name: bool = False  # prefix class names with the display name
    class_name_slug: ClassNameSlug = None
    root: str | None = None  # project root, for stable relative slugs
    tag: str = "styled"  # callee name the pipeline looks for


# JSON option names -> StyledOptions field names.
_JSON_KEYS = {
    "extensions": "extensions",
    "variableNameSlug": "variable_name_slug",
    "displayName": "display_name",
    "classNameSlug": "class_name_slug",
    "root": "root",
    "tag": "tag",
}


def options_from_mapping(data: dict[str, Any]) -> StyledOptions:
    """Build options from camelCase keys; unknown keys raise ValueError."""
    unknown = sorted(set(data) - set(_JSON_KEYS))
    if unknown:
        raise ValueError(f"Unknown option(s): {', '.join(unknown)}")
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        name = _JSON_KEYS[key]
        if name == "extensions":
            value = tuple(value)
        kwargs[name] = value
    return StyledOptions(**kwargs)


def load_options(path: str | Path) -> StyledOptions:
    """Read options from a JSON file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")
    return options_from_mapping(data)
