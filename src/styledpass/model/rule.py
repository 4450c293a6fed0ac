"""Extracted CSS rules and the eval-time metadata they are built from."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from styledpass.model.ast import Position

# Key under which eval-time metadata is exposed on a styled component value.
META_KEY = "__wyw_meta"


@dataclass(frozen=True)
class CssRule:
    """One CSS rule produced for a call site."""

    selector: str
    css_text: str
    class_name: str
    display_name: str
    start: Position | None = None


Rules = dict[str, CssRule]

# Evaluated values keyed by identifier name, filled by the pipeline before
# rules are extracted.
ValueCache = Mapping[str, Any]


@dataclass(frozen=True)
class EvalMeta:
    """Chain metadata carried by a styled component's eval-time value."""

    class_name: str
    extends: Any = None


def get_eval_meta(value: Any) -> EvalMeta | None:
    """Return the chain metadata carried by *value*, or None.

    Accepts an :class:`EvalMeta` itself, an object exposing an ``eval_meta``
    attribute, or the evaluated form of the eval-time object literal
    (``{"__wyw_meta": {"className": ..., "extends": ...}}``).
    """
    if isinstance(value, EvalMeta):
        return value
    meta = getattr(value, "eval_meta", None)
    if isinstance(meta, EvalMeta):
        return meta
    if isinstance(value, Mapping):
        raw = value.get(META_KEY)
        if isinstance(raw, Mapping) and isinstance(raw.get("className"), str):
            return EvalMeta(class_name=raw["className"], extends=raw.get("extends"))
    return None
