"""Python stand-ins for JavaScript values produced by compile-time evaluation."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass


class _Undefined:
    """JavaScript ``undefined``."""

    _instance: "_Undefined | None" = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


@dataclass(frozen=True)
class EvaluatedError:
    """An error object raised or returned while evaluating an expression."""

    message: str
    stack: str = ""

    def __str__(self) -> str:
        return self.message


def to_js_string(value: object) -> str:
    """Render *value* the way JavaScript's ``String()`` would.

    Lists and dicts are rendered like ``JSON.stringify``.
    """
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"), default=to_js_string)
    return str(value)
