"""Checks applied to the evaluated value of every interpolated expression."""

from __future__ import annotations

import math
from typing import Any

from styledpass.codegen import generate
from styledpass.errors import EvaluationError, InterpolationError, InvalidInterpolationError
from styledpass.model.ast import Node
from styledpass.model.diagnostic import Diagnostic, Severity
from styledpass.model.values import EvaluatedError, to_js_string

__all__ = ["is_serializable", "throw_if_invalid", "validate_interpolation"]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite_number(value: Any) -> bool:
    return _is_number(value) and math.isfinite(value)


def is_serializable(value: Any) -> bool:
    """True for JSON-like values: null, booleans, finite numbers, strings,
    and lists or dicts made of them."""
    if value is None or isinstance(value, (bool, str)):
        return True
    if _is_number(value):
        return math.isfinite(value)
    if isinstance(value, (list, tuple)):
        return all(is_serializable(item) for item in value)
    if isinstance(value, dict):
        return all(is_serializable(item) for item in value.values())
    return False


def _is_error_like(value: Any) -> bool:
    return isinstance(value, (EvaluatedError, BaseException))


def throw_if_invalid(value: Any, node: Node) -> None:
    """Raise if *value* cannot be inserted into CSS.

    Raises:
        EvaluationError: evaluating the expression produced an error.
        InvalidInterpolationError: the value is of an unusable kind.
    """
    if (
        callable(value)
        or isinstance(value, str)
        or _is_finite_number(value)
        or is_serializable(value)
    ):
        return

    if _is_error_like(value):
        raise EvaluationError(
            "An error occurred when evaluating the expression: "
            f"{value}. Make sure you are not using a browser or Node specific API.",
            loc=node.loc,
        )

    source = generate(node)
    fix = f"String({source})"
    raise InvalidInterpolationError(
        f"The expression evaluated to '{to_js_string(value)}', which is probably a "
        "mistake. If you want it to be inserted into CSS, explicitly cast or "
        f"transform the value to a string, e.g. - '{fix}'.",
        loc=node.loc,
        fix=fix,
    )


def validate_interpolation(value: Any, node: Node) -> Diagnostic | None:
    """Like :func:`throw_if_invalid`, but return an ERROR diagnostic instead."""
    try:
        throw_if_invalid(value, node)
    except InterpolationError as exc:
        code = "evaluation-error" if isinstance(exc, EvaluationError) else "invalid-interpolation"
        return Diagnostic(
            code=code,
            severity=Severity.ERROR,
            message=str(exc),
            loc=exc.loc,
            fix=exc.fix,
        )
    return None
