"""Static evaluation of the small JavaScript subset produced at eval time.

The eval-time replacement of a styled call site is an object literal whose
``extends`` entry is a zero-argument call of another binding, e.g.::

    {"displayName": "B", "__wyw_meta": {"className": "b1", "extends": A()}}

Evaluating ``A()`` yields the value bound to ``A``. Object literals are
registered before their properties are evaluated, so bindings that refer to
each other in a loop produce a cyclic value instead of recursing forever.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from styledpass.model.ast import (
    ArrayExpression,
    BooleanLiteral,
    CallExpression,
    Identifier,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    RawExpression,
    StringLiteral,
)
from styledpass.model.values import UNDEFINED

__all__ = ["Evaluator", "NotEvaluable"]

_NUMBER_RE = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_STRING_RE = re.compile(r"""^(?:"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')$""")
_NAME_RE = re.compile(r"^[A-Za-z_$][\w$]*$")

_GLOBALS: dict[str, Any] = {
    "undefined": UNDEFINED,
    "null": None,
    "true": True,
    "false": False,
    "NaN": float("nan"),
    "Infinity": float("inf"),
}


class NotEvaluable(Exception):
    """The expression cannot be evaluated at compile time."""


def _parse_number(text: str) -> float | int:
    value = float(text)
    return int(value) if value.is_integer() and "." not in text and "e" not in text.lower() else value


def _unquote(text: str) -> str:
    quote = text[0]
    return text[1:-1].replace("\\" + quote, quote).replace("\\n", "\n").replace("\\\\", "\\")


class Evaluator:
    """Evaluate nodes against module-level *bindings* (name -> node)."""

    def __init__(self, bindings: Mapping[str, Node] | None = None) -> None:
        self.bindings: dict[str, Node] = dict(bindings or {})
        self._values: dict[str, Any] = {}

    def bind(self, name: str, node: Node) -> None:
        self.bindings[name] = node
        self._values.pop(name, None)

    def lookup(self, name: str) -> Any:
        """Return the value bound to *name*.

        Raises:
            NotEvaluable: if *name* is neither bound nor a known global.
        """
        if name in self._values:
            return self._values[name]
        if name not in self.bindings:
            if name in _GLOBALS:
                return _GLOBALS[name]
            raise NotEvaluable(f"{name} is not defined at compile time")

        node = self.bindings[name]
        if isinstance(node, ObjectExpression):
            obj: dict[str, Any] = {}
            self._values[name] = obj
            try:
                self._fill_object(obj, node)
            except NotEvaluable:
                del self._values[name]
                raise
            return obj
        value = self.evaluate(node)
        self._values[name] = value
        return value

    def values(self) -> dict[str, Any]:
        """Evaluate every binding that can be evaluated."""
        result: dict[str, Any] = {}
        for name in self.bindings:
            try:
                result[name] = self.lookup(name)
            except NotEvaluable:
                continue
        return result

    def _fill_object(self, obj: dict[str, Any], node: ObjectExpression) -> None:
        for prop in node.properties:
            key = prop.key.name if isinstance(prop.key, Identifier) else prop.key.value
            try:
                obj[key] = self.evaluate(prop.value)
            except NotEvaluable:
                if not isinstance(prop.value, CallExpression):
                    raise
                # A deferred reference to something that only exists at runtime.
                obj[key] = UNDEFINED

    def evaluate(self, node: Node) -> Any:
        if isinstance(node, (StringLiteral, NumericLiteral, BooleanLiteral)):
            return node.value
        if isinstance(node, NullLiteral):
            return None
        if isinstance(node, Identifier):
            return self.lookup(node.name)
        if isinstance(node, CallExpression):
            # Deferred reference: ``Name()`` stands for the value of ``Name``.
            if isinstance(node.callee, Identifier) and not node.arguments:
                return self.lookup(node.callee.name)
            raise NotEvaluable("only zero-argument calls of bindings can be evaluated")
        if isinstance(node, ObjectExpression):
            obj: dict[str, Any] = {}
            self._fill_object(obj, node)
            return obj
        if isinstance(node, ArrayExpression):
            return [self.evaluate(el) for el in node.elements]
        if isinstance(node, RawExpression):
            return self._evaluate_raw(node.source.strip())
        raise NotEvaluable(f"cannot evaluate {type(node).__name__}")

    def _evaluate_raw(self, text: str) -> Any:
        if _NUMBER_RE.match(text):
            return _parse_number(text)
        if _STRING_RE.match(text):
            return _unquote(text)
        if _NAME_RE.match(text):
            return self.lookup(text)
        raise NotEvaluable(f"cannot evaluate {text!r}")
