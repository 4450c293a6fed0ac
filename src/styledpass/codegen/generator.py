"""Render syntax nodes back to JavaScript source text."""

from __future__ import annotations

import json
import re

from styledpass.model.ast import (
    ArrayExpression,
    ArrowFunctionExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Identifier,
    MemberExpression,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectExpression,
    ObjectProperty,
    RawExpression,
    StringLiteral,
    TemplateLiteral,
)

__all__ = ["generate"]

INDENT = "  "

# Expressions that can be called without wrapping them in parentheses.
_SIMPLE_CALLEE_RE = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")


def _quote(value: str, quote: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace(quote, "\\" + quote)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f"{quote}{escaped}{quote}"


def _number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return json.dumps(value)


def _needs_parens_as_callee(node: Node) -> bool:
    if isinstance(node, (Identifier, MemberExpression, CallExpression)):
        return False
    if isinstance(node, RawExpression):
        return not _SIMPLE_CALLEE_RE.match(node.source.strip())
    return True


def _property_key(key: Identifier | StringLiteral) -> str:
    if isinstance(key, Identifier):
        return key.name
    return _quote(key.value, key.quote)


class _Generator:
    def __init__(self) -> None:
        self.level = 0

    def emit(self, node: Node) -> str:
        method = getattr(self, f"emit_{type(node).__name__}", None)
        if method is None:
            raise TypeError(f"Cannot generate code for {type(node).__name__}")
        return method(node)

    # ---- leaves ----

    def emit_Identifier(self, node: Identifier) -> str:
        return node.name

    def emit_StringLiteral(self, node: StringLiteral) -> str:
        return _quote(node.value, node.quote)

    def emit_NumericLiteral(self, node: NumericLiteral) -> str:
        return _number(node.value)

    def emit_BooleanLiteral(self, node: BooleanLiteral) -> str:
        return "true" if node.value else "false"

    def emit_NullLiteral(self, node: NullLiteral) -> str:
        return "null"

    def emit_RawExpression(self, node: RawExpression) -> str:
        return node.source.strip()

    # ---- compound expressions ----

    def emit_MemberExpression(self, node: MemberExpression) -> str:
        obj = self.emit(node.object)
        if _needs_parens_as_callee(node.object):
            obj = f"({obj})"
        return f"{obj}.{node.property.name}"

    def emit_CallExpression(self, node: CallExpression) -> str:
        callee = self.emit(node.callee)
        if _needs_parens_as_callee(node.callee):
            callee = f"({callee})"
        args = ", ".join(self.emit(arg) for arg in node.arguments)
        return f"{callee}({args})"

    def emit_ArrowFunctionExpression(self, node: ArrowFunctionExpression) -> str:
        params = ", ".join(p.name for p in node.params)
        body = self.emit(node.body)
        if isinstance(node.body, ObjectExpression) or (
            isinstance(node.body, RawExpression) and body.startswith("{")
        ):
            body = f"({body})"
        return f"({params}) => {body}"

    def emit_BlockStatement(self, node: BlockStatement) -> str:
        if not node.body:
            return "{}"
        self.level += 1
        lines = [f"{INDENT * self.level}{self.emit(stmt)};" for stmt in node.body]
        self.level -= 1
        return "{\n" + "\n".join(lines) + f"\n{INDENT * self.level}}}"

    def emit_ObjectProperty(self, node: ObjectProperty) -> str:
        return f"{_property_key(node.key)}: {self.emit(node.value)}"

    def emit_ObjectExpression(self, node: ObjectExpression) -> str:
        if not node.properties:
            return "{}"
        self.level += 1
        lines = [f"{INDENT * self.level}{self.emit(prop)}" for prop in node.properties]
        self.level -= 1
        return "{\n" + ",\n".join(lines) + f"\n{INDENT * self.level}}}"

    def emit_ArrayExpression(self, node: ArrayExpression) -> str:
        return "[" + ", ".join(self.emit(el) for el in node.elements) + "]"

    def emit_TemplateLiteral(self, node: TemplateLiteral) -> str:
        parts = [node.quasis[0].value]
        for expr, quasi in zip(node.expressions, node.quasis[1:]):
            parts.append("${" + self.emit(expr) + "}")
            parts.append(quasi.value)
        return "`" + "".join(parts) + "`"


def generate(node: Node) -> str:
    """Return JavaScript source for *node*."""
    return _Generator().emit(node)
