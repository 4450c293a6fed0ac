"""JavaScript syntax nodes read and built by the styled processor."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Position:
    """A 1-based line and 0-based column in a source file."""

    line: int
    column: int


@dataclass(frozen=True)
class SourceLocation:
    """Start and end positions of a node in its source file."""

    start: Position
    end: Position | None = None
    filename: str | None = None

    def __str__(self) -> str:
        prefix = f"{self.filename}:" if self.filename else ""
        return f"{prefix}{self.start.line}:{self.start.column}"


class Node:
    """Marker base class for every syntax node."""

    loc: SourceLocation | None


@dataclass(frozen=True)
class Identifier(Node):
    name: str
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class StringLiteral(Node):
    """A string literal; ``quote`` controls how the generator renders it."""

    value: str
    quote: str = '"'
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class NumericLiteral(Node):
    value: float
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class BooleanLiteral(Node):
    value: bool
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class NullLiteral(Node):
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class RawExpression(Node):
    """An expression kept as opaque source text.

    Interpolated expressions inside a template are never parsed further;
    they are carried through to the generated code verbatim.
    """

    source: str
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class MemberExpression(Node):
    object: Node
    property: Identifier
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class CallExpression(Node):
    callee: Node
    arguments: tuple[Node, ...] = ()
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class BlockStatement(Node):
    body: tuple[Node, ...] = ()
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class ArrowFunctionExpression(Node):
    params: tuple[Identifier, ...]
    body: Node
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class ObjectProperty(Node):
    key: Identifier | StringLiteral
    value: Node
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class ObjectExpression(Node):
    properties: tuple[ObjectProperty, ...] = ()
    loc: SourceLocation | None = field(default=None, compare=False)

    def get(self, key: str) -> Node | None:
        """Return the value of the first property named *key*, if any."""
        for prop in self.properties:
            name = prop.key.name if isinstance(prop.key, Identifier) else prop.key.value
            if name == key:
                return prop.value
        return None


@dataclass(frozen=True)
class ArrayExpression(Node):
    elements: tuple[Node, ...] = ()
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class TemplateElement(Node):
    """One literal chunk ("quasi") of a template literal."""

    value: str
    loc: SourceLocation | None = field(default=None, compare=False)


@dataclass(frozen=True)
class TemplateLiteral(Node):
    """A template literal: ``len(quasis) == len(expressions) + 1``."""

    quasis: tuple[TemplateElement, ...]
    expressions: tuple[RawExpression, ...] = ()
    loc: SourceLocation | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if len(self.quasis) != len(self.expressions) + 1:
            raise ValueError("TemplateLiteral needs exactly one more quasi than expressions")
