"""Parsed call-site parameters handed to a processor by the template matcher.

A call site such as ``styled(Button)`color: red;` `` is described as a
sequence of params::

    (CalleeParam(styled), CallParam((LazyValue(Button),)), TemplateParam(...))

``styled.div`...` `` uses a :class:`MemberParam` instead of a call, and an
already-transformed site ends in a second :class:`CallParam`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from styledpass.model.ast import Node, TemplateLiteral


class ValueType(Enum):
    """Compile-time knowledge about a call argument."""

    FUNCTION = "function"
    CONST = "const"
    LAZY = "lazy"


@dataclass(frozen=True)
class FunctionValue:
    """An inline function (arrow or ``function`` expression)."""

    ex: Node
    source: str

    @property
    def kind(self) -> ValueType:
        return ValueType.FUNCTION


@dataclass(frozen=True)
class ConstValue:
    """A statically known literal."""

    ex: Node
    source: str
    value: str | float | bool | None

    @property
    def kind(self) -> ValueType:
        return ValueType.CONST


@dataclass(frozen=True)
class LazyValue:
    """Anything else: usually an identifier, possibly imported.

    ``imported_from`` lists every module specifier the identifier is
    imported from; it is empty for identifiers declared in the same file.
    """

    ex: Node
    source: str
    imported_from: tuple[str, ...] = ()

    @property
    def kind(self) -> ValueType:
        return ValueType.LAZY


ExpressionValue = Union[FunctionValue, ConstValue, LazyValue]


@dataclass(frozen=True)
class CalleeParam:
    node: Node
    kind: str = "callee"


@dataclass(frozen=True)
class MemberParam:
    name: str
    kind: str = "member"


@dataclass(frozen=True)
class CallParam:
    args: tuple[ExpressionValue, ...] = ()
    kind: str = "call"


@dataclass(frozen=True)
class TemplateParam:
    template: TemplateLiteral
    kind: str = "template"


Param = Union[CalleeParam, MemberParam, CallParam, TemplateParam]
Params = tuple[Param, ...]
