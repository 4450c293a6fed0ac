"""Lark Transformer that turns a call-site head into operations and arguments."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import LarkError

from styledpass.model.params import ValueType
from styledpass.parser.errors import ParseError

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_LITERAL_NAMES: dict[str, object] = {"true": True, "false": False, "null": None}


@dataclass(frozen=True)
class Argument:
    """One call argument, classified by what is statically known about it."""

    kind: ValueType
    source: str
    value: str | float | bool | None = None
    is_identifier: bool = False


@dataclass(frozen=True)
class MemberOp:
    name: str


@dataclass(frozen=True)
class CallOp:
    args: tuple[Argument, ...] = ()


TagOp = Union[MemberOp, CallOp]


@dataclass(frozen=True)
class CallHead:
    """``callee`` followed by the member accesses and calls applied to it."""

    callee: str
    ops: tuple[TagOp, ...]


@dataclass(frozen=True)
class _Item:
    kind: str
    text: str


def _unquote(raw: str) -> str:
    quote = raw[0]
    return (
        raw[1:-1]
        .replace("\\" + quote, quote)
        .replace("\\n", "\n")
        .replace("\\t", "\t")
        .replace("\\\\", "\\")
    )


def _classify(items: list[_Item], source: str) -> Argument:
    """Decide what kind of value an argument is from its top-level items."""
    kinds = [item.kind for item in items]
    first = items[0]

    if "arrow" in kinds or (first.kind == "name" and first.text == "function") or (
        first.kind == "name"
        and first.text == "async"
        and len(items) > 1
        and items[1].text == "function"
    ):
        return Argument(kind=ValueType.FUNCTION, source=source)

    if len(items) == 1:
        if first.kind == "string":
            return Argument(kind=ValueType.CONST, source=source, value=_unquote(first.text))
        if first.kind == "template" and "${" not in first.text:
            return Argument(kind=ValueType.CONST, source=source, value=first.text[1:-1])
        if first.kind == "number":
            return Argument(kind=ValueType.CONST, source=source, value=float(first.text))
        if first.kind == "name":
            if first.text in _LITERAL_NAMES:
                return Argument(
                    kind=ValueType.CONST, source=source, value=_LITERAL_NAMES[first.text]  # type: ignore[arg-type]
                )
            return Argument(kind=ValueType.LAZY, source=source, is_identifier=True)

    return Argument(kind=ValueType.LAZY, source=source)


class CallHeadTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree of a call-site head into a CallHead."""

    def __init__(self, text: str) -> None:
        super().__init__()
        self._text = text

    # ---- items ----

    def name(self, items: list[Token]) -> _Item:
        return _Item("name", str(items[0]))

    def string(self, items: list[Token]) -> _Item:
        return _Item("string", str(items[0]))

    def template(self, items: list[Token]) -> _Item:
        return _Item("template", str(items[0]))

    def number(self, items: list[Token]) -> _Item:
        return _Item("number", str(items[0]))

    def arrow(self, items: list[Token]) -> _Item:
        return _Item("arrow", "=>")

    def operator(self, items: list[Token]) -> _Item:
        return _Item("operator", str(items[0]))

    def dot(self, items: list[Token]) -> _Item:
        return _Item("dot", ".")

    def comma(self, items: list[Token]) -> _Item:
        return _Item("comma", ",")

    def parens(self, items: list[_Item]) -> _Item:
        return _Item("group", "()")

    def brackets(self, items: list[_Item]) -> _Item:
        return _Item("group", "[]")

    def braces(self, items: list[_Item]) -> _Item:
        return _Item("group", "{}")

    # ---- structural ----

    @v_args(meta=True)
    def argument(self, meta, items: list[_Item]) -> Argument:
        source = self._text[meta.start_pos:meta.end_pos]
        return _classify(items, source)

    def member(self, items: list[Token]) -> MemberOp:
        return MemberOp(str(items[0]))

    def call(self, items: list[Argument]) -> CallOp:
        return CallOp(tuple(items))

    def start(self, items: list[object]) -> CallHead:
        ops = tuple(item for item in items[1:] if isinstance(item, (MemberOp, CallOp)))
        return CallHead(callee=str(items[0]), ops=ops)


_parser = Lark(
    GRAMMAR_PATH.read_text(encoding="utf-8"),
    parser="lalr",
    start="start",
    propagate_positions=True,
)


def parse_call_head(text: str) -> CallHead:
    """Parse the head of a call site (everything before the template)."""
    try:
        tree = _parser.parse(text)
    except LarkError as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise ParseError(str(e), line=line, column=column) from e
    return CallHeadTransformer(text).transform(tree)
