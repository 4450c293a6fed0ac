"""Find ``styled`` call sites in JavaScript source and describe them as params."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Callable

from styledpass.model.ast import (
    BooleanLiteral,
    Identifier,
    Node,
    NullLiteral,
    NumericLiteral,
    RawExpression,
    SourceLocation,
    StringLiteral,
)
from styledpass.model.params import (
    CallParam,
    CalleeParam,
    ConstValue,
    ExpressionValue,
    FunctionValue,
    LazyValue,
    MemberParam,
    Param,
    Params,
    TemplateParam,
    ValueType,
)
from styledpass.parser.declarations import parse_constants, parse_imports
from styledpass.parser.errors import ParseError
from styledpass.parser.scanner import RawCallSite, Scanner
from styledpass.parser.transformer import Argument, CallOp, MemberOp, parse_call_head

__all__ = [
    "CallSite",
    "ParseError",
    "find_call_sites",
    "parse_call_site",
    "parse_constants",
    "parse_imports",
]

_BINDING_RE = re.compile(
    r"(?:const|let|var)\s+(?P<name>[A-Za-z_$][\w$]*)\s*(?::[^=;]+)?=\s*$"
)


@dataclass(frozen=True)
class CallSite:
    """One call site: its params plus where it sits in the source."""

    params: Params
    start: int
    end: int
    text: str
    loc: SourceLocation | None = None
    binding: str | None = None
    idx: int = 0


def _const_node(arg: Argument) -> Node:
    value = arg.value
    if value is None:
        return NullLiteral()
    if isinstance(value, bool):
        return BooleanLiteral(value)
    if isinstance(value, float):
        return NumericLiteral(value)
    return StringLiteral(value)


def _expression_value(arg: Argument, imports: Mapping[str, Sequence[str]]) -> ExpressionValue:
    if arg.kind is ValueType.FUNCTION:
        return FunctionValue(ex=RawExpression(arg.source), source=arg.source)
    if arg.kind is ValueType.CONST:
        return ConstValue(ex=_const_node(arg), source=arg.source, value=arg.value)
    if arg.is_identifier:
        return LazyValue(
            ex=Identifier(arg.source),
            source=arg.source,
            imported_from=tuple(imports.get(arg.source, ())),
        )
    return LazyValue(ex=RawExpression(arg.source), source=arg.source)


def _build_params(
    raw: RawCallSite, imports: Mapping[str, Sequence[str]]
) -> Params:
    head = parse_call_head(raw.head)
    params: list[Param] = [CalleeParam(Identifier(head.callee))]
    for op in head.ops:
        if isinstance(op, MemberOp):
            params.append(MemberParam(op.name))
        elif isinstance(op, CallOp):
            params.append(CallParam(tuple(_expression_value(a, imports) for a in op.args)))
    if raw.template is not None:
        params.append(TemplateParam(raw.template))
    return tuple(params)


def parse_call_site(
    text: str,
    imports: Mapping[str, Sequence[str]] | None = None,
    tag: str = "styled",
) -> CallSite:
    """Parse *text* holding exactly one call site."""
    sites = find_call_sites(text, tag=tag, imports=imports)
    if len(sites) != 1:
        raise ParseError(f"Expected exactly one `{tag}` call site, found {len(sites)}")
    return sites[0]


def find_call_sites(
    source: str,
    tag: str = "styled",
    filename: str | None = None,
    imports: Mapping[str, Sequence[str]] | None = None,
    on_error: Callable[[ParseError], None] | None = None,
) -> list[CallSite]:
    """Return every ``tag`` call site of a module in source order.

    *imports* defaults to the module's own import declarations. When
    *on_error* is given, sites whose head cannot be parsed are reported to it
    and skipped instead of raising.
    """
    scanner = Scanner(source, filename)
    if imports is None:
        imports = parse_imports(source)
    sites: list[CallSite] = []
    for idx, raw in enumerate(scanner.find(tag)):
        try:
            params = _build_params(raw, imports)
        except ParseError as exc:
            pos = scanner.position(raw.start)
            error = ParseError(
                f"{filename or '<source>'}:{pos.line}:{pos.column}: {exc}",
                line=pos.line,
                column=pos.column,
            )
            if on_error is None:
                raise error from exc
            on_error(error)
            continue
        binding = _BINDING_RE.search(source, 0, raw.start)
        sites.append(
            CallSite(
                params=params,
                start=raw.start,
                end=raw.end,
                text=source[raw.start:raw.end],
                loc=scanner.location(raw.start, raw.end),
                binding=binding.group("name") if binding else None,
                idx=idx,
            )
        )
    return sites
