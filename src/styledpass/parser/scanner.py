"""Locate tagged-template call sites in JavaScript source.

The scanner only understands as much JavaScript as it needs to find call
site boundaries: strings, comments, template literals and balanced
brackets. The head of each site is handed to the Lark grammar and the
template is split into literal chunks and ``${...}`` expressions here.
"""

from __future__ import annotations

import bisect
import re
from dataclasses import dataclass

from styledpass.model.ast import (
    Position,
    RawExpression,
    SourceLocation,
    TemplateElement,
    TemplateLiteral,
)
from styledpass.parser.errors import ParseError

_NAME_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_CLOSERS = {"(": ")", "[": "]", "{": "}"}


@dataclass(frozen=True)
class RawCallSite:
    """Offsets and pieces of one call site found by :class:`Scanner`."""

    start: int
    end: int
    head: str
    template: TemplateLiteral | None


class Scanner:
    def __init__(self, source: str, filename: str | None = None) -> None:
        self.source = source
        self.filename = filename
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", source)]

    # ---- positions ----

    def position(self, offset: int) -> Position:
        line = bisect.bisect_right(self._line_starts, offset)
        return Position(line=line, column=offset - self._line_starts[line - 1])

    def location(self, start: int, end: int) -> SourceLocation:
        return SourceLocation(
            start=self.position(start), end=self.position(end), filename=self.filename
        )

    def _error(self, message: str, offset: int) -> ParseError:
        pos = self.position(offset)
        return ParseError(message, line=pos.line, column=pos.column)

    # ---- skipping ----

    def skip_ws(self, i: int) -> int:
        source = self.source
        while i < len(source):
            if source[i].isspace():
                i += 1
            elif source.startswith("//", i) or source.startswith("/*", i):
                i = self.skip_comment(i)
            else:
                break
        return i

    def skip_comment(self, i: int) -> int:
        if self.source.startswith("//", i):
            end = self.source.find("\n", i)
            return len(self.source) if end == -1 else end + 1
        end = self.source.find("*/", i + 2)
        if end == -1:
            raise self._error("Unterminated comment", i)
        return end + 2

    def skip_string(self, i: int) -> int:
        source = self.source
        quote = source[i]
        i += 1
        while i < len(source):
            ch = source[i]
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                return i + 1
            if ch == "\n":
                break
            i += 1
        raise self._error("Unterminated string literal", i)

    def skip_template(self, i: int) -> int:
        source = self.source
        i += 1
        while i < len(source):
            ch = source[i]
            if ch == "\\":
                i += 2
            elif ch == "`":
                return i + 1
            elif source.startswith("${", i):
                i = self.skip_balanced(i + 1)
            else:
                i += 1
        raise self._error("Unterminated template literal", i)

    def skip_balanced(self, i: int) -> int:
        """Skip from an opening bracket at *i* to just past its closer."""
        source = self.source
        stack = [_CLOSERS[source[i]]]
        i += 1
        while i < len(source):
            ch = source[i]
            if ch in "'\"":
                i = self.skip_string(i)
            elif ch == "`":
                i = self.skip_template(i)
            elif source.startswith("//", i) or source.startswith("/*", i):
                i = self.skip_comment(i)
            elif ch in _CLOSERS:
                stack.append(_CLOSERS[ch])
                i += 1
            elif ch in ")]}":
                if ch != stack.pop():
                    raise self._error(f"Unbalanced {ch!r}", i)
                i += 1
                if not stack:
                    return i
            else:
                i += 1
        raise self._error("Unbalanced brackets", i)

    # ---- templates ----

    def read_template(self, i: int) -> tuple[TemplateLiteral, int]:
        """Split the template literal starting at *i* into quasis and expressions."""
        source = self.source
        quasis: list[TemplateElement] = []
        expressions: list[RawExpression] = []
        start = i
        chunk_start = i + 1
        i += 1
        while i < len(source):
            ch = source[i]
            if ch == "\\":
                i += 2
            elif ch == "`":
                quasis.append(TemplateElement(source[chunk_start:i]))
                literal = TemplateLiteral(
                    tuple(quasis), tuple(expressions), loc=self.location(start, i + 1)
                )
                return literal, i + 1
            elif source.startswith("${", i):
                quasis.append(TemplateElement(source[chunk_start:i]))
                expr_end = self.skip_balanced(i + 1)
                expr_start = i + 2
                text = source[expr_start:expr_end - 1]
                expressions.append(
                    RawExpression(text.strip(), loc=self.location(expr_start, expr_end - 1))
                )
                i = chunk_start = expr_end
            else:
                i += 1
        raise self._error("Unterminated template literal", start)

    # ---- call sites ----

    def read_call_site(self, start: int, tag: str) -> RawCallSite | None:
        """Read a call site whose callee *tag* starts at *start*, if there is one."""
        source = self.source
        i = start + len(tag)
        op_count = 0
        last_was_call = False
        head_end = i
        while True:
            j = self.skip_ws(i)
            if j >= len(source):
                break
            ch = source[j]
            if ch == "`":
                template, end = self.read_template(j)
                return RawCallSite(start, end, source[start:head_end], template)
            if ch == ".":
                match = _NAME_RE.match(source, self.skip_ws(j + 1))
                if not match:
                    break
                i = head_end = match.end()
                last_was_call = False
            elif ch == "(":
                i = head_end = self.skip_balanced(j)
                last_was_call = True
            else:
                break
            op_count += 1

        if op_count >= 2 and last_was_call:
            # Already transformed: tag(...)(...) with no template.
            return RawCallSite(start, head_end, source[start:head_end], None)
        return None

    def find(self, tag: str) -> list[RawCallSite]:
        """Return every call site of *tag* outside strings and comments."""
        source = self.source
        tag_re = re.compile(r"(?<![\w$.])" + re.escape(tag) + r"(?![\w$])")
        sites: list[RawCallSite] = []
        i = 0
        while i < len(source):
            ch = source[i]
            if ch in "'\"":
                i = self.skip_string(i)
            elif ch == "`":
                i = self.skip_template(i)
            elif source.startswith("//", i) or source.startswith("/*", i):
                i = self.skip_comment(i)
            elif tag_re.match(source, i):
                site = self.read_call_site(i, tag)
                if site is None:
                    i += len(tag)
                else:
                    sites.append(site)
                    i = site.end
            else:
                i += 1
        return sites
