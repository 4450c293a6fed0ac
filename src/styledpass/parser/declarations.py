"""Regex-based extraction of module-level declarations.

Only the declarations the styled processor needs are recognised::

    import Button, { Link as A, Card } from "./components";
    import * as ui from "ui-kit";
    const { Box } = require("layout");
    const size = 12;
"""

from __future__ import annotations

import re

__all__ = ["parse_imports", "parse_constants"]

_IMPORT_RE = re.compile(
    r"""
    \bimport\s+
    (?:type\s+)?
    (?P<clause>[\w$\s{},*]+?)    # what is imported
    \s+from\s+
    (?P<quote>['"])(?P<source>[^'"]+)(?P=quote)
    """,
    re.VERBOSE,
)

_REQUIRE_RE = re.compile(
    r"""
    \b(?:const|let|var)\s+
    (?P<target>[\w$]+|\{[^}]*\})  # binding or destructuring pattern
    \s*=\s*require\(\s*
    (?P<quote>['"])(?P<source>[^'"]+)(?P=quote)
    \s*\)
    """,
    re.VERBOSE,
)

_CONSTANT_RE = re.compile(
    r"""
    ^[ \t]*(?:export\s+)?(?:const|let|var)\s+
    (?P<name>[A-Za-z_$][\w$]*)
    \s*=\s*
    (?P<value>-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*')
    \s*;?[ \t]*$
    """,
    re.VERBOSE | re.MULTILINE,
)


def _named_bindings(body: str, alias_sep: str) -> list[str]:
    """Local names from ``a, b as c`` (imports) or ``a, b: c`` (destructuring)."""
    names: list[str] = []
    for part in body.split(","):
        part = part.strip()
        if not part:
            continue
        if alias_sep in part:
            part = part.split(alias_sep, 1)[1].strip()
        if part.startswith("type "):
            part = part[5:].strip()
        names.append(part)
    return names


def _import_clause_names(clause: str) -> list[str]:
    names: list[str] = []
    braces = re.search(r"\{([^}]*)\}", clause)
    if braces:
        names.extend(_named_bindings(braces.group(1), " as "))
        clause = clause[: braces.start()] + clause[braces.end():]
    for part in clause.split(","):
        part = part.strip()
        if not part:
            continue
        if part.startswith("*"):
            names.append(part.split(" as ", 1)[1].strip())
        else:
            names.append(part)
    return names


def parse_imports(source: str) -> dict[str, list[str]]:
    """Map every imported local name to the module specifiers it comes from."""
    imports: dict[str, list[str]] = {}

    def add(name: str, specifier: str) -> None:
        sources = imports.setdefault(name, [])
        if specifier not in sources:
            sources.append(specifier)

    for match in _IMPORT_RE.finditer(source):
        for name in _import_clause_names(match.group("clause")):
            add(name, match.group("source"))

    for match in _REQUIRE_RE.finditer(source):
        target = match.group("target")
        if target.startswith("{"):
            for name in _named_bindings(target[1:-1], ":"):
                add(name, match.group("source"))
        else:
            add(target, match.group("source"))

    return imports


def parse_constants(source: str) -> dict[str, str]:
    """Map module-level ``const name = <number or string>`` to the literal's text."""
    return {m.group("name"): m.group("value") for m in _CONSTANT_RE.finditer(source)}
