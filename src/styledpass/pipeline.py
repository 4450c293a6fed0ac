"""Run the styled processor over every call site of one module.

Two modes mirror the two passes of the compiler:

- ``eval``: rules are extracted as in ``runtime`` mode, but each call site
  is replaced by its eval-time metadata object.
- ``runtime``: metadata is evaluated statically into a value cache, each
  template is built into CSS (recording interpolations), rules are
  extracted, and each call site is replaced by its runtime wrapper.

A failure in one call site is reported as a diagnostic and leaves that site
untouched; the other sites are still processed.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any

from styledpass.codegen import generate
from styledpass.config import StyledOptions
from styledpass.errors import (
    EvaluationError,
    InvalidInterpolationError,
    InvalidManifestWarning,
    InvalidUsageError,
    SkipSignal,
    StyledError,
    UnresolvedImportWarning,
)
from styledpass.evaluator import Evaluator, NotEvaluable
from styledpass.model.ast import Position, RawExpression, SourceLocation
from styledpass.model.diagnostic import Diagnostic, Severity
from styledpass.model.rule import Rules
from styledpass.parser import CallSite, ParseError, find_call_sites, parse_constants, parse_imports
from styledpass.processors.styled import StyledProcessor

__all__ = ["TransformResult", "ProcessedSite", "transform_source", "MODES"]

logger = logging.getLogger(__name__)

MODES = ("runtime", "eval")

_ERROR_CODES: dict[type[StyledError], str] = {
    InvalidUsageError: "invalid-usage",
    EvaluationError: "evaluation-error",
    InvalidInterpolationError: "invalid-interpolation",
}

_WARNING_CODES: dict[type[Warning], str] = {
    UnresolvedImportWarning: "unresolved-import",
    InvalidManifestWarning: "invalid-manifest",
}


@dataclass
class ProcessedSite:
    """A call site together with the processor created for it."""

    site: CallSite
    processor: StyledProcessor


@dataclass
class TransformResult:
    code: str
    rules: Rules = field(default_factory=dict)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    sites: list[ProcessedSite] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self.diagnostics)

    @property
    def css(self) -> str:
        """All extracted rules rendered as a stylesheet."""
        return "\n".join(f"{rule.selector} {{{rule.css_text}}}" for rule in self.rules.values())


def _error_code(exc: StyledError) -> str:
    for cls in type(exc).__mro__:
        if cls in _ERROR_CODES:
            return _ERROR_CODES[cls]
    # CyclicExtendsError -> cyclic-extends-error
    name = type(exc).__name__
    return "".join("-" + ch.lower() if ch.isupper() else ch for ch in name).lstrip("-")


def _error_diagnostic(exc: StyledError, site: CallSite) -> Diagnostic:
    return Diagnostic(
        code=_error_code(exc),
        severity=Severity.ERROR,
        message=str(exc),
        loc=exc.loc or site.loc,
        fix=exc.fix,
    )


def _default_display_name(filename: str | None, idx: int) -> str:
    stem = PurePath(filename).stem if filename else "styled"
    return f"{stem}{idx}"


def _create_processor(
    site: CallSite,
    options: StyledOptions,
    filename: str | None,
    diagnostics: list[Diagnostic],
) -> StyledProcessor | None:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            processor = StyledProcessor(
                site.params,
                display_name=site.binding or _default_display_name(filename, site.idx),
                idx=site.idx,
                options=options,
                filename=filename,
                location=site.loc,
            )
        except SkipSignal:
            logger.debug("Skipping already processed call site at %s", site.loc)
            processor = None
        except StyledError as exc:
            logger.warning("%s: %s", site.loc, exc)
            diagnostics.append(_error_diagnostic(exc, site))
            processor = None

    for warning in caught:
        logger.warning("%s: %s", site.loc, warning.message)
        diagnostics.append(
            Diagnostic(
                code=_WARNING_CODES.get(warning.category, "warning"),
                severity=Severity.WARNING,
                message=str(warning.message),
                loc=site.loc,
            )
        )
    return processor


def _splice(source: str, processed: list[ProcessedSite]) -> str:
    parts: list[str] = []
    cursor = 0
    for item in sorted(processed, key=lambda p: p.site.start):
        replacement = item.processor.replacement
        if replacement is None:
            continue
        parts.append(source[cursor:item.site.start])
        parts.append(generate(replacement))
        cursor = item.site.end
    parts.append(source[cursor:])
    return "".join(parts)


def _expression_values(processor: StyledProcessor, evaluator: Evaluator) -> dict[int, Any]:
    values: dict[int, Any] = {}
    for i, expr in enumerate(processor.template.expressions):
        try:
            values[i] = evaluator.evaluate(expr)
        except NotEvaluable:
            continue
    return values


def transform_source(
    source: str,
    filename: str | None = None,
    options: StyledOptions | None = None,
    mode: str = "runtime",
) -> TransformResult:
    """Process every styled call site of *source*."""
    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r}; expected one of {', '.join(MODES)}")
    options = options or StyledOptions()
    diagnostics: list[Diagnostic] = []

    def on_parse_error(exc: ParseError) -> None:
        loc = None
        if exc.line is not None:
            loc = SourceLocation(Position(exc.line, exc.column or 0), filename=filename)
        diagnostics.append(
            Diagnostic(code="parse-error", severity=Severity.ERROR, message=str(exc), loc=loc)
        )

    try:
        sites = find_call_sites(
            source,
            tag=options.tag,
            filename=filename,
            imports=parse_imports(source),
            on_error=on_parse_error,
        )
    except ParseError as exc:
        # The module itself could not be scanned; leave it untouched.
        logger.warning("%s: %s", filename or "<source>", exc)
        on_parse_error(exc)
        return TransformResult(code=source, diagnostics=diagnostics)

    processed: list[ProcessedSite] = []
    for site in sites:
        processor = _create_processor(site, options, filename, diagnostics)
        if processor is not None:
            processed.append(ProcessedSite(site, processor))

    result = TransformResult(code=source, diagnostics=diagnostics, sites=processed)
    result.dependencies = [
        dep.source for item in processed for dep in item.processor.dependencies
    ]

    evaluator = Evaluator(
        {name: RawExpression(text) for name, text in parse_constants(source).items()}
    )
    for item in processed:
        if item.site.binding:
            evaluator.bind(item.site.binding, item.processor.value)
    value_cache = evaluator.values()

    for item in processed:
        processor = item.processor
        try:
            rules = processor.build(value_cache, _expression_values(processor, evaluator))
        except StyledError as exc:
            logger.warning("%s: %s", item.site.loc, exc)
            diagnostics.append(_error_diagnostic(exc, item.site))
            continue
        result.rules.update(rules)
        if mode == "eval":
            processor.do_evaltime_replacement()
        else:
            processor.do_runtime_replacement()

    result.code = _splice(source, processed)
    logger.debug(
        "Processed %d call site(s) in %s: %d rule(s), %d diagnostic(s)",
        len(processed), filename or "<source>", len(result.rules), len(diagnostics),
    )
    return result
