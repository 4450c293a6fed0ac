"""Base class for processors of tagged-template call sites."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Union

from styledpass.codegen import generate
from styledpass.config import StyledOptions
from styledpass.errors import InvalidUsageError, SkipSignal
from styledpass.identifiers import class_name_and_slug
from styledpass.model.ast import (
    ArrowFunctionExpression,
    Node,
    SourceLocation,
    TemplateLiteral,
)
from styledpass.model.interpolation import Interpolation
from styledpass.model.params import ExpressionValue, Params, TemplateParam
from styledpass.model.rule import Rules, ValueCache, get_eval_meta
from styledpass.model.values import to_js_string
from styledpass.validation import throw_if_invalid

logger = logging.getLogger(__name__)

Replacer = Callable[[Node, bool], None]

# A param constraint: a kind name, "*" (anything), "..." (rest ignored),
# or a tuple of allowed kinds.
Constraint = Union[str, tuple[str, ...]]

# CSS units that may directly follow an interpolation, e.g. ``${size}px``.
UNITS = (
    "em", "ex", "cap", "ch", "ic", "rem", "lh", "rlh", "vw", "vh", "vi", "vb",
    "vmin", "vmax", "cm", "mm", "Q", "in", "pt", "pc", "px", "deg", "grad",
    "rad", "turn", "s", "ms", "Hz", "kHz", "dpi", "dpcm", "dppx", "x", "fr",
)
_UNIT_RE = re.compile(r"^(?:(?:" + "|".join(sorted(UNITS, key=len, reverse=True)) + r")\b|%)")


def validate_params(
    params: Params,
    constraints: Sequence[Constraint],
    error: str | type[Exception],
) -> None:
    """Check the shape of *params* against *constraints*.

    Raises ``InvalidUsageError(error)`` when *error* is a message, otherwise
    raises *error* itself (used with :class:`SkipSignal`).
    """

    def fail() -> None:
        if isinstance(error, str):
            raise InvalidUsageError(error)
        raise error()

    if constraints and constraints[-1] != "..." and len(params) != len(constraints):
        fail()

    for i, constraint in enumerate(constraints):
        if constraint == "...":
            return
        if i >= len(params):
            fail()
        kind = params[i].kind
        if constraint == "*":
            continue
        if isinstance(constraint, tuple):
            if kind not in constraint:
                fail()
        elif kind != constraint:
            fail()


def _kebab(name: str) -> str:
    return re.sub(r"[A-Z]", lambda m: "-" + m.group(0).lower(), name)


def _object_to_css(value: Mapping[str, Any]) -> str:
    parts = []
    for key, item in value.items():
        if isinstance(item, Mapping):
            parts.append(f"{key} {{ {_object_to_css(item)} }}")
        else:
            parts.append(f"{_kebab(key)}: {to_js_string(item)};")
    return " ".join(parts)


class TaggedTemplateProcessor(ABC):
    """Shared state and behaviour of ``tag`...` `` processors.

    Subclasses decide how interpolations are named and what replaces the call
    site. The pipeline creates one instance per call site and finalises it
    with exactly one of :meth:`do_evaltime_replacement` or
    :meth:`do_runtime_replacement`.
    """

    def __init__(
        self,
        params: Params,
        *,
        display_name: str,
        idx: int = 0,
        options: StyledOptions | None = None,
        filename: str | None = None,
        location: SourceLocation | None = None,
        replacer: Replacer | None = None,
    ) -> None:
        validate_params(params, ("callee", "template"), SkipSignal)
        template_param = params[1]
        if not isinstance(template_param, TemplateParam):
            raise SkipSignal()

        self.callee: Node = params[0].node  # type: ignore[union-attr]
        self.template: TemplateLiteral = template_param.template
        self.options = options or StyledOptions()
        self.filename = filename
        self.location = location
        self.display_name = display_name
        self.class_name, self.slug = class_name_and_slug(
            display_name, idx, self.options, filename
        )

        self.dependencies: list[ExpressionValue] = []
        self.interpolations: list[Interpolation] = []
        self.css_text: str | None = None
        self.replacement: Node | None = None
        self.replacement_is_pure = False
        self._replacer = replacer

    # ---- identity ----

    @property
    def as_selector(self) -> str:
        return f".{self.class_name}"

    def tag_source_code(self) -> str:
        return generate(self.callee)

    # ---- template ----

    @abstractmethod
    def add_interpolation(
        self, node: Node, preceding_css: str, source: str, unit: str = ""
    ) -> str:
        raise NotImplementedError

    def build(
        self,
        value_cache: ValueCache,
        expression_values: Mapping[int, Any] | None = None,
    ) -> Rules:
        """Render the template to CSS text and extract the rules.

        *expression_values* maps a template expression's index to its
        evaluated value. Expressions without a value, or whose value is a
        function, become CSS custom properties; styled components become
        their selector; anything else is validated and inlined.
        """
        if self.css_text is not None:
            raise RuntimeError(f"{self} is already built")
        values = expression_values or {}
        quasis = [q.value for q in self.template.quasis]
        css = ""
        for i, expr in enumerate(self.template.expressions):
            css += quasis[i]
            source = generate(expr)
            if i not in values or callable(values[i]):
                unit = ""
                match = _UNIT_RE.match(quasis[i + 1])
                if match:
                    unit = match.group(0)
                    quasis[i + 1] = quasis[i + 1][len(unit):]
                thunk = ArrowFunctionExpression((), expr, loc=expr.loc)
                var_id = self.add_interpolation(thunk, css, source, unit)
                css += f"var(--{var_id})"
                continue

            value = values[i]
            meta = get_eval_meta(value)
            if meta is not None:
                css += f".{meta.class_name}"
                continue
            throw_if_invalid(value, expr)
            if isinstance(value, Mapping):
                css += _object_to_css(value)
            else:
                css += to_js_string(value)
        css += quasis[-1]

        self.css_text = css
        logger.debug("Built %s: %d interpolation(s)", self, len(self.interpolations))
        return self.extract_rules(value_cache, css, self.location)

    @abstractmethod
    def extract_rules(
        self, value_cache: ValueCache, css_text: str, loc: SourceLocation | None
    ) -> Rules:
        raise NotImplementedError

    # ---- replacement ----

    @property
    @abstractmethod
    def value(self) -> Node:
        raise NotImplementedError

    def replacer(self, node: Node, is_pure: bool) -> None:
        if self.replacement is not None:
            raise RuntimeError(f"{self} is already replaced")
        self.replacement = node
        self.replacement_is_pure = is_pure
        if self._replacer is not None:
            self._replacer(node, is_pure)

    @abstractmethod
    def do_evaltime_replacement(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def do_runtime_replacement(self) -> None:
        raise NotImplementedError
