"""Processor for ``styled`` call sites.

Handles ``styled.tag`...` ``, ``styled("tag")`...` ``,
``styled(Component)`...` `` and ``styled(props => ...)`...` ``.
"""

from __future__ import annotations

import logging
import os
import warnings
from typing import Any

from styledpass.config import StyledOptions
from styledpass.elements import is_known_element
from styledpass.errors import (
    CyclicExtendsError,
    InvalidManifestWarning,
    InvalidUsageError,
    SkipSignal,
    UnresolvedImportWarning,
)
from styledpass.identifiers import build_slug, slugify, to_valid_css_identifier
from styledpass.model.ast import (
    ArrayExpression,
    ArrowFunctionExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Identifier,
    Node,
    NullLiteral,
    ObjectExpression,
    ObjectProperty,
    SourceLocation,
    StringLiteral,
)
from styledpass.model.component import (
    ComponentDescriptor,
    ComponentReference,
    FunctionalComponent,
    IntrinsicTag,
)
from styledpass.model.interpolation import Interpolation, VariableContext
from styledpass.model.params import (
    CallParam,
    ConstValue,
    FunctionValue,
    LazyValue,
    MemberParam,
    Params,
)
from styledpass.model.rule import META_KEY, CssRule, Rules, ValueCache, get_eval_meta
from styledpass.processors.base import Replacer, TaggedTemplateProcessor, validate_params
from styledpass.resolution import (
    find_package_json,
    matches_mask,
    read_components_mask,
    resolve_module,
)

logger = logging.getLogger(__name__)

INVALID_USAGE = "Invalid usage of `styled` tag"


class StyledProcessor(TaggedTemplateProcessor):
    """Turns one ``styled`` call site into eval-time metadata or a runtime wrapper."""

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
        # At least two params and the first one is the callee.
        validate_params(params, ("callee", "*", "..."), SkipSignal)
        validate_params(params, ("callee", ("call", "member"), ("template", "call")), INVALID_USAGE)

        tag, tag_op, template = params
        if template.kind == "call":
            # Already transformed.
            raise SkipSignal()

        super().__init__(
            (tag, template),
            display_name=display_name,
            idx=idx,
            options=options,
            filename=filename,
            location=location,
            replacer=replacer,
        )

        self._variable_idx = 0
        self._variables_cache: dict[tuple[str, str], str] = {}
        self.component: ComponentDescriptor = self._resolve_component(tag_op)
        logger.debug("%s wraps %r", self, self.component)

    # ---- component identity ----

    def _resolve_component(self, tag_op: Any) -> ComponentDescriptor:
        if isinstance(tag_op, MemberParam):
            return IntrinsicTag(tag_op.name)

        if isinstance(tag_op, CallParam) and len(tag_op.args) == 1:
            value = tag_op.args[0]
            if isinstance(value, FunctionValue):
                return FunctionalComponent()
            if isinstance(value, ConstValue):
                if isinstance(value.value, str):
                    return IntrinsicTag(value.value)
            elif isinstance(value, LazyValue) and isinstance(value.ex, Identifier):
                return self._resolve_reference(value, value.ex)

        raise InvalidUsageError(INVALID_USAGE, loc=self.location)

    def _resolve_reference(self, value: LazyValue, ex: Identifier) -> ComponentReference:
        if value.imported_from and not self._is_some_styled(value):
            return ComponentReference(name=ex.name, source=value.source, is_foreign=True, node=ex)
        self.dependencies.append(value)
        return ComponentReference(name=ex.name, source=value.source, node=ex)

    def _is_some_styled(self, value: LazyValue) -> bool:
        """True if at least one import source of *value* is a styled component."""
        self_pkg = find_package_json(".", self.filename) if self.filename else None
        return any(
            self._is_styled_import(specifier, self_pkg, value.source)
            for specifier in value.imported_from
        )

    def _is_styled_import(self, specifier: str, self_pkg: str | None, source: str) -> bool:
        extensions = self.options.extensions
        # Without a manifest of its own the import is treated as local.
        imported_pkg = find_package_json(specifier, self.filename, extensions) or self_pkg
        if imported_pkg is None:
            return False

        try:
            mask = read_components_mask(imported_pkg)
        except (OSError, ValueError) as exc:
            warnings.warn(
                InvalidManifestWarning(
                    f"Can't read {imported_pkg}: {exc}. {source} imported from "
                    f"{specifier} is treated as a non-styled component."
                ),
                stacklevel=2,
            )
            return False
        if imported_pkg == self_pkg and mask is None:
            # Every component of the local package is a styled one.
            return True
        if not mask:
            return False

        basedir = os.path.dirname(os.path.abspath(self.filename)) if self.filename else os.getcwd()
        try:
            component_file = resolve_module(specifier, basedir, extensions)
        except ModuleNotFoundError:
            warnings.warn(
                UnresolvedImportWarning(
                    f"Can't resolve {specifier} from {self.filename}. If {source} is "
                    "another styled component, it should be resolvable with default "
                    "Node.js resolver. If it's not, please exclude it from the "
                    "linaria.components mask in package.json."
                ),
                stacklevel=2,
            )
            return False

        matched = matches_mask(component_file, os.path.dirname(imported_pkg), mask)
        logger.debug("%s %s mask %r", component_file, "matches" if matched else "misses", mask)
        return matched

    # ---- interpolations ----

    def allocate_index(self) -> int:
        """Consume and return the next variable index."""
        index = self._variable_idx
        self._variable_idx += 1
        return index

    def get_variable_context(
        self, source: str, unit: str, preceding_css: str
    ) -> VariableContext:
        return VariableContext(
            component_name=self.display_name,
            component_slug=self.slug,
            index=self.allocate_index,
            preceding_css=preceding_css,
            processor=type(self).__name__,
            source=source,
            unit=unit,
            value_slug=slugify(source + unit),
        )

    def get_custom_variable_id(
        self, source: str, unit: str, preceding_css: str
    ) -> str | None:
        custom = self.options.variable_name_slug
        if not custom:
            return None
        context = self.get_variable_context(source, unit, preceding_css)
        if callable(custom):
            return custom(context)
        return build_slug(custom, context.slug_values())

    def get_variable_id(self, source: str, unit: str, preceding_css: str) -> str:
        key = (source, unit)
        if key not in self._variables_cache:
            custom_id = self.get_custom_variable_id(source, unit, preceding_css)
            if custom_id:
                # Custom ids are not cached; the generator decides.
                return to_valid_css_identifier(custom_id)
            # Unique to this styled component.
            self._variables_cache[key] = f"{self.slug}-{self.allocate_index()}"
        return self._variables_cache[key]

    def add_interpolation(
        self, node: Node, preceding_css: str, source: str, unit: str = ""
    ) -> str:
        var_id = self.get_variable_id(source, unit, preceding_css)
        self.interpolations.append(Interpolation(id=var_id, node=node, source=source, unit=unit))
        return var_id

    # ---- rules ----

    def extract_rules(
        self, value_cache: ValueCache, css_text: str, loc: SourceLocation | None
    ) -> Rules:
        selector = f".{self.class_name}"

        # A wrapped styled component contributes its class names so that our
        # rules win on specificity regardless of declaration order.
        value: Any = None
        component = self.component
        if isinstance(component, ComponentReference) and not component.is_foreign:
            value = value_cache.get(component.name)

        seen: set[int] = set()
        meta = get_eval_meta(value)
        while meta is not None:
            if id(value) in seen:
                raise CyclicExtendsError(
                    f"{self} extends itself through {selector}", loc=loc
                )
            seen.add(id(value))
            selector += f".{meta.class_name}"
            value = meta.extends
            meta = get_eval_meta(value)

        return {
            selector: CssRule(
                selector=selector,
                css_text=css_text,
                class_name=self.class_name,
                display_name=self.display_name,
                start=loc.start if loc else None,
            )
        }

    # ---- code generation ----

    @property
    def value(self) -> ObjectExpression:
        """Eval-time metadata: ``{displayName, __wyw_meta: {className, extends}}``."""
        component = self.component
        extends: Node = NullLiteral()
        if isinstance(component, ComponentReference) and not component.is_foreign:
            extends = CallExpression(Identifier(component.name))

        return ObjectExpression((
            ObjectProperty(StringLiteral("displayName"), StringLiteral(self.display_name)),
            ObjectProperty(
                StringLiteral(META_KEY),
                ObjectExpression((
                    ObjectProperty(StringLiteral("className"), StringLiteral(self.class_name)),
                    ObjectProperty(StringLiteral("extends"), extends),
                )),
            ),
        ))

    @property
    def tag_expression_argument(self) -> Node:
        component = self.component
        if isinstance(component, FunctionalComponent):
            return ArrowFunctionExpression((), BlockStatement())
        if isinstance(component, IntrinsicTag):
            return StringLiteral(component.name, quote="'")
        if isinstance(component, ComponentReference):
            return Identifier(component.name)
        raise TypeError(f"Unknown component descriptor: {component!r}")

    @property
    def tag_expression(self) -> CallExpression:
        return CallExpression(self.callee, (self.tag_expression_argument,))

    def get_props(self) -> dict[str, Any]:
        component = self.component
        props: dict[str, Any] = {
            "name": self.display_name,
            "class": self.class_name,
            "propsAsIs": not (
                isinstance(component, IntrinsicTag) and is_known_element(component.name)
            ),
        }

        # Interpolations become CSS variables set by the runtime wrapper.
        if self.interpolations:
            variables: dict[str, list[Node]] = {}
            for interpolation in self.interpolations:
                items: list[Node] = [CallExpression(interpolation.node)]
                if interpolation.unit:
                    items.append(StringLiteral(interpolation.unit))
                variables[interpolation.id] = items
            props["vars"] = variables

        return props

    def get_tag_component_props(self, props: dict[str, Any]) -> ObjectExpression:
        properties = []
        for key, value in props.items():
            if value is None:
                node: Node = NullLiteral()
            elif isinstance(value, bool):
                node = BooleanLiteral(value)
            elif isinstance(value, str):
                node = StringLiteral(value)
            else:
                node = ObjectExpression(tuple(
                    ObjectProperty(StringLiteral(name), ArrayExpression(tuple(items)))
                    for name, items in value.items()
                ))
            properties.append(ObjectProperty(Identifier(key), node))
        return ObjectExpression(tuple(properties))

    def do_evaltime_replacement(self) -> None:
        self.replacer(self.value, False)

    def do_runtime_replacement(self) -> None:
        props = self.get_tag_component_props(self.get_props())
        self.replacer(CallExpression(self.tag_expression, (props,)), True)

    # ---- diagnostics ----

    def __str__(self) -> str:
        component = self.component

        def res(arg: str) -> str:
            return f"{self.tag_source_code()}({arg})`…`"

        if isinstance(component, FunctionalComponent):
            return res("() => {…}")
        if isinstance(component, IntrinsicTag):
            return res(f"'{component.name}'")
        return res(component.source)
