"""Interpolation records and the context passed to custom id generators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from styledpass.model.ast import Node


@dataclass(frozen=True)
class Interpolation:
    """An expression extracted from a template into a CSS custom property."""

    id: str
    node: Node = field(compare=False)
    source: str
    unit: str = ""


@dataclass(frozen=True)
class VariableContext:
    """Everything a custom ``variable_name_slug`` generator may use.

    ``index`` is an allocator, not a value: calling it consumes the next
    counter value of the owning processor. Generators that never call it
    leave the counter untouched.
    """

    component_name: str
    component_slug: str
    index: Callable[[], int]
    preceding_css: str
    processor: str
    source: str
    unit: str
    value_slug: str

    def slug_values(self) -> dict[str, object]:
        """Placeholder values for template-string generators.

        ``index`` stays a callable so it is only allocated when the template
        actually references ``[index]``.
        """
        return {
            "componentName": self.component_name,
            "componentSlug": self.component_slug,
            "index": self.index,
            "precedingCss": self.preceding_css,
            "processor": self.processor,
            "source": self.source,
            "unit": self.unit,
            "valueSlug": self.value_slug,
        }
