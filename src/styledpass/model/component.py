"""What a ``styled(...)`` call site wraps.

A component descriptor is one of:

- :class:`IntrinsicTag` -- a plain string tag such as ``"div"``.
- :class:`FunctionalComponent` -- an inline function with no static name.
- :class:`ComponentReference` -- an identifier; ``is_foreign`` is True when
  the identifier is known *not* to be another styled component.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from styledpass.model.ast import Identifier


@dataclass(frozen=True)
class IntrinsicTag:
    name: str


@dataclass(frozen=True)
class FunctionalComponent:
    pass


@dataclass(frozen=True)
class ComponentReference:
    name: str
    source: str
    is_foreign: bool = False
    node: Identifier | None = field(default=None, compare=False)


ComponentDescriptor = Union[IntrinsicTag, FunctionalComponent, ComponentReference]


def describe_kind(component: ComponentDescriptor) -> str:
    """Short label for a descriptor, used in CLI listings."""
    if isinstance(component, IntrinsicTag):
        return f"tag {component.name!r}"
    if isinstance(component, FunctionalComponent):
        return "function"
    if isinstance(component, ComponentReference):
        return "foreign component" if component.is_foreign else "styled component"
    raise TypeError(f"Unknown component descriptor: {component!r}")
