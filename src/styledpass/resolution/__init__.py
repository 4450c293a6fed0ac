"""Module, manifest and components-mask lookups used to classify imports."""

from styledpass.resolution.manifest import find_package_json, find_up, read_components_mask
from styledpass.resolution.mask import full_mask, matches_mask
from styledpass.resolution.resolver import resolve_module

__all__ = [
    "resolve_module",
    "find_package_json",
    "find_up",
    "read_components_mask",
    "full_mask",
    "matches_mask",
]
