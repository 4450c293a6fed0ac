"""Call-site processors."""

from styledpass.processors.base import TaggedTemplateProcessor, validate_params
from styledpass.processors.styled import StyledProcessor

__all__ = [
    "TaggedTemplateProcessor",
    "StyledProcessor",
    "validate_params",
]
