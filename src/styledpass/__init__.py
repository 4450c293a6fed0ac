"""styledpass: compile ``styled`` tagged templates into CSS rules and wrappers."""

from styledpass.config import StyledOptions, load_options
from styledpass.pipeline import TransformResult, transform_source
from styledpass.processors import StyledProcessor, TaggedTemplateProcessor

__version__ = "0.1.0"

__all__ = [
    "StyledOptions",
    "load_options",
    "StyledProcessor",
    "TaggedTemplateProcessor",
    "TransformResult",
    "transform_source",
    "__version__",
]
