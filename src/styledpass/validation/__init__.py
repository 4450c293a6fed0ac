from styledpass.validation.interpolation import (
    is_serializable,
    throw_if_invalid,
    validate_interpolation,
)

__all__ = ["is_serializable", "throw_if_invalid", "validate_interpolation"]
