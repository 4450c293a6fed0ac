"""Error and warning types raised while processing styled call sites."""

from __future__ import annotations

from styledpass.model.ast import SourceLocation


class StyledError(Exception):
    """Base class for failures that abort processing of one call site."""

    def __init__(
        self,
        message: str,
        loc: SourceLocation | None = None,
        fix: str | None = None,
    ):
        self.loc = loc
        self.fix = fix
        super().__init__(message)


class InvalidUsageError(StyledError):
    """The call shape is not a supported ``styled`` usage."""


class InterpolationError(StyledError):
    """An interpolated value cannot be inserted into CSS."""


class EvaluationError(InterpolationError):
    """Evaluating an interpolated expression failed with an error."""


class InvalidInterpolationError(InterpolationError):
    """An interpolated expression evaluated to an unusable value."""


class CyclicExtendsError(StyledError):
    """Styled components extend each other in a loop."""


class SkipSignal(Exception):
    """Not a failure: the call site is already processed and must be left alone."""


class UnresolvedImportWarning(UserWarning):
    """An import could not be resolved while checking a components mask."""


class InvalidManifestWarning(UserWarning):
    """A package manifest could not be read while checking a components mask."""
