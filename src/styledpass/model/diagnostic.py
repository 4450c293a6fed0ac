"""Diagnostic model: structured messages about processed call sites."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from styledpass.model.ast import SourceLocation


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about one call site.

    Attributes:
        code: Identifier for the kind of problem (e.g. ``invalid-usage``).
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        loc: Where in the source the problem was found, if known.
        fix: Suggested remediation, if available.
    """

    code: str
    severity: Severity
    message: str
    loc: SourceLocation | None = None
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = f" [{self.loc}]" if self.loc else ""
        return f"{self.severity.value}{location}: {self.message}"
