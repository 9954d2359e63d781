"""Error taxonomy for registry and framework operations.

Internals raise these. Every public operation catches them at its own
boundary and reports them in a failed ProcessResult; none escape to the
caller as an unhandled fault.
"""

from __future__ import annotations

from typing import Iterable


class PCTFError(Exception):
    """Base class. ``issues`` is what lands in ProcessResult.errors."""

    message = "Operation failed"

    def __init__(self, detail: str | None = None, issues: Iterable[str] = ()) -> None:
        self.issues: list[str] = list(issues)
        if detail is None:
            detail = self.issues[0] if self.issues else self.message
        if not self.issues:
            self.issues = [detail]
        super().__init__(detail)


class ValidationError(PCTFError):
    """Missing or malformed input."""
    message = "Invalid input"


class DuplicateError(PCTFError):
    """Participant id already registered."""
    message = "Participant already registered"


class NotFoundError(PCTFError):
    """Unknown participant or registry entry."""
    message = "Participant not found"


class CertificationError(PCTFError):
    """One or more certifications are invalid or expired; blocks registration."""
    message = "Certification validation failed"


class IntegrityError(PCTFError):
    """Corrupted registry state found by the maintenance sweep."""
    message = "Registry integrity validation failed"
