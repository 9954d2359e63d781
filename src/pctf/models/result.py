"""Uniform result envelope returned by every mutating operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from pctf.errors import PCTFError


@dataclass(frozen=True)
class ProcessResult:
    """Result of a registry or framework operation.

    On failure ``errors`` holds every issue found and ``error_type``
    names the error class, so callers can branch without parsing text.
    """
    success: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, message: str, **data: Any) -> ProcessResult:
        return cls(success=True, message=message, data=data)

    @classmethod
    def from_error(
        cls,
        error: Exception,
        message: Optional[str] = None,
    ) -> ProcessResult:
        """Convert a raised error into a failed envelope.

        Taxonomy errors carry their own message and issue list; anything
        else is reported under ``message`` with its text as the only error.
        """
        if isinstance(error, PCTFError):
            errors = list(error.issues)
            message = message or error.message
        else:
            errors = [str(error) or type(error).__name__]
            message = message or "Operation failed"
        return cls(
            success=False,
            message=message,
            errors=errors,
            error_type=type(error).__name__,
        )
