"""Error types raised or reported by the planning engine."""

from __future__ import annotations


class WorkforceError(Exception):
    """Base class for all planning engine errors."""
    pass


class ConfigurationError(WorkforceError):
    """
    Staffing parameters that cannot produce a meaningful result.

    The capacity path collects these on its result instead of raising them,
    so the caller can display the cause next to the clamped numbers.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field
        self.message = message

    def __repr__(self) -> str:
        return f"<ConfigurationError(field={self.field!r}, message={self.message!r})>"


class ValidationError(WorkforceError, ValueError):
    """Input rejected at the point of the call; nothing was mutated."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.code = code
        self.message = message
