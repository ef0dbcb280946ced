"""Error taxonomy shared by every careercoach service.

Authorization and existence checks fail fast. Provider failures are raised
by :mod:`careercoach.llm.client`; only the transient kind is ever retried.
"""

from __future__ import annotations


class CareerCoachError(Exception):
    """Base class for all user-facing careercoach errors."""


class Unauthorized(CareerCoachError):
    """No authenticated subject was supplied."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class UserNotFound(CareerCoachError):
    """The subject is authenticated but has no user record."""

    def __init__(self, subject: str) -> None:
        self.subject = subject
        super().__init__("User not found")


class GenerationError(CareerCoachError):
    """Content generation failed; the message is safe to show to the user."""


class ProviderTransientError(GenerationError):
    """The provider stayed unavailable for every retry attempt."""


class ProviderQuotaExceeded(GenerationError):
    """The provider refused the request because the quota is exhausted."""

    def __init__(self, message: str, details: str = "") -> None:
        self.details = details
        super().__init__(message)


class ProviderMalformedOutput(GenerationError):
    """The provider answered, but not with the JSON we asked for."""

    def __init__(self, message: str, raw: str = "") -> None:
        self.raw = raw
        super().__init__(message)


class PersistenceError(CareerCoachError):
    """A database operation failed."""
