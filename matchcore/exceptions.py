"""
Error types raised by the scoring engine and its boundaries.

Only two kinds are surfaced to callers of the engine itself:
- MissingProfileData: a personality vector is absent (fatal, never retried)
- InvalidInput: malformed identifiers or profile values at a boundary

ProfileNotFound belongs to the profile-store boundary used by the service.
"""

from typing import Iterable


class MatchcoreError(Exception):
    """Base class for all matchcore errors."""


class InvalidInput(MatchcoreError, ValueError):
    """Raised when identifiers or profile values are malformed."""


class MissingProfileData(MatchcoreError):
    """
    Raised when a compatibility score cannot be computed.

    Attributes:
        user_ids: Identifiers of the profiles lacking a personality vector
    """

    def __init__(self, user_ids: Iterable[str]):
        self.user_ids = list(user_ids)
        joined = ", ".join(self.user_ids) if self.user_ids else "unknown"
        super().__init__(f"Missing personality profile for: {joined}")


class ProfileNotFound(MatchcoreError):
    """Raised by a profile store when a requested user does not exist."""

    def __init__(self, user_ids: Iterable[str]):
        self.user_ids = list(user_ids)
        super().__init__(f"Profiles not found: {', '.join(self.user_ids)}")
