"""Typed errors surfaced by the recommendation core.

The evaluator never raises; everything here originates in the engine,
the profile service or a store adapter.
"""

from __future__ import annotations

from typing import Any


class SchemeMatchError(Exception):
    """Base class for all SchemeMatch errors."""


class NotFoundError(SchemeMatchError):
    """A required record does not exist. Propagated, never retried."""


class ProfileNotFoundError(NotFoundError):
    """No citizen profile exists for the user."""

    def __init__(self, user_id: Any) -> None:
        self.user_id = user_id
        super().__init__(f"Citizen profile not found for user {user_id}")


class SchemeNotFoundError(NotFoundError):
    """The scheme id does not resolve in the catalog."""

    def __init__(self, scheme_id: Any) -> None:
        self.scheme_id = scheme_id
        super().__init__(f"Scheme not found: {scheme_id}")


class DuplicateProfileError(SchemeMatchError):
    """A user may own exactly one citizen profile."""

    def __init__(self, user_id: Any) -> None:
        self.user_id = user_id
        super().__init__(f"Citizen profile already exists for user {user_id}")


class TransientStoreError(SchemeMatchError):
    """An I/O failure against the collaborating store.

    The engine does not retry; retry policy belongs to the caller.
    """
