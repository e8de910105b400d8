"""Storage contracts the recommendation core depends on.

The engine only needs RecommendationStore; the profile service and the
HTTP layer additionally use ProfileStore and CatalogStore.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol

from schemematch.schemas.eligibility import (
    CitizenProfile,
    CitizenProfileCreate,
    Scheme,
    SchemeCreate,
)
from schemematch.schemas.recommendation import NewRecommendation, Recommendation


class RecommendationStore(Protocol):
    """Read/write interface used by the RecommendationEngine."""

    async def get_citizen_profile(self, user_id: str) -> CitizenProfile | None: ...

    async def get_all_schemes(self) -> list[Scheme]:
        """Active schemes only, in catalog insertion order."""
        ...

    async def get_scheme_by_id(self, scheme_id: str) -> Scheme | None: ...

    async def delete_recommendations_by_user_id(self, user_id: str) -> None: ...

    async def create_recommendation(self, record: NewRecommendation) -> Recommendation: ...

    async def get_recommendations_by_user_id(self, user_id: str) -> list[Recommendation]: ...

    def savepoint(self) -> AbstractAsyncContextManager[None]:
        """Scope whose writes are discarded when it raises; outer writes survive."""
        ...


class ProfileStore(Protocol):
    """Profile writes. A user owns at most one profile."""

    async def get_citizen_profile(self, user_id: str) -> CitizenProfile | None: ...

    async def create_citizen_profile(self, data: CitizenProfileCreate) -> CitizenProfile: ...

    async def update_citizen_profile(self, user_id: str, updates: dict[str, Any]) -> CitizenProfile | None:
        """Apply a partial update. Returns None when the user has no profile."""
        ...

    def savepoint(self) -> AbstractAsyncContextManager[None]: ...


class CatalogStore(Protocol):
    """Catalog reads and administrative seeding."""

    async def get_all_schemes(self) -> list[Scheme]: ...

    async def get_scheme_by_id(self, scheme_id: str) -> Scheme | None: ...

    async def get_schemes_by_category(self, category: str) -> list[Scheme]: ...

    async def get_schemes_by_state(self, state: str) -> list[Scheme]: ...

    async def search_schemes(self, query: str) -> list[Scheme]: ...

    async def create_scheme(self, data: SchemeCreate) -> Scheme: ...


class Store(RecommendationStore, ProfileStore, CatalogStore, Protocol):
    """Everything a full backend provides."""
