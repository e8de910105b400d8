"""Dict-backed store for development and tests.

Dicts preserve insertion order, which gives the catalog its stable order.
Stored objects are copied on the way in and out so callers never hold a
reference into the store.
"""

from __future__ import annotations

import contextlib
import logging
import uuid
from collections.abc import AsyncIterator
from datetime import datetime, timezone
from typing import Any

from schemematch.catalog import SAMPLE_SCHEMES
from schemematch.exceptions import DuplicateProfileError
from schemematch.schemas.eligibility import (
    CitizenProfile,
    CitizenProfileCreate,
    Scheme,
    SchemeCreate,
)
from schemematch.schemas.recommendation import NewRecommendation, Recommendation

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryStore:
    """Implements RecommendationStore, ProfileStore and CatalogStore."""

    def __init__(self) -> None:
        self._profiles: dict[str, CitizenProfile] = {}  # keyed by user_id
        self._schemes: dict[str, Scheme] = {}
        self._recommendations: dict[str, Recommendation] = {}

    # ── Citizen profiles ─────────────────────────────────────────────

    async def get_citizen_profile(self, user_id: str) -> CitizenProfile | None:
        profile = self._profiles.get(user_id)
        return profile.model_copy(deep=True) if profile else None

    async def create_citizen_profile(self, data: CitizenProfileCreate) -> CitizenProfile:
        if data.user_id in self._profiles:
            raise DuplicateProfileError(data.user_id)
        profile = CitizenProfile(id=str(uuid.uuid4()), updated_at=_now(), **data.model_dump())
        self._profiles[data.user_id] = profile
        return profile.model_copy(deep=True)

    async def update_citizen_profile(self, user_id: str, updates: dict[str, Any]) -> CitizenProfile | None:
        existing = self._profiles.get(user_id)
        if existing is None:
            return None
        merged = {**existing.model_dump(), **updates, "updated_at": _now()}
        updated = CitizenProfile.model_validate(merged)
        self._profiles[user_id] = updated
        return updated.model_copy(deep=True)

    # ── Schemes ──────────────────────────────────────────────────────

    async def get_all_schemes(self) -> list[Scheme]:
        return [s.model_copy(deep=True) for s in self._schemes.values() if s.is_active]

    async def get_scheme_by_id(self, scheme_id: str) -> Scheme | None:
        scheme = self._schemes.get(scheme_id)
        return scheme.model_copy(deep=True) if scheme else None

    async def get_schemes_by_category(self, category: str) -> list[Scheme]:
        wanted = category.lower()
        return [s for s in await self.get_all_schemes() if s.category.lower() == wanted]

    async def get_schemes_by_state(self, state: str) -> list[Scheme]:
        return [s for s in await self.get_all_schemes() if s.state is None or s.state == state]

    async def search_schemes(self, query: str) -> list[Scheme]:
        q = query.lower()
        return [
            s
            for s in await self.get_all_schemes()
            if q in s.name.lower() or q in s.description.lower() or q in s.category.lower()
        ]

    async def create_scheme(self, data: SchemeCreate) -> Scheme:
        now = _now()
        scheme = Scheme(id=str(uuid.uuid4()), created_at=now, updated_at=now, **data.model_dump())
        self._schemes[scheme.id] = scheme
        return scheme.model_copy(deep=True)

    async def set_scheme_active(self, scheme_id: str, is_active: bool) -> Scheme | None:
        """Toggle catalog visibility, e.g. when a scheme is withdrawn."""
        scheme = self._schemes.get(scheme_id)
        if scheme is None:
            return None
        updated = scheme.model_copy(update={"is_active": is_active, "updated_at": _now()})
        self._schemes[scheme_id] = updated
        return updated.model_copy(deep=True)

    async def seed_sample_schemes(self) -> list[Scheme]:
        """Load the bundled sample catalog."""
        created = [await self.create_scheme(s) for s in SAMPLE_SCHEMES]
        logger.info("Seeded %d sample schemes", len(created))
        return created

    # ── Recommendations ──────────────────────────────────────────────

    async def get_recommendations_by_user_id(self, user_id: str) -> list[Recommendation]:
        return [r.model_copy() for r in self._recommendations.values() if r.user_id == user_id]

    async def create_recommendation(self, record: NewRecommendation) -> Recommendation:
        rec = Recommendation(id=str(uuid.uuid4()), created_at=_now(), **record.model_dump())
        self._recommendations[rec.id] = rec
        return rec.model_copy()

    async def delete_recommendations_by_user_id(self, user_id: str) -> None:
        stale = [rid for rid, r in self._recommendations.items() if r.user_id == user_id]
        for rid in stale:
            del self._recommendations[rid]

    @contextlib.asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        """Dict writes apply immediately and cannot fail part-way; nothing to undo."""
        yield
