"""Profile service — citizen profile writes and their recommendation triggers.

Creating a profile generates the first recommendation set; updating one
refreshes it. Both triggers are best-effort: a failed recommendation run is
logged and reported as an event. It runs inside a store savepoint, so its
partial writes are discarded while the profile write still commits.
"""

from __future__ import annotations

import logging

from schemematch.events import EventBus
from schemematch.exceptions import SchemeMatchError
from schemematch.recommendations.engine import RecommendationEngine
from schemematch.schemas.eligibility import CitizenProfile, CitizenProfileCreate, CitizenProfileUpdate
from schemematch.schemas.events import EventType, SystemEvent
from schemematch.store.base import ProfileStore

logger = logging.getLogger(__name__)


class ProfileService:
    """Owns profile writes and fires the recommendation triggers."""

    def __init__(
        self,
        store: ProfileStore,
        engine: RecommendationEngine,
        events: EventBus | None = None,
    ) -> None:
        self.store = store
        self.engine = engine
        self.events = events

    async def get_profile(self, user_id: str) -> CitizenProfile | None:
        return await self.store.get_citizen_profile(user_id)

    async def create_profile(self, data: CitizenProfileCreate) -> CitizenProfile:
        """Create the user's profile, then generate initial recommendations.

        Raises:
            DuplicateProfileError: the user already has a profile.
        """
        profile = await self.store.create_citizen_profile(data)
        logger.info("Profile created: user=%s state=%s", profile.user_id, profile.state)
        await self._emit(EventType.PROFILE_CREATED, profile)

        try:
            async with self.store.savepoint():
                await self.engine.generate_recommendations(profile.user_id)
        except SchemeMatchError:
            logger.exception("Failed to generate initial recommendations for user=%s", profile.user_id)

        return profile

    async def update_profile(self, user_id: str, updates: CitizenProfileUpdate) -> CitizenProfile | None:
        """Apply a partial update, then refresh recommendations.

        Returns None when the user has no profile.
        """
        changes = updates.changes()
        profile = await self.store.update_citizen_profile(user_id, changes)
        if profile is None:
            return None

        logger.info("Profile updated: user=%s fields=%s", user_id, sorted(changes))
        await self._emit(EventType.PROFILE_UPDATED, profile, {"fields": sorted(changes)})

        try:
            async with self.store.savepoint():
                await self.engine.refresh_recommendations(user_id)
        except SchemeMatchError:
            logger.exception("Failed to refresh recommendations for user=%s", user_id)

        return profile

    async def _emit(self, event_type: EventType, profile: CitizenProfile, data: dict | None = None) -> None:
        if self.events is None:
            return
        await self.events.emit(SystemEvent(
            event_type=event_type,
            user_id=profile.user_id,
            data={"profile_id": profile.id, **(data or {})},
            source_module="profiles.service",
        ))
