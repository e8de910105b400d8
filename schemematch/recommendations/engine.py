"""Recommendation engine — ranks the scheme catalog for one citizen.

Orchestrates the EligibilityEvaluator over every active scheme, keeps the
top candidates and fully replaces the user's persisted recommendation set.
All operations are keyed by user; the engine serializes work per user so a
reader never observes a half-replaced set.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from dataclasses import dataclass

from schemematch.eligibility import EligibilityEvaluator
from schemematch.events import EventBus
from schemematch.exceptions import ProfileNotFoundError, SchemeNotFoundError, TransientStoreError
from schemematch.models.enums import EligibilityStatus
from schemematch.schemas.eligibility import CitizenProfile, EligibilityResult, Scheme
from schemematch.schemas.events import EventType, SystemEvent
from schemematch.schemas.recommendation import (
    NewRecommendation,
    Recommendation,
    RecommendationWithScheme,
)
from schemematch.store.base import RecommendationStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 10
DEFAULT_MIN_SCORE = 0

ELIGIBLE_REASON = "You are eligible for this scheme."
PARTIALLY_ELIGIBLE_REASON = "You are partially eligible for this scheme."


@dataclass
class _Candidate:
    scheme: Scheme
    result: EligibilityResult


def status_for(result: EligibilityResult) -> EligibilityStatus:
    return EligibilityStatus.ELIGIBLE if result.eligible else EligibilityStatus.PARTIALLY_ELIGIBLE


def reason_for(result: EligibilityResult) -> str:
    return ELIGIBLE_REASON if result.eligible else PARTIALLY_ELIGIBLE_REASON


class RecommendationEngine:
    """Generates, reads and refreshes a user's ranked recommendations.

    Args:
        store: Collaborating store (see RecommendationStore).
        evaluator: Scores one (profile, scheme) pair.
        max_results: Top-N cap applied before the zero-score filter.
        min_score: Candidates scoring at or below this are never persisted.
        events: Optional bus for RECOMMENDATIONS_* events.
        locks: Per-user lock registry, shared when engines are built per request.
            Entries disappear once no operation holds or awaits the lock.
    """

    def __init__(
        self,
        store: RecommendationStore,
        evaluator: EligibilityEvaluator,
        *,
        max_results: int = DEFAULT_MAX_RESULTS,
        min_score: int = DEFAULT_MIN_SCORE,
        events: EventBus | None = None,
        locks: weakref.WeakValueDictionary[str, asyncio.Lock] | None = None,
    ) -> None:
        self.store = store
        self.evaluator = evaluator
        self.max_results = max_results
        self.min_score = min_score
        self.events = events
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            locks if locks is not None else weakref.WeakValueDictionary()
        )

    # ── Public API ───────────────────────────────────────────────────

    async def generate_recommendations(self, user_id: str) -> list[RecommendationWithScheme]:
        """Score the catalog and fully replace the user's recommendation set.

        Raises:
            ProfileNotFoundError: the user has no citizen profile.
            TransientStoreError: a store call failed. When the failure happens
                before the old set is deleted, that set is left untouched; on a
                transactional store a failure during the replace is rolled back.
        """
        async with self._lock_for(user_id):
            return await self._generate(user_id)

    async def refresh_recommendations(self, user_id: str) -> list[RecommendationWithScheme]:
        """Discard the current set and regenerate from the current profile.

        The old set is deleted only after the new one is computed, so a failed
        profile or catalog read leaves it in place.
        """
        logger.info("Refreshing recommendations for user=%s", user_id)
        async with self._lock_for(user_id):
            return await self._generate(user_id)

    async def get_user_recommendations(self, user_id: str) -> list[RecommendationWithScheme]:
        """Persisted recommendations joined with the current catalog.

        The stored score is kept as the ranking signal; status and detail
        are recomputed against the profile as it is now. Rows whose scheme
        no longer resolves, or has been deactivated, are dropped.
        """
        async with self._lock_for(user_id):
            rows = await self.store.get_recommendations_by_user_id(user_id)
            profile = await self.store.get_citizen_profile(user_id) if rows else None

            enriched: list[RecommendationWithScheme] = []
            for rec in rows:
                scheme = await self.store.get_scheme_by_id(rec.scheme_id)
                if scheme is None or not scheme.is_active:
                    logger.debug("Dropping recommendation %s: scheme %s unavailable", rec.id, rec.scheme_id)
                    continue
                details = self.evaluator.evaluate(profile, scheme) if profile else EligibilityResult()
                enriched.append(self._enrich(rec, scheme, details))

        enriched.sort(key=lambda r: r.score, reverse=True)
        return enriched

    async def get_recommendations_by_category(
        self, user_id: str, category: str
    ) -> list[RecommendationWithScheme]:
        """User recommendations whose scheme category matches, ignoring case."""
        wanted = category.lower()
        return [r for r in await self.get_user_recommendations(user_id) if r.scheme.category.lower() == wanted]

    async def check_eligibility(self, user_id: str, scheme_id: str) -> EligibilityResult:
        """Evaluate one scheme for one user without touching persisted state."""
        profile = await self._require_profile(user_id)
        scheme = await self.store.get_scheme_by_id(scheme_id)
        if scheme is None:
            raise SchemeNotFoundError(scheme_id)

        result = self.evaluator.evaluate(profile, scheme)
        await self._emit(EventType.ELIGIBILITY_CHECKED, user_id, {
            "scheme_id": scheme_id,
            "score": result.score,
            "eligible": result.eligible,
        })
        return result

    def rank(self, profile: CitizenProfile, schemes: list[Scheme]) -> list[_Candidate]:
        """Evaluate, sort by score descending, cap, then drop low scores.

        The sort is stable, so ties keep catalog order.
        """
        candidates = [_Candidate(scheme, self.evaluator.evaluate(profile, scheme)) for scheme in schemes]
        candidates.sort(key=lambda c: c.result.score, reverse=True)
        return [c for c in candidates[: self.max_results] if c.result.score > self.min_score]

    # ── Internals ────────────────────────────────────────────────────

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    async def _require_profile(self, user_id: str) -> CitizenProfile:
        profile = await self.store.get_citizen_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    async def _generate(self, user_id: str) -> list[RecommendationWithScheme]:
        try:
            profile = await self._require_profile(user_id)
            schemes = await self.store.get_all_schemes()

            top = self.rank(profile, schemes)
            records = [
                NewRecommendation(
                    user_id=user_id,
                    scheme_id=c.scheme.id,
                    score=c.result.score,
                    reason=reason_for(c.result),
                )
                for c in top
            ]

            # Everything is computed; only now touch the persisted set.
            stored: list[RecommendationWithScheme] = []
            async with self.store.savepoint():
                await self.store.delete_recommendations_by_user_id(user_id)
                for candidate, record in zip(top, records, strict=True):
                    rec = await self.store.create_recommendation(record)
                    stored.append(self._enrich(rec, candidate.scheme, candidate.result))
        except (ProfileNotFoundError, TransientStoreError) as exc:
            logger.warning("Recommendation generation failed for user=%s: %s", user_id, exc)
            await self._emit(EventType.RECOMMENDATIONS_FAILED, user_id, {"error": str(exc)})
            raise

        logger.info(
            "Generated %d recommendations for user=%s from %d schemes",
            len(stored),
            user_id,
            len(schemes),
        )
        await self._emit(EventType.RECOMMENDATIONS_GENERATED, user_id, {
            "count": len(stored),
            "catalog_size": len(schemes),
            "scheme_ids": [r.scheme.id for r in stored],
        })
        return stored

    @staticmethod
    def _enrich(
        rec: Recommendation, scheme: Scheme, details: EligibilityResult
    ) -> RecommendationWithScheme:
        return RecommendationWithScheme(
            id=rec.id,
            user_id=rec.user_id,
            scheme=scheme,
            score=rec.score,
            reasoning=rec.reason or "",
            eligibility_status=status_for(details),
            eligibility_details=details,
            generated_at=rec.created_at,
        )

    async def _emit(self, event_type: EventType, user_id: str, data: dict) -> None:
        if self.events is None:
            return
        await self.events.emit(SystemEvent(
            event_type=event_type,
            user_id=user_id,
            data=data,
            source_module="recommendations.engine",
        ))
