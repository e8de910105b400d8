"""SQLAlchemy-backed store.

Bound to one AsyncSession. Writes are flushed, never committed here: the
session owner (``Database.session``) commits once the request succeeds, so the
delete and re-insert of a user's recommendation set land in a single
transaction and concurrent readers see either the old set or the new one.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncIterator, Iterator
from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from schemematch.exceptions import DuplicateProfileError, TransientStoreError
from schemematch.models.citizen_profile import CitizenProfileRecord
from schemematch.models.recommendation import RecommendationRecord
from schemematch.models.scheme import SchemeRecord
from schemematch.schemas.eligibility import (
    CitizenProfile,
    CitizenProfileCreate,
    Scheme,
    SchemeCreate,
)
from schemematch.schemas.recommendation import NewRecommendation, Recommendation

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Translate driver/ORM failures into TransientStoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error("Store operation %s failed: %s", operation, exc)
        raise TransientStoreError(f"{operation} failed") from exc


class SqlAlchemyStore:
    """Implements RecommendationStore, ProfileStore and CatalogStore."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @contextlib.asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        """Run the block inside a SAVEPOINT.

        A failure rolls back only the block's writes; the enclosing request
        transaction stays usable and still commits what was written before.
        """
        try:
            async with self.db.begin_nested():
                yield
        except SQLAlchemyError as exc:
            logger.error("Savepoint failed: %s", exc)
            raise TransientStoreError("savepoint failed") from exc

    # ── Citizen profiles ─────────────────────────────────────────────

    async def _profile_record(self, user_id: str) -> CitizenProfileRecord | None:
        result = await self.db.execute(
            select(CitizenProfileRecord).where(CitizenProfileRecord.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_citizen_profile(self, user_id: str) -> CitizenProfile | None:
        with _store_errors("get_citizen_profile"):
            record = await self._profile_record(user_id)
        return CitizenProfile.model_validate(record) if record else None

    async def create_citizen_profile(self, data: CitizenProfileCreate) -> CitizenProfile:
        with _store_errors("create_citizen_profile"):
            if await self._profile_record(data.user_id) is not None:
                raise DuplicateProfileError(data.user_id)
            record = CitizenProfileRecord(**data.model_dump())
            self.db.add(record)
            await self.db.flush()
            await self.db.refresh(record)
        return CitizenProfile.model_validate(record)

    async def update_citizen_profile(self, user_id: str, updates: dict[str, Any]) -> CitizenProfile | None:
        with _store_errors("update_citizen_profile"):
            record = await self._profile_record(user_id)
            if record is None:
                return None
            for field, value in updates.items():
                setattr(record, field, value)
            await self.db.flush()
            await self.db.refresh(record)
        return CitizenProfile.model_validate(record)

    # ── Schemes ──────────────────────────────────────────────────────

    async def _active_schemes(self, *criteria: Any) -> list[Scheme]:
        result = await self.db.execute(
            select(SchemeRecord)
            .where(SchemeRecord.is_active.is_(True), *criteria)
            .order_by(SchemeRecord.created_at.asc(), SchemeRecord.id.asc())
        )
        return [Scheme.model_validate(r) for r in result.scalars().all()]

    async def get_all_schemes(self) -> list[Scheme]:
        with _store_errors("get_all_schemes"):
            return await self._active_schemes()

    async def get_scheme_by_id(self, scheme_id: str) -> Scheme | None:
        with _store_errors("get_scheme_by_id"):
            record = await self.db.get(SchemeRecord, scheme_id)
        return Scheme.model_validate(record) if record else None

    async def get_schemes_by_category(self, category: str) -> list[Scheme]:
        with _store_errors("get_schemes_by_category"):
            return await self._active_schemes(func.lower(SchemeRecord.category) == category.lower())

    async def get_schemes_by_state(self, state: str) -> list[Scheme]:
        with _store_errors("get_schemes_by_state"):
            return await self._active_schemes(or_(SchemeRecord.state.is_(None), SchemeRecord.state == state))

    async def search_schemes(self, query: str) -> list[Scheme]:
        pattern = f"%{query}%"
        with _store_errors("search_schemes"):
            return await self._active_schemes(
                or_(
                    SchemeRecord.name.ilike(pattern),
                    SchemeRecord.description.ilike(pattern),
                    SchemeRecord.category.ilike(pattern),
                )
            )

    async def create_scheme(self, data: SchemeCreate) -> Scheme:
        with _store_errors("create_scheme"):
            record = SchemeRecord(**data.model_dump())
            self.db.add(record)
            await self.db.flush()
            await self.db.refresh(record)
        return Scheme.model_validate(record)

    # ── Recommendations ──────────────────────────────────────────────

    async def get_recommendations_by_user_id(self, user_id: str) -> list[Recommendation]:
        with _store_errors("get_recommendations_by_user_id"):
            result = await self.db.execute(
                select(RecommendationRecord)
                .where(RecommendationRecord.user_id == user_id)
                .order_by(RecommendationRecord.created_at.asc())
            )
            records = result.scalars().all()
        return [Recommendation.model_validate(r) for r in records]

    async def create_recommendation(self, record: NewRecommendation) -> Recommendation:
        with _store_errors("create_recommendation"):
            row = RecommendationRecord(**record.model_dump())
            self.db.add(row)
            await self.db.flush()
            await self.db.refresh(row)
        return Recommendation.model_validate(row)

    async def delete_recommendations_by_user_id(self, user_id: str) -> None:
        with _store_errors("delete_recommendations_by_user_id"):
            result = await self.db.execute(
                delete(RecommendationRecord).where(RecommendationRecord.user_id == user_id)
            )
        logger.debug("Deleted %s recommendations for user=%s", result.rowcount, user_id)  # type: ignore[attr-defined]
