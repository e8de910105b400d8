"""SqlAlchemyStore against a real database session.

Uses a file-backed SQLite database through aiosqlite, with a trigger that
rejects recommendation inserts to make the recommendation run fail inside
the same request transaction as the profile write.
"""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import event

from schemematch.config import DatabaseSettings, Settings
from schemematch.db.engine import Database
from schemematch.eligibility import EligibilityEvaluator
from schemematch.profiles.service import ProfileService
from schemematch.recommendations import RecommendationEngine
from schemematch.schemas.eligibility import CitizenProfileCreate, CitizenProfileUpdate, SchemeCreate
from schemematch.store.sql import SqlAlchemyStore

TODAY = date(2026, 10, 18)

REJECT_INSERTS = """
CREATE TRIGGER reject_recommendations BEFORE INSERT ON recommendations
BEGIN
    SELECT RAISE(ABORT, 'recommendations are read-only');
END
"""


# ── Helpers ──────────────────────────────────────────────────────────


async def _make_database(tmp_path) -> Database:
    """Database on a temp SQLite file, with driver-level BEGIN so SAVEPOINT works."""
    settings = Settings(
        _env_file=None,
        db=DatabaseSettings(
            _env_file=None,
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'schemematch.db'}",
            store_backend="sql",
        ),
    )
    database = Database(settings)

    @event.listens_for(database.engine.sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(database.engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    await database.init()
    async for session in database.session():
        await SqlAlchemyStore(session).create_scheme(SchemeCreate(
            name="Scheme A",
            description="Support for small farmers",
            category="Agriculture",
            ministry="Ministry of Agriculture",
            benefits="Rs 6000 per year",
            application_process="Apply online",
            target_categories=["General"],
            target_occupations=["Farmer"],
            max_income=200000,
            min_age=18,
        ))
    return database


async def _reject_recommendation_inserts(database: Database) -> None:
    async with database.engine.begin() as conn:
        await conn.exec_driver_sql(REJECT_INSERTS)


def _service(store: SqlAlchemyStore) -> ProfileService:
    evaluator = EligibilityEvaluator(threshold=0.7, today=lambda: TODAY)
    return ProfileService(store, RecommendationEngine(store, evaluator))


def _profile() -> CitizenProfileCreate:
    return CitizenProfileCreate(
        user_id="user-1",
        full_name="Ravi Kumar",
        state="Karnataka",
        category="General",
        occupation="Farmer",
        annual_income=100000,
        date_of_birth=date(1990, 1, 1),
    )


async def _read_back(database: Database):
    async for session in database.session():
        store = SqlAlchemyStore(session)
        profile = await store.get_citizen_profile("user-1")
        recs = await store.get_recommendations_by_user_id("user-1")
    return profile, recs


# ── Tests ────────────────────────────────────────────────────────────


class TestRequestTransaction:
    @pytest.mark.asyncio()
    async def test_create_commits_profile_and_recommendations(self, tmp_path):
        database = await _make_database(tmp_path)
        try:
            async for session in database.session():
                await _service(SqlAlchemyStore(session)).create_profile(_profile())

            profile, recs = await _read_back(database)
            assert profile is not None
            assert [r.score for r in recs] == [65]
        finally:
            await database.close()

    @pytest.mark.asyncio()
    async def test_failed_generation_keeps_profile(self, tmp_path):
        database = await _make_database(tmp_path)
        try:
            await _reject_recommendation_inserts(database)

            async for session in database.session():
                created = await _service(SqlAlchemyStore(session)).create_profile(_profile())
            assert created.user_id == "user-1"

            profile, recs = await _read_back(database)
            assert profile is not None
            assert profile.full_name == "Ravi Kumar"
            assert recs == []
        finally:
            await database.close()

    @pytest.mark.asyncio()
    async def test_failed_refresh_keeps_update_and_old_set(self, tmp_path):
        database = await _make_database(tmp_path)
        try:
            async for session in database.session():
                await _service(SqlAlchemyStore(session)).create_profile(_profile())
            _, before = await _read_back(database)

            await _reject_recommendation_inserts(database)
            async for session in database.session():
                await _service(SqlAlchemyStore(session)).update_profile(
                    "user-1", CitizenProfileUpdate(state="Kerala")
                )

            profile, after = await _read_back(database)
            assert profile.state == "Kerala"
            assert [r.id for r in after] == [r.id for r in before]
        finally:
            await database.close()
