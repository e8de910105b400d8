"""FastAPI dependencies — build services from application state per request."""
# ruff: noqa: B008  — Depends() in function defaults is standard FastAPI

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Depends, Request

from schemematch.profiles.service import ProfileService
from schemematch.recommendations.engine import RecommendationEngine
from schemematch.store.base import Store
from schemematch.store.sql import SqlAlchemyStore


async def get_store(request: Request) -> AsyncGenerator[Store, None]:
    """Yield the configured store.

    With the SQL backend each request gets its own session, committed once
    the request succeeds.
    """
    database = request.app.state.database
    if database is None:
        yield request.app.state.store
        return
    async for session in database.session():
        yield SqlAlchemyStore(session)


def get_engine(request: Request, store: Store = Depends(get_store)) -> RecommendationEngine:
    state = request.app.state
    return RecommendationEngine(
        store,
        state.evaluator,
        max_results=state.settings.recommendations.max_results,
        min_score=state.settings.recommendations.min_score,
        events=state.events,
        locks=state.user_locks,
    )


def get_profile_service(
    request: Request,
    store: Store = Depends(get_store),
    engine: RecommendationEngine = Depends(get_engine),
) -> ProfileService:
    return ProfileService(store, engine, events=request.app.state.events)
