"""HTTP routes for profiles, the scheme catalog and recommendations.

Thin layer over ProfileService and RecommendationEngine. Domain errors are
mapped to status codes by the handlers registered in ``schemematch.main``.
"""
# ruff: noqa: B008  — Depends() in function defaults is standard FastAPI

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from schemematch.api.deps import get_engine, get_profile_service, get_store
from schemematch.exceptions import SchemeNotFoundError
from schemematch.profiles.service import ProfileService
from schemematch.recommendations.engine import RecommendationEngine
from schemematch.schemas.eligibility import (
    CitizenProfile,
    CitizenProfileCreate,
    CitizenProfileUpdate,
    EligibilityResult,
    Scheme,
)
from schemematch.schemas.recommendation import RecommendationWithScheme
from schemematch.store.base import Store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class EligibilityCheckRequest(BaseModel):
    user_id: str = Field(min_length=1)


# ── Profiles ─────────────────────────────────────────────────────────


@router.get("/profile/{user_id}", response_model=CitizenProfile, tags=["profiles"])
async def get_profile(user_id: str, service: ProfileService = Depends(get_profile_service)) -> CitizenProfile:
    profile = await service.get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


@router.post("/profile", response_model=CitizenProfile, status_code=201, tags=["profiles"])
async def create_profile(
    data: CitizenProfileCreate,
    service: ProfileService = Depends(get_profile_service),
) -> CitizenProfile:
    return await service.create_profile(data)


@router.put("/profile/{user_id}", response_model=CitizenProfile, tags=["profiles"])
async def update_profile(
    user_id: str,
    updates: CitizenProfileUpdate,
    service: ProfileService = Depends(get_profile_service),
) -> CitizenProfile:
    profile = await service.update_profile(user_id, updates)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


# ── Schemes ──────────────────────────────────────────────────────────


@router.get("/schemes", response_model=list[Scheme], tags=["schemes"])
async def list_schemes(
    state: str | None = Query(default=None, description="Central schemes plus this state's own"),
    store: Store = Depends(get_store),
) -> list[Scheme]:
    if state:
        return await store.get_schemes_by_state(state)
    return await store.get_all_schemes()


@router.get("/schemes/search", response_model=list[Scheme], tags=["schemes"])
async def search_schemes(q: str = Query(min_length=1), store: Store = Depends(get_store)) -> list[Scheme]:
    return await store.search_schemes(q)


@router.get("/schemes/category/{category}", response_model=list[Scheme], tags=["schemes"])
async def schemes_by_category(category: str, store: Store = Depends(get_store)) -> list[Scheme]:
    return await store.get_schemes_by_category(category)


@router.get("/schemes/{scheme_id}", response_model=Scheme, tags=["schemes"])
async def get_scheme(scheme_id: str, store: Store = Depends(get_store)) -> Scheme:
    scheme = await store.get_scheme_by_id(scheme_id)
    if scheme is None:
        raise SchemeNotFoundError(scheme_id)
    return scheme


@router.post("/schemes/{scheme_id}/check-eligibility", response_model=EligibilityResult, tags=["schemes"])
async def check_eligibility(
    scheme_id: str,
    body: EligibilityCheckRequest,
    engine: RecommendationEngine = Depends(get_engine),
) -> EligibilityResult:
    return await engine.check_eligibility(body.user_id, scheme_id)


# ── Recommendations ──────────────────────────────────────────────────


@router.get("/recommendations/{user_id}", response_model=list[RecommendationWithScheme], tags=["recommendations"])
async def get_recommendations(
    user_id: str,
    engine: RecommendationEngine = Depends(get_engine),
) -> list[RecommendationWithScheme]:
    return await engine.get_user_recommendations(user_id)


@router.get(
    "/recommendations/{user_id}/category/{category}",
    response_model=list[RecommendationWithScheme],
    tags=["recommendations"],
)
async def get_recommendations_by_category(
    user_id: str,
    category: str,
    engine: RecommendationEngine = Depends(get_engine),
) -> list[RecommendationWithScheme]:
    return await engine.get_recommendations_by_category(user_id, category)


@router.post(
    "/recommendations/{user_id}/generate",
    response_model=list[RecommendationWithScheme],
    tags=["recommendations"],
)
async def generate_recommendations(
    user_id: str,
    engine: RecommendationEngine = Depends(get_engine),
) -> list[RecommendationWithScheme]:
    return await engine.generate_recommendations(user_id)


@router.post(
    "/recommendations/{user_id}/refresh",
    response_model=list[RecommendationWithScheme],
    tags=["recommendations"],
)
async def refresh_recommendations(
    user_id: str,
    engine: RecommendationEngine = Depends(get_engine),
) -> list[RecommendationWithScheme]:
    return await engine.refresh_recommendations(user_id)
