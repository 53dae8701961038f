#!/usr/bin/env python3
"""
Preference endpoints - the caller's preference record and ranked matches.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.config_loader import AppConfig
from core.preferences import PreferenceUpdate
from ..dependencies import get_db, get_app_config, get_current_user_id
from ..services.preference_service import PreferenceServiceWrapper
from ..models.responses import PreferenceResponse, MatchesResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/preferences", tags=["preferences"])


def get_preference_service(
    db: Session = Depends(get_db),
    config: AppConfig = Depends(get_app_config)
) -> PreferenceServiceWrapper:
    """Dependency to get preference service."""
    return PreferenceServiceWrapper(db, config)


@router.post("", response_model=PreferenceResponse)
def save_preferences(
    update: PreferenceUpdate,
    user_id: str = Depends(get_current_user_id),
    service: PreferenceServiceWrapper = Depends(get_preference_service)
):
    """
    Create or update the caller's preferences.

    Only fields present in the body are changed; the merged record is
    validated as a whole.
    """
    preferences = service.upsert_preferences(user_id, update)
    return PreferenceResponse(success=True, preferences=preferences)


@router.get("", response_model=PreferenceResponse)
def get_preferences(
    user_id: str = Depends(get_current_user_id),
    service: PreferenceServiceWrapper = Depends(get_preference_service)
):
    return PreferenceResponse(success=True, preferences=service.get_preferences(user_id))


@router.delete("", response_model=MessageResponse)
def delete_preferences(
    user_id: str = Depends(get_current_user_id),
    service: PreferenceServiceWrapper = Depends(get_preference_service)
):
    service.delete_preferences(user_id)
    return MessageResponse(success=True, message="Preferences deleted successfully")


@router.post("/reset", response_model=PreferenceResponse)
def reset_preferences(
    user_id: str = Depends(get_current_user_id),
    service: PreferenceServiceWrapper = Depends(get_preference_service)
):
    """Overwrite (or create) the caller's preferences with the defaults."""
    preferences = service.reset_preferences(user_id)
    return PreferenceResponse(success=True, preferences=preferences)


@router.get("/matches", response_model=MatchesResponse)
def get_matches(
    page: int = Query(default=1, description="1-based page number"),
    limit: Optional[int] = Query(default=None, description="Matches per page (default from config)"),
    user_id: str = Depends(get_current_user_id),
    config: AppConfig = Depends(get_app_config),
    service: PreferenceServiceWrapper = Depends(get_preference_service)
):
    """
    Candidates meeting the caller's match threshold.

    Sorted by match score (highest first), ties by profile id.
    """
    effective_limit = limit if limit is not None else config.matching.default_page_size
    matches, pagination = service.find_matches(user_id, page=page, limit=effective_limit)
    return MatchesResponse(success=True, matches=matches, pagination=pagination)
