#!/usr/bin/env python3
"""
Profile endpoints - create or update the caller's profile (a new profile triggers match fanout) and read one.
"""

from functools import lru_cache

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from notification import ProfileEventPublisher
from ..dependencies import get_db, get_current_user_id
from ..services.profile_service import ProfileService
from ..models.requests import ProfileCreateRequest
from ..models.responses import ProfileResponse

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@lru_cache()
def get_event_publisher() -> ProfileEventPublisher:
    """Process-wide publisher; connects to Redis once."""
    return ProfileEventPublisher.from_config()


def get_profile_service(
    db: Session = Depends(get_db),
    publisher: ProfileEventPublisher = Depends(get_event_publisher)
) -> ProfileService:
    """Dependency to get profile service."""
    return ProfileService(db, publisher)


@router.post("", response_model=ProfileResponse, status_code=201)
def save_profile(
    request: ProfileCreateRequest,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """
    Create the caller's profile (201), or update it if they already have one (200).

    Users whose preferences a new profile meets are notified asynchronously;
    a fanout failure does not fail the request. Updates send no notifications.
    """
    profile, created = service.save_profile(user_id, request)
    if not created:
        response.status_code = 200
    return ProfileResponse(success=True, profile=profile)


@router.get("/{profile_id}", response_model=ProfileResponse)
def get_profile(
    profile_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    return ProfileResponse(success=True, profile=service.get_profile(profile_id))
