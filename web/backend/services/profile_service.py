#!/usr/bin/env python3
"""
Profile service - create and read profiles, publish profile-created events.
"""

import logging
from typing import Any, Optional, Tuple
from sqlalchemy.orm import Session

from core.exceptions import ProfileNotFoundException
from database.repositories import ProfileRepository
from notification import ProfileEventPublisher
from ..models.requests import ProfileCreateRequest
from ..models.responses import ProfileData
from ..utils import safe_str, safe_datetime_iso

logger = logging.getLogger(__name__)


def profile_to_data(profile: Any) -> ProfileData:
    """Convert a Profile row into its API representation."""
    return ProfileData(
        id=safe_str(profile.id),
        user_id=safe_str(profile.user_id),
        first_name=profile.first_name,
        last_name=profile.last_name,
        gender=profile.gender,
        age=profile.age,
        highest_qualification=profile.highest_qualification,
        occupation=profile.occupation,
        current_address=profile.current_address or {},
        sub_caste=profile.sub_caste,
        marital_status=profile.marital_status,
        mother_tongue=profile.mother_tongue,
        food_habit=profile.food_habit,
        created_at=safe_datetime_iso(profile.created_at)
    )


class ProfileService:
    """Service for profile operations."""

    def __init__(self, db: Session, publisher: Optional[ProfileEventPublisher] = None):
        self.db = db
        self.repo = ProfileRepository(db)
        self.publisher = publisher

    def save_profile(self, user_id: str, request: ProfileCreateRequest) -> Tuple[ProfileData, bool]:
        """
        Create the caller's profile, or update the one they already own.

        Only a newly created profile is announced. It is committed before the
        event is published, so the fanout task always finds it. Publishing
        never fails the request.

        Returns:
            (profile, created)
        """
        values = request.model_dump(exclude_unset=True)
        try:
            profile, created = self.repo.upsert(user_id, values)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(profile)

        if created and self.publisher is not None:
            self.publisher.publish_profile_created(profile.id)

        return profile_to_data(profile), created

    def get_profile(self, profile_id: str) -> ProfileData:
        """
        Raises:
            ProfileNotFoundException: If no profile has this id.
        """
        profile = self.repo.get_by_id(profile_id)
        if profile is None:
            raise ProfileNotFoundException(f"Profile {profile_id} not found")
        return profile_to_data(profile)
