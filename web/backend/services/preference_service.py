#!/usr/bin/env python3
"""
Preference service wrapper for the web application.

Binds core.preferences.PreferenceService and core.matcher.MatchFinder to a
request-scoped session and converts results into response models.
"""

import logging
from typing import Any, Tuple, List
from sqlalchemy.orm import Session

from core.config_loader import AppConfig
from core.exceptions import InvalidPaginationException
from core.matcher import MatchFinder
from core.preferences import PreferenceService, PreferenceUpdate, record_from_model
from database.repositories import PreferenceRepository, ProfileRepository
from ..models.responses import PreferenceData, MatchItem, Pagination
from ..utils import safe_str, safe_datetime_iso
from .profile_service import profile_to_data

logger = logging.getLogger(__name__)


def preference_to_data(preference: Any) -> PreferenceData:
    """Convert a UserPreference row into its API representation."""
    values = record_from_model(preference)
    values.update(
        id=safe_str(preference.id),
        user_id=safe_str(preference.user_id),
        created_at=safe_datetime_iso(preference.created_at),
        updated_at=safe_datetime_iso(preference.updated_at)
    )
    return PreferenceData.model_validate(values)


class PreferenceServiceWrapper:
    """Preference store and match browsing bound to a database session."""

    def __init__(self, db: Session, config: AppConfig):
        self.db = db
        self.config = config
        self.preference_repo = PreferenceRepository(db)
        self.profile_repo = ProfileRepository(db)
        self.service = PreferenceService(
            self.preference_repo,
            self.profile_repo,
            require_profile=config.preferences.require_profile
        )

    def _saved(self, preference: Any) -> PreferenceData:
        self.db.commit()
        self.db.refresh(preference)
        return preference_to_data(preference)

    def get_preferences(self, user_id: str) -> PreferenceData:
        return preference_to_data(self.service.get_preferences(user_id))

    def upsert_preferences(self, user_id: str, update: PreferenceUpdate) -> PreferenceData:
        try:
            return self._saved(self.service.upsert_preferences(user_id, update))
        except Exception:
            self.db.rollback()
            raise

    def reset_preferences(self, user_id: str) -> PreferenceData:
        try:
            return self._saved(self.service.reset_to_defaults(user_id))
        except Exception:
            self.db.rollback()
            raise

    def delete_preferences(self, user_id: str) -> None:
        self.service.delete_preferences(user_id)
        self.db.commit()

    def find_matches(self, user_id: str, page: int, limit: int) -> Tuple[List[MatchItem], Pagination]:
        """
        One page of ranked matches for the caller.

        Raises:
            InvalidPaginationException: If limit exceeds matching.max_page_size.
            PreferenceNotFoundException: If the caller has no preferences.
        """
        max_page_size = self.config.matching.max_page_size
        if limit > max_page_size:
            raise InvalidPaginationException(f"limit must not exceed {max_page_size} (got {limit})")

        finder = MatchFinder(
            self.preference_repo,
            self.profile_repo,
            prefilter_enabled=self.config.matching.prefilter_enabled
        )
        result = finder.find_matches(user_id, page=page, page_size=limit)

        matches = [
            MatchItem(
                profile=profile_to_data(m.profile),
                match_score=m.match_score,
                match_reasons=m.match_reasons
            )
            for m in result.matches
        ]
        pagination = Pagination(
            page=result.page,
            limit=result.page_size,
            total=result.total_matches,
            pages=result.total_pages
        )
        return matches, pagination
