#!/usr/bin/env python3
"""
Preference Service - the preference store.

One record per user, created lazily through the same entry point that
updates it (upsert) or explicitly via reset_to_defaults. Every write is
validated as a complete record before it reaches the repository, so the
scorer only ever sees well-formed preferences.
"""

import logging
from typing import Any, Dict

from pydantic import ValidationError

from core.exceptions import (
    PreferenceNotFoundException,
    PreferenceValidationException,
    ProfileRequiredException,
)
from core.preferences.defaults import default_preference_record
from core.preferences.schema import PreferenceRecord, PreferenceUpdate

logger = logging.getLogger(__name__)


def record_from_model(preference: Any) -> Dict[str, Any]:
    """Read the stored columns of a preference row into a PreferenceRecord-shaped dict."""
    return {name: getattr(preference, name, None) for name in PreferenceRecord.model_fields}


def validate_record(values: Dict[str, Any]) -> PreferenceRecord:
    try:
        return PreferenceRecord.model_validate(values)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False)
        fields = ', '.join('.'.join(str(p) for p in err['loc']) for err in errors)
        raise PreferenceValidationException(f"Invalid preferences: {fields}", errors=errors) from e


class PreferenceService:
    """Create, read, reset and delete a user's preference record."""

    def __init__(self, preference_repo, profile_repo=None, require_profile: bool = True):
        self.preference_repo = preference_repo
        self.profile_repo = profile_repo
        self.require_profile = require_profile

    def _check_profile(self, user_id: str) -> None:
        if not self.require_profile or self.profile_repo is None:
            return
        if not self.profile_repo.has_profile(user_id):
            raise ProfileRequiredException("Please complete your profile first")

    def get_preferences(self, user_id: str):
        """
        Raises:
            PreferenceNotFoundException: If the user has no preference record.
        """
        preference = self.preference_repo.get_by_user_id(user_id)
        if preference is None:
            raise PreferenceNotFoundException(f"No preferences found for user {user_id}")
        return preference

    def upsert_preferences(self, user_id: str, update: PreferenceUpdate):
        """
        Create or update a user's preferences.

        Provided fields are merged onto the stored record (or onto the schema
        defaults for a first write) and the merged record is validated as a
        whole before persistence.

        Raises:
            ProfileRequiredException: If the user has not created a profile yet.
            PreferenceValidationException: If the merged record is invalid.
        """
        self._check_profile(user_id)

        existing = self.preference_repo.get_by_user_id(user_id)
        merged = record_from_model(existing) if existing is not None else PreferenceRecord().model_dump(mode='json')
        merged.update(update.changes())

        record = validate_record(merged)
        preference = self.preference_repo.upsert(user_id, record.model_dump(mode='json'))
        logger.info(f"Saved preferences for user {user_id} (fields: {sorted(update.changes())})")
        return preference

    def reset_to_defaults(self, user_id: str):
        """Create the record with defaults, or overwrite an existing one."""
        self._check_profile(user_id)
        record = default_preference_record()
        preference = self.preference_repo.upsert(user_id, record.model_dump(mode='json'))
        logger.info(f"Reset preferences to defaults for user {user_id}")
        return preference

    def delete_preferences(self, user_id: str) -> None:
        """
        Raises:
            PreferenceNotFoundException: If the user has no preference record.
        """
        if not self.preference_repo.delete_by_user_id(user_id):
            raise PreferenceNotFoundException(f"No preferences found for user {user_id}")

