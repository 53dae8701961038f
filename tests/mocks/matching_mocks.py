"""
Lightweight stand-ins for preference/profile rows and the repositories
the matching services depend on.
"""

import uuid
from types import SimpleNamespace
from typing import Any, Dict, List, Optional


def make_preference(user_id: str = "owner", **overrides) -> SimpleNamespace:
    """Preference with no constraints, default weights and threshold 70."""
    values: Dict[str, Any] = dict(
        user_id=user_id,
        preferred_age_range=None,
        preferred_education=[],
        preferred_occupation=[],
        preferred_cities=[],
        preferred_caste=[],
        preferred_marital_status=[],
        criteria_weights={},
        match_threshold=70,
        enable_match_notifications=True,
        notification_frequency="immediate",
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def make_profile(user_id: Optional[str] = None, **overrides) -> SimpleNamespace:
    values: Dict[str, Any] = dict(
        id=uuid.uuid4(),
        user_id=user_id or f"user-{uuid.uuid4().hex[:8]}",
        first_name="Test",
        last_name="Member",
        age=None,
        highest_qualification=None,
        occupation=None,
        current_address={},
        sub_caste=None,
        marital_status=None,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


class InMemoryPreferenceRepository:
    def __init__(self, preferences: List[Any] = None):
        self.preferences = list(preferences or [])

    def get_by_user_id(self, user_id: str):
        for preference in self.preferences:
            if preference.user_id == user_id:
                return preference
        return None

    def list_notification_enabled(self):
        return [p for p in self.preferences if p.enable_match_notifications]


class InMemoryProfileRepository:
    """Honours candidate filters the same way the SQL predicates do."""

    def __init__(self, profiles: List[Any] = None):
        self.profiles = list(profiles or [])
        self.last_filter = None

    def list_candidates(self, exclude_user_id: str, candidate_filter=None):
        self.last_filter = candidate_filter
        candidates = [p for p in self.profiles if p.user_id != exclude_user_id]
        if candidate_filter is None:
            return candidates
        return [p for p in candidates if self._keep(p, candidate_filter)]

    @staticmethod
    def _keep(profile, candidate_filter) -> bool:
        if candidate_filter.age_range is not None and profile.age is not None:
            low, high = candidate_filter.age_range
            if low is not None and profile.age < low:
                return False
            if high is not None and profile.age > high:
                return False
        for attribute, values in candidate_filter.memberships.items():
            value = getattr(profile, attribute, None)
            if value not in (None, '') and value not in values:
                return False
        return True
