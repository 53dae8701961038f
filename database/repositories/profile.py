import logging
from typing import List, Optional, Any, Dict, Tuple
from sqlalchemy import select, and_, or_

from database.models import Profile
from database.repositories.base import BaseRepository, as_uuid

logger = logging.getLogger(__name__)

# Profile attributes that a candidate filter may constrain by set membership.
# Location lives inside the current_address JSON document and is never pushed down.
FILTERABLE_ATTRIBUTES = {
    'highest_qualification': Profile.highest_qualification,
    'occupation': Profile.occupation,
    'sub_caste': Profile.sub_caste,
    'marital_status': Profile.marital_status,
}


class ProfileRepository(BaseRepository):
    def get_by_id(self, profile_id: Any) -> Optional[Profile]:
        profile_uuid = as_uuid(profile_id)
        if profile_uuid is None:
            return None
        stmt = select(Profile).where(Profile.id == profile_uuid)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        stmt = select(Profile).where(Profile.user_id == str(user_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def has_profile(self, user_id: str) -> bool:
        return self.get_by_user_id(user_id) is not None

    def create(self, user_id: str, values: Dict[str, Any]) -> Profile:
        profile = Profile(user_id=str(user_id), **values)
        self.db.add(profile)
        self.db.flush()  # Generate ID
        logger.info(f"Created profile {profile.id} for user {user_id}")
        return profile

    def upsert(self, user_id: str, values: Dict[str, Any]) -> Tuple[Profile, bool]:
        """
        Create the profile for a user, or update the one they already own.

        Returns:
            (profile, created) where created is False for an update
        """
        profile = self.get_by_user_id(user_id)
        if profile is None:
            return self.create(user_id, values), True

        for key, value in values.items():
            setattr(profile, key, value)
        self.db.flush()
        logger.info(f"Updated profile {profile.id} for user {user_id}")
        return profile, False

    def list_candidates(
        self,
        exclude_user_id: str,
        candidate_filter: Optional[Any] = None
    ) -> List[Profile]:
        """
        Load the candidate pool for a user: every profile not owned by them.

        Args:
            exclude_user_id: Owner whose profiles are left out of the pool
            candidate_filter: Optional CandidateFilter with `age_range` and
                `memberships`. Each constraint keeps rows whose attribute is
                missing, so only candidates that evaluate AND fail a dimension
                are dropped.

        Returns:
            Profiles in a deterministic (id) order
        """
        stmt = select(Profile).where(Profile.user_id != str(exclude_user_id))

        if candidate_filter is not None:
            for clause in self._filter_clauses(candidate_filter):
                stmt = stmt.where(clause)

        stmt = stmt.order_by(Profile.id)
        return list(self.db.execute(stmt).scalars().all())

    def _filter_clauses(self, candidate_filter: Any) -> List[Any]:
        clauses = []

        age_range = getattr(candidate_filter, 'age_range', None)
        if age_range is not None:
            age_min, age_max = age_range
            bounds = []
            if age_min is not None:
                bounds.append(Profile.age >= age_min)
            if age_max is not None:
                bounds.append(Profile.age <= age_max)
            if bounds:
                clauses.append(or_(Profile.age.is_(None), and_(*bounds)))

        memberships = getattr(candidate_filter, 'memberships', None) or {}
        for attribute, values in memberships.items():
            column = FILTERABLE_ATTRIBUTES.get(attribute)
            if column is None:
                logger.debug(f"Ignoring non-filterable attribute {attribute}")
                continue
            clauses.append(or_(column.is_(None), column == '', column.in_(list(values))))

        return clauses
