import logging
from typing import List, Optional, Dict, Any
from sqlalchemy import select

from database.models import UserPreference
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class PreferenceRepository(BaseRepository):
    def get_by_user_id(self, user_id: str) -> Optional[UserPreference]:
        stmt = select(UserPreference).where(UserPreference.user_id == str(user_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def list_notification_enabled(self) -> List[UserPreference]:
        stmt = select(UserPreference).where(
            UserPreference.enable_match_notifications.is_(True)
        ).order_by(UserPreference.user_id)
        return list(self.db.execute(stmt).scalars().all())

    def upsert(self, user_id: str, values: Dict[str, Any]) -> UserPreference:
        """
        Create or update the preference record for a user.

        `values` must be a fully validated record; every column it names is
        overwritten. The unique constraint on user_id guarantees one row per user.
        """
        preference = self.get_by_user_id(user_id)
        created = preference is None

        if created:
            preference = UserPreference(user_id=str(user_id))
            self.db.add(preference)

        for key, value in values.items():
            setattr(preference, key, value)

        self.db.flush()
        logger.info(f"{'Created' if created else 'Updated'} preferences for user {user_id}")
        return preference

    def delete_by_user_id(self, user_id: str) -> bool:
        preference = self.get_by_user_id(user_id)
        if preference is None:
            return False

        self.db.delete(preference)
        self.db.flush()
        logger.info(f"Deleted preferences for user {user_id}")
        return True
