from database.repositories.base import BaseRepository
from database.repositories.preference import PreferenceRepository
from database.repositories.profile import ProfileRepository
from database.repositories.notification import NotificationRepository

__all__ = [
    'BaseRepository',
    'PreferenceRepository',
    'ProfileRepository',
    'NotificationRepository',
]
