"""Business logic services."""

from .preference_service import PreferenceServiceWrapper
from .profile_service import ProfileService
from .notification_service import NotificationInboxService
