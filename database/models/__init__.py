from .base import Base
from .preference import UserPreference
from .profile import Profile
from .notification import Notification

__all__ = [
    'Base',
    'UserPreference',
    'Profile',
    'Notification',
]
