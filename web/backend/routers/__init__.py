"""API route handlers."""

from .preferences import router as preferences_router
from .profiles import router as profiles_router
from .notifications import router as notifications_router
