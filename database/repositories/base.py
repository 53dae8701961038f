import uuid
from typing import Any, Optional

from sqlalchemy.orm import Session


class BaseRepository:
    """Repositories share the caller's Session; committing is left to the unit of work."""

    def __init__(self, db: Session):
        self.db = db


def as_uuid(value: Any) -> Optional[uuid.UUID]:
    """Parse an id from the API/queue into a UUID; None if it is not one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None
