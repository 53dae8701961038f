import contextlib
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from database.database import SessionLocal
from database.repositories import PreferenceRepository, ProfileRepository, NotificationRepository

logger = logging.getLogger(__name__)


@dataclass
class MatchingRepositories:
    """Repositories sharing one Session (and therefore one transaction)."""
    session: Session
    preferences: PreferenceRepository
    profiles: ProfileRepository
    notifications: NotificationRepository

    @classmethod
    def for_session(cls, session: Session) -> "MatchingRepositories":
        return cls(
            session=session,
            preferences=PreferenceRepository(session),
            profiles=ProfileRepository(session),
            notifications=NotificationRepository(session),
        )


@contextlib.contextmanager
def matching_uow():
    """Per-unit-of-work transaction scope.

    Yields MatchingRepositories bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with matching_uow() as repos:
            preference = repos.preferences.get_by_user_id(user_id)
            # perform operations...
        # commit happens automatically on successful exit
    """
    session = SessionLocal()
    try:
        yield MatchingRepositories.for_session(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextlib.contextmanager
def notification_uow():
    """Transaction scope yielding a NotificationRepository (one per recipient in the fanout)."""
    session = SessionLocal()
    try:
        yield NotificationRepository(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
