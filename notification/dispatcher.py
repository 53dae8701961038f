#!/usr/bin/env python3
"""
Match Notification Dispatcher - turns InterestedUser results into inbox entries.

Each recipient gets its own unit of work, so one failing insert (bad row,
lost connection after retries) is logged and counted without affecting the
other recipients of the same fanout.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from sqlalchemy.exc import OperationalError
from tenacity import (
    Retrying,
    stop_after_attempt,
    wait_fixed,
    retry_if_exception_type,
    before_sleep_log
)

from core.scorer import InterestedUser
from database.uow import notification_uow
from notification.message_builder import NotificationMessageBuilder

logger = logging.getLogger(__name__)


@dataclass
class DispatchSummary:
    delivered: int = 0
    failed: int = 0
    failed_user_ids: List[str] = field(default_factory=list)


class MatchNotificationDispatcher:
    """Persist one 'match' notification per interested user."""

    def __init__(
        self,
        uow_factory: Optional[Callable] = None,
        message_builder: Optional[NotificationMessageBuilder] = None,
        max_attempts: int = 3,
        retry_wait_seconds: float = 1
    ):
        """
        Args:
            uow_factory: Context manager factory yielding a NotificationRepository
                (database.uow.notification_uow when omitted)
            message_builder: Renders title/message/priority (default thresholds 85/70)
            max_attempts: Attempts per recipient on transient database errors
            retry_wait_seconds: Pause between attempts
        """
        self.uow_factory = uow_factory or notification_uow
        self.message_builder = message_builder or NotificationMessageBuilder()
        self.max_attempts = max_attempts
        self.retry_wait_seconds = retry_wait_seconds

    def _deliver(self, new_profile: Any, user: InterestedUser) -> None:
        content = self.message_builder.build_match_notification(
            new_profile, user.match_score, user.match_reasons
        )
        with self.uow_factory() as repo:
            repo.create(
                recipient_id=user.user_id,
                sender_id=getattr(new_profile, 'user_id', None),
                type=content.type,
                title=content.title,
                message=content.message,
                data=content.data,
                priority=content.priority
            )

    def dispatch(self, new_profile: Any, interested: List[InterestedUser]) -> DispatchSummary:
        summary = DispatchSummary()

        for user in interested:
            try:
                for attempt in Retrying(
                    stop=stop_after_attempt(self.max_attempts),
                    wait=wait_fixed(self.retry_wait_seconds),
                    retry=retry_if_exception_type(OperationalError),
                    before_sleep=before_sleep_log(logger, logging.WARNING),
                    reraise=True
                ):
                    with attempt:
                        self._deliver(new_profile, user)
                summary.delivered += 1
            except Exception as e:
                summary.failed += 1
                summary.failed_user_ids.append(user.user_id)
                logger.error(f"Failed to notify user {user.user_id} about profile "
                             f"{getattr(new_profile, 'id', None)}: {e}", exc_info=True)

        logger.info(
            f"Match notifications for profile {getattr(new_profile, 'id', None)}: "
            f"{summary.delivered} delivered, {summary.failed} failed"
        )
        return summary
