#!/usr/bin/env python3
"""
Interested User Fanout - who should hear about a newly created profile.

The inverse of MatchFinder: one profile is scored against every preference
that has match notifications enabled, and each owner's own threshold decides
whether they are interested. The result is handed to the notification
dispatcher unsorted and unpaginated.
"""

import logging
from typing import Any, List, Optional

from core.scorer import MatchScorer, InterestedUser

logger = logging.getLogger(__name__)


class InterestedUserFanout:
    """Find preference owners whose criteria a new profile satisfies."""

    def __init__(self, preference_repo, scorer: Optional[MatchScorer] = None):
        self.preference_repo = preference_repo
        self.scorer = scorer or MatchScorer()

    def find_interested_users(self, new_profile: Any) -> List[InterestedUser]:
        """
        Score a new profile against all notification-enabled preferences.

        Args:
            new_profile: The profile that was just created

        Returns:
            InterestedUser entries for every owner (other than the profile's
            own) whose match_threshold is met
        """
        owner_id = str(getattr(new_profile, 'user_id', ''))
        preferences = self.preference_repo.list_notification_enabled()

        interested = []
        for preference in preferences:
            if str(preference.user_id) == owner_id:
                continue

            scored = self.scorer.score(preference, new_profile)
            if scored.score >= preference.match_threshold:
                interested.append(InterestedUser(
                    user_id=str(preference.user_id),
                    match_score=scored.score,
                    match_reasons=scored.reasons
                ))
            else:
                logger.debug(
                    f"User {preference.user_id} below threshold for profile "
                    f"{getattr(new_profile, 'id', None)}: {scored.score} < {preference.match_threshold}"
                )

        logger.info(
            f"Profile {getattr(new_profile, 'id', None)}: {len(interested)} interested users "
            f"out of {len(preferences)} notification-enabled preferences"
        )
        return interested
