from typing import List, Dict, Any, Optional
from pydantic import BaseModel, Field

MATCH_NOTIFICATION_TYPE = 'match'

# Notification.message limit
MESSAGE_MAX_LENGTH = 500


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit - 3].rstrip() + '...'


class MatchNotificationContent(BaseModel):
    """Rendered in-app notification for one interested user."""
    type: str = MATCH_NOTIFICATION_TYPE
    title: str
    message: str
    priority: str
    data: Dict[str, Any] = Field(default_factory=dict)


class NotificationMessageBuilder:
    def __init__(self, priority_high: int = 85, priority_medium: int = 70):
        self.priority_high = priority_high
        self.priority_medium = priority_medium

    @staticmethod
    def display_name(profile: Any) -> str:
        """First and last name of a profile, or a neutral fallback."""
        parts = [
            getattr(profile, 'first_name', None),
            getattr(profile, 'last_name', None),
        ]
        name = ' '.join(p.strip() for p in parts if isinstance(p, str) and p.strip())
        return name or 'A new member'

    def priority_for(self, match_score: int) -> str:
        if match_score >= self.priority_high:
            return 'high'
        if match_score >= self.priority_medium:
            return 'medium'
        return 'low'

    @staticmethod
    def format_reasons(reasons: List[str], limit: int = 3) -> Optional[str]:
        if not reasons:
            return None
        shown = reasons[:limit]
        text = '; '.join(shown)
        if len(reasons) > limit:
            text += f" (+{len(reasons) - limit} more)"
        return text

    def build_match_notification(
        self,
        profile: Any,
        match_score: int,
        match_reasons: List[str]
    ) -> MatchNotificationContent:
        name = self.display_name(profile)
        message = f"{name} is a {match_score}% match for your preferences."
        reasons = self.format_reasons(match_reasons)
        if reasons:
            message += f" {reasons}."

        return MatchNotificationContent(
            title='New Match Found',
            message=truncate(message, MESSAGE_MAX_LENGTH),
            priority=self.priority_for(match_score),
            data={
                'matchScore': match_score,
                'matchReasons': list(match_reasons),
                'profileId': str(getattr(profile, 'id', '')),
                'profileName': name,
            }
        )
