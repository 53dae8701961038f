#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import ConfigDict, Field
from typing import List, Optional, Dict, Any

from core.preferences.schema import CamelModel, PreferenceRecord


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class PreferenceData(PreferenceRecord):
    """A stored preference record as returned to its owner."""
    id: str
    user_id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PreferenceResponse(CamelModel):
    success: bool
    preferences: PreferenceData


class ProfileData(CamelModel):
    """Profile fields exposed to other users."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "userId": "u-1042",
                "firstName": "Asha",
                "lastName": "Rao",
                "age": 29,
                "HighestQualification": "Masters",
                "occupation": "Engineer",
                "currentAddress": {"city": "Pune", "state": "Maharashtra"},
                "subCaste": "Iyer",
                "maritalStatus": "Never Married"
            }
        }
    )

    id: str
    user_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = None
    highest_qualification: Optional[str] = Field(None, serialization_alias="HighestQualification")
    occupation: Optional[str] = None
    current_address: Dict[str, Any] = Field(default_factory=dict)
    sub_caste: Optional[str] = None
    marital_status: Optional[str] = None
    mother_tongue: Optional[str] = None
    food_habit: Optional[str] = None
    created_at: Optional[str] = None


class ProfileResponse(CamelModel):
    success: bool
    profile: ProfileData


class MatchItem(CamelModel):
    profile: ProfileData
    match_score: int = Field(ge=0, le=100)
    match_reasons: List[str] = Field(default_factory=list)


class MatchesResponse(CamelModel):
    success: bool
    matches: List[MatchItem]
    pagination: Pagination


class NotificationData(CamelModel):
    id: str
    recipient_id: str
    sender_id: Optional[str] = None
    type: str
    title: str
    message: str
    data: Dict[str, Any] = Field(default_factory=dict)
    read: bool = False
    read_at: Optional[str] = None
    priority: str = "medium"
    created_at: Optional[str] = None


class NotificationsResponse(CamelModel):
    success: bool
    notifications: List[NotificationData]
    pagination: Pagination
    unread_count: int = 0


class UnreadCountResponse(CamelModel):
    success: bool
    count: int


class MarkReadResponse(CamelModel):
    success: bool
    updated: int


class MessageResponse(CamelModel):
    success: bool
    message: str
