#!/usr/bin/env python3
"""
Request models for API endpoints.

Bodies are camelCase on the wire. Preference writes use
core.preferences.schema.PreferenceUpdate directly.
"""

from pydantic import AliasChoices, Field, field_validator
from typing import List, Optional

from core.preferences.schema import CamelModel


class Address(CamelModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None


class ProfileCreateRequest(CamelModel):
    """Request to create the caller's profile."""
    first_name: str = Field(..., min_length=1)
    last_name: Optional[str] = None
    gender: Optional[str] = None
    age: Optional[int] = Field(None, ge=18, le=100, description="Age in years")
    highest_qualification: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("HighestQualification", "highestQualification", "highest_qualification")
    )
    occupation: Optional[str] = None
    current_address: Optional[Address] = None
    sub_caste: Optional[str] = None
    marital_status: Optional[str] = None
    mother_tongue: Optional[str] = None
    food_habit: Optional[str] = None

    @field_validator(
        'highest_qualification', 'occupation', 'sub_caste',
        'marital_status', 'mother_tongue', 'food_habit'
    )
    @classmethod
    def strip_text(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class MarkReadRequest(CamelModel):
    """Mark some (notificationIds) or all (omitted/empty) notifications as read."""
    notification_ids: Optional[List[str]] = Field(
        default=None,
        description="Ids to mark as read; all unread notifications when omitted"
    )
