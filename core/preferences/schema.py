#!/usr/bin/env python3
"""
Preference schema - validation at the preference store boundary.

Everything that reaches the scorer has passed through PreferenceRecord:
ranges are ordered, weights and threshold are within [0, 100], the
notification frequency is a known value and list constraints are clean.
On the wire the fields are camelCase (preferredAgeRange, criteriaWeights, ...).
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from core.scorer.models import DEFAULT_CRITERIA_WEIGHTS

AGE_MIN = 18
AGE_MAX = 80

LIST_FIELDS = (
    'preferred_education',
    'preferred_occupation',
    'preferred_cities',
    'preferred_states',
    'preferred_countries',
    'preferred_caste',
    'preferred_sub_caste',
    'preferred_gotra',
    'preferred_mother_tongue',
    'preferred_marital_status',
    'preferred_food_habit',
    'preferred_family_type',
    'preferred_qualification',
    'preferred_work_location',
    'preferred_company_type',
)

RANGE_FIELDS = ('preferred_age_range', 'preferred_height', 'preferred_income')


class NotificationFrequency(str, Enum):
    """Batching hint for the notification dispatcher."""
    IMMEDIATE = "immediate"
    DAILY = "daily"
    WEEKLY = "weekly"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _as_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class AgeRange(CamelModel):
    min: Optional[float] = Field(default=None, ge=AGE_MIN, le=AGE_MAX)
    max: Optional[float] = Field(default=None, ge=AGE_MIN, le=AGE_MAX)

    @model_validator(mode='after')
    def check_order(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min ({self.min:g}) must not exceed max ({self.max:g})")
        return self


class TextRange(CamelModel):
    """Free-text bounds (height, income); ordered only when both bounds are numeric."""
    min: Optional[str] = None
    max: Optional[str] = None

    @model_validator(mode='after')
    def check_order(self):
        low, high = _as_float(self.min), _as_float(self.max)
        if low is not None and high is not None and low > high:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


class CriteriaWeights(CamelModel):
    """Per-dimension weights, each independently bounded; no sum constraint."""
    age: float = Field(default=DEFAULT_CRITERIA_WEIGHTS['age'], ge=0, le=100)
    education: float = Field(default=DEFAULT_CRITERIA_WEIGHTS['education'], ge=0, le=100)
    occupation: float = Field(default=DEFAULT_CRITERIA_WEIGHTS['occupation'], ge=0, le=100)
    location: float = Field(default=DEFAULT_CRITERIA_WEIGHTS['location'], ge=0, le=100)
    cultural: float = Field(default=DEFAULT_CRITERIA_WEIGHTS['cultural'], ge=0, le=100)
    lifestyle: float = Field(default=DEFAULT_CRITERIA_WEIGHTS['lifestyle'], ge=0, le=100)


def clean_choices(values: Optional[List[str]]) -> List[str]:
    """Strip entries, drop blanks and duplicates, keep first-seen order."""
    if values is None:
        return []
    cleaned = []
    for value in values:
        value = value.strip()
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


class PreferenceRecord(CamelModel):
    """A complete, validated preference record (what gets persisted)."""
    preferred_age_range: Optional[AgeRange] = None
    preferred_height: Optional[TextRange] = None
    preferred_income: Optional[TextRange] = None

    preferred_education: List[str] = Field(default_factory=list)
    preferred_occupation: List[str] = Field(default_factory=list)
    preferred_cities: List[str] = Field(default_factory=list)
    preferred_states: List[str] = Field(default_factory=list)
    preferred_countries: List[str] = Field(default_factory=list)
    preferred_caste: List[str] = Field(default_factory=list)
    preferred_sub_caste: List[str] = Field(default_factory=list)
    preferred_gotra: List[str] = Field(default_factory=list)
    preferred_mother_tongue: List[str] = Field(default_factory=list)
    preferred_marital_status: List[str] = Field(default_factory=list)
    preferred_food_habit: List[str] = Field(default_factory=list)
    preferred_family_type: List[str] = Field(default_factory=list)
    preferred_qualification: List[str] = Field(default_factory=list)
    preferred_work_location: List[str] = Field(default_factory=list)
    preferred_company_type: List[str] = Field(default_factory=list)

    criteria_weights: CriteriaWeights = Field(default_factory=CriteriaWeights)
    match_threshold: float = Field(default=70, ge=0, le=100)

    enable_match_notifications: bool = True
    notification_frequency: NotificationFrequency = NotificationFrequency.IMMEDIATE

    @field_validator(*LIST_FIELDS, mode='before')
    @classmethod
    def none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator(*LIST_FIELDS)
    @classmethod
    def clean_list(cls, value: List[str]) -> List[str]:
        return clean_choices(value)

    @field_validator('criteria_weights', mode='before')
    @classmethod
    def default_weights(cls, value):
        return {} if value is None else value


class PreferenceUpdate(CamelModel):
    """
    Partial create-or-update body.

    Only fields present in the request are applied; an explicit null clears
    a range or list. criteria_weights is replaced as a whole (missing keys
    take their defaults).
    """
    preferred_age_range: Optional[AgeRange] = None
    preferred_height: Optional[TextRange] = None
    preferred_income: Optional[TextRange] = None

    preferred_education: Optional[List[str]] = None
    preferred_occupation: Optional[List[str]] = None
    preferred_cities: Optional[List[str]] = None
    preferred_states: Optional[List[str]] = None
    preferred_countries: Optional[List[str]] = None
    preferred_caste: Optional[List[str]] = None
    preferred_sub_caste: Optional[List[str]] = None
    preferred_gotra: Optional[List[str]] = None
    preferred_mother_tongue: Optional[List[str]] = None
    preferred_marital_status: Optional[List[str]] = None
    preferred_food_habit: Optional[List[str]] = None
    preferred_family_type: Optional[List[str]] = None
    preferred_qualification: Optional[List[str]] = None
    preferred_work_location: Optional[List[str]] = None
    preferred_company_type: Optional[List[str]] = None

    criteria_weights: Optional[CriteriaWeights] = None
    match_threshold: Optional[float] = Field(default=None, ge=0, le=100)

    enable_match_notifications: Optional[bool] = None
    notification_frequency: Optional[NotificationFrequency] = None

    def changes(self) -> dict:
        """Fields explicitly provided by the client, keyed by attribute name."""
        return self.model_dump(exclude_unset=True, mode='json')
