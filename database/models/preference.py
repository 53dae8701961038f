import uuid

from sqlalchemy import Column, Text, Boolean, Numeric, TIMESTAMP, JSON, Uuid, UniqueConstraint, Index, func
from sqlalchemy.dialects.postgresql import JSONB

from .base import Base

JsonType = JSON().with_variant(JSONB(), 'postgresql')


class UserPreference(Base):
    """
    A user's saved matching criteria, weights and notification settings.

    One record per user (enforced by uq_user_preference_user). Range fields
    are stored as {"min": ..., "max": ...} objects and list constraints as
    JSON arrays of strings; an empty list means "no constraint".
    """
    __tablename__ = 'user_preference'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False)

    # Ranges
    preferred_age_range = Column(JsonType, nullable=True)
    preferred_height = Column(JsonType, nullable=True)
    preferred_income = Column(JsonType, nullable=True)

    # Basic
    preferred_education = Column(JsonType, default=list)
    preferred_occupation = Column(JsonType, default=list)

    # Location
    preferred_cities = Column(JsonType, default=list)
    preferred_states = Column(JsonType, default=list)
    preferred_countries = Column(JsonType, default=list)

    # Cultural
    preferred_caste = Column(JsonType, default=list)
    preferred_sub_caste = Column(JsonType, default=list)
    preferred_gotra = Column(JsonType, default=list)
    preferred_mother_tongue = Column(JsonType, default=list)

    # Lifestyle
    preferred_marital_status = Column(JsonType, default=list)
    preferred_food_habit = Column(JsonType, default=list)
    preferred_family_type = Column(JsonType, default=list)  # nuclear, joint, ...

    # Additional
    preferred_qualification = Column(JsonType, default=list)
    preferred_work_location = Column(JsonType, default=list)
    preferred_company_type = Column(JsonType, default=list)  # private, government, ...

    # Scoring
    criteria_weights = Column(JsonType, nullable=False, default=dict)
    match_threshold = Column(Numeric(5, 2), nullable=False, default=70)

    # Notifications
    enable_match_notifications = Column(Boolean, nullable=False, default=True)
    notification_frequency = Column(Text, nullable=False, default='immediate')

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('user_id', name='uq_user_preference_user'),
        Index('idx_user_preference_notify', 'enable_match_notifications'),
    )
