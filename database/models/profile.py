import uuid

from sqlalchemy import Column, Text, Integer, TIMESTAMP, JSON, Uuid, Index, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import JSONB

from .base import Base


class Profile(Base):
    """
    Matrimonial profile owned by a user. A user owns at most one profile.

    Only the attributes read by the matching engine and a few display fields
    are modelled here; the full profile lifecycle belongs to the profile service.
    """
    __tablename__ = 'profile'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False)

    # Display
    first_name = Column(Text)
    last_name = Column(Text)
    gender = Column(Text)

    # Matching attributes
    age = Column(Integer)
    highest_qualification = Column(Text)
    occupation = Column(Text)
    current_address = Column(JSON().with_variant(JSONB(), 'postgresql'), default=dict)  # street, city, state, pincode
    sub_caste = Column(Text)
    marital_status = Column(Text)
    mother_tongue = Column(Text)
    food_habit = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('user_id', name='uq_profile_user'),
        Index('idx_profile_age', 'age'),
    )

