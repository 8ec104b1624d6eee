from __future__ import annotations

from sqlalchemy import Boolean, Column, DateTime, String

from careerforge.database import Base, utcnow


class UserProfile(Base):
    __tablename__ = "user_profiles"

    user_id = Column(String(255), primary_key=True)
    has_premium_export = Column(Boolean, default=False, nullable=False)
    premium_provider = Column(String(32))
    premium_reference = Column(String(255))
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
