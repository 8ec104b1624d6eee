from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from careerforge.database import Base, utcnow


class CoverLetter(Base):
    __tablename__ = "cover_letters"
    __table_args__ = (
        Index("idx_cover_letters_user_updated", "user_id", "updated_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
