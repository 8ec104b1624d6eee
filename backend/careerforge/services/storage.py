from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from careerforge.database import utcnow
from careerforge.models.cover_letter import CoverLetter
from careerforge.models.resume import Resume
from careerforge.models.user_profile import UserProfile


_WRITABLE_FIELDS = ("title", "content")


def _next_timestamp(previous: datetime | None) -> datetime:
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


class DocumentStore:
    """Owner-scoped CRUD for one document table (resumes or cover letters)."""

    def __init__(self, model: type[Resume] | type[CoverLetter]) -> None:
        self.model = model

    def _owned(self, db: Session, document_id: int, user_id: str):
        return db.query(self.model).filter(self.model.id == document_id, self.model.user_id == user_id)

    def list_for_user(self, db: Session, user_id: str) -> list[Any]:
        return (
            db.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(self.model.updated_at.desc(), self.model.id.desc())
            .all()
        )

    def get(self, db: Session, document_id: int, user_id: str) -> Any | None:
        return self._owned(db, document_id, user_id).first()

    def create(self, db: Session, user_id: str, data: dict[str, Any]) -> Any:
        values = {key: data[key] for key in _WRITABLE_FIELDS if key in data}
        now = utcnow()
        document = self.model(**values, user_id=user_id, created_at=now, updated_at=now)
        db.add(document)
        db.commit()
        db.refresh(document)
        return document

    def update(self, db: Session, document_id: int, user_id: str, changes: dict[str, Any]) -> Any | None:
        document = self._owned(db, document_id, user_id).first()
        if document is None:
            return None

        for key in _WRITABLE_FIELDS:
            if key in changes and changes[key] is not None:
                setattr(document, key, changes[key])
        document.updated_at = _next_timestamp(document.updated_at)
        db.add(document)
        db.commit()
        db.refresh(document)
        return document

    def delete(self, db: Session, document_id: int, user_id: str) -> None:
        self._owned(db, document_id, user_id).delete(synchronize_session=False)
        db.commit()


class PremiumStore:
    def is_premium(self, db: Session, user_id: str) -> bool:
        profile = db.get(UserProfile, user_id)
        return bool(profile and profile.has_premium_export)

    def grant(self, db: Session, user_id: str, provider: str, reference: str) -> UserProfile:
        try:
            return self._grant(db, user_id, provider, reference)
        except IntegrityError:
            # A concurrent grant inserted the row first; update it instead.
            db.rollback()
            return self._grant(db, user_id, provider, reference)

    def _grant(self, db: Session, user_id: str, provider: str, reference: str) -> UserProfile:
        profile = db.get(UserProfile, user_id)
        if profile is None:
            profile = UserProfile(user_id=user_id)
        profile.has_premium_export = True
        profile.premium_provider = provider
        profile.premium_reference = reference
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile


resume_store = DocumentStore(Resume)
cover_letter_store = DocumentStore(CoverLetter)
premium_store = PremiumStore()
