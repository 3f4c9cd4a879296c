from __future__ import annotations

from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models import Profile, utc_now
from app.exceptions import DatabaseError
from app.logger import logger
from app.schemas.profile import ProfileCreate


class ProfileStore:
    """Durable mapping from generated profile id to birth details."""

    def __init__(self, db: Session):
        self.db = db

    def build(self, profile_create: ProfileCreate) -> Profile:
        """Create an unsaved profile with its id and creation time assigned."""
        return Profile(
            id=uuid4(),
            name=profile_create.name,
            date_of_birth=profile_create.date_of_birth,
            time_of_birth=profile_create.time_of_birth,
            gender=profile_create.gender,
            state=profile_create.state,
            city=profile_create.city,
            created_at=utc_now(),
        )

    def create(self, profile_create: ProfileCreate) -> UUID:
        profile = self.build(profile_create)
        try:
            self.db.add(profile)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("profile_create_failed", error=str(exc))
            raise DatabaseError("Failed to save user data", operation="insert", original_error=str(exc)) from exc

        logger.info("profile_created", profile_id=str(profile.id))
        return profile.id

    def get_by_id(self, profile_id: UUID) -> Optional[Profile]:
        return self.db.get(Profile, profile_id)

    def list_all(self) -> List[Profile]:
        return self.db.query(Profile).order_by(Profile.created_at.asc()).all()

    def get_latest(self) -> Optional[Profile]:
        """Most recently created profile, served by the created_at index."""
        return self.db.query(Profile).order_by(Profile.created_at.desc()).limit(1).first()
