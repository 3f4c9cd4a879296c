from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models import Reading, utc_now
from app.exceptions import DatabaseError
from app.logger import logger
from app.schemas.reading import ReadingSections


class ReadingStore:
    """Durable mapping from profile id to its three generated sections."""

    def __init__(self, db: Session):
        self.db = db

    def build(self, profile_id: UUID, sections: ReadingSections) -> Reading:
        return Reading(
            profile_id=profile_id,
            kundali_section=sections.kundali_section,
            recommendations_section=sections.recommendations_section,
            practice_section=sections.practice_section,
            created_at=utc_now(),
        )

    def create(self, profile_id: UUID, sections: ReadingSections) -> UUID:
        reading = self.build(profile_id, sections)
        try:
            self.db.add(reading)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("reading_create_failed", profile_id=str(profile_id), error=str(exc))
            raise DatabaseError("Failed to save reading", operation="insert", original_error=str(exc)) from exc

        logger.info("reading_created", profile_id=str(profile_id))
        return reading.profile_id

    def get_by_id(self, profile_id: UUID) -> Optional[Reading]:
        return self.db.get(Reading, profile_id)

    def list_all(self) -> List[Reading]:
        return self.db.query(Reading).order_by(Reading.created_at.asc()).all()
