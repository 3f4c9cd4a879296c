from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.models import Profile, Reading
from app.exceptions import DatabaseError, ResourceNotFoundError, ValidationError
from app.logger import logger
from app.readings.generator import ReadingGenerator
from app.readings.models import REQUIRED_FIELDS, UserCreateRequest
from app.schemas.profile import ProfileCreate
from app.schemas.reading import ReadingSections
from app.services.profile_service import ProfileStore
from app.services.reading_service import ReadingStore

ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


@dataclass
class CreatedProfile:
    profile: Profile
    reading: Reading


def validate_user_request(request: UserCreateRequest) -> ProfileCreate:
    """
    Check that all six birth-detail fields are present and non-blank.

    Raises:
        ValidationError: listing the missing fields and echoing what was received.
    """
    received = request.received()
    values = {
        key: value.strip() if isinstance(value, str) else value
        for key, value in received.items()
    }
    missing = [field for field in REQUIRED_FIELDS if not values.get(field)]
    if missing:
        logger.info("user_request_missing_fields", missing=missing)
        raise ValidationError("All fields are required", missing=missing, received=received)

    date_error = ValidationError(
        "dateOfBirth must be a calendar date (YYYY-MM-DD)",
        field="dateOfBirth",
        received=received,
    )
    # Only the dashed form, so the stored date renders back exactly as submitted
    if not ISO_DATE.fullmatch(values["dateOfBirth"]):
        raise date_error
    try:
        date_of_birth = date.fromisoformat(values["dateOfBirth"])
    except ValueError:
        raise date_error

    return ProfileCreate(
        name=values["name"],
        date_of_birth=date_of_birth,
        time_of_birth=values["time"],
        gender=values["gender"],
        state=values["state"],
        city=values["city"],
    )


class ReadingWorkflow:
    """Creates profiles with their readings and serves them back."""

    def __init__(self, db: Session, generator: ReadingGenerator) -> None:
        self.db = db
        self.generator = generator
        self.profiles = ProfileStore(db)
        self.readings = ReadingStore(db)

    async def create_profile_with_reading(self, request: UserCreateRequest) -> CreatedProfile:
        """
        Validate the submission, generate its reading and persist both.

        The profile and the reading are committed in one transaction, so a
        failed write never leaves a profile without its reading.

        Raises:
            ValidationError: if any required field is missing or malformed.
            DatabaseError: if the records could not be stored.
        """
        profile_create = validate_user_request(request)

        profile = self.profiles.build(profile_create)
        logger.info("profile_received", profile_id=str(profile.id))

        sections: ReadingSections = await self.generator.generate(profile)
        reading = self.readings.build(profile.id, sections)

        try:
            self.db.add(profile)
            self.db.add(reading)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("profile_reading_persist_failed", profile_id=str(profile.id), error=str(exc))
            raise DatabaseError(
                "Failed to save user data", operation="insert", original_error=str(exc)
            ) from exc

        logger.info("profile_reading_created", profile_id=str(profile.id))
        return CreatedProfile(profile=profile, reading=reading)

    def list_profiles(self) -> List[Profile]:
        return self.profiles.list_all()

    def get_profile(self, profile_id: str) -> Profile:
        profile = self.profiles.get_by_id(self._parse_id(profile_id, "User"))
        if profile is None:
            raise ResourceNotFoundError("User", resource_id=profile_id)
        return profile

    def get_reading(self, profile_id: str) -> Reading:
        reading = self.readings.get_by_id(self._parse_id(profile_id, "Reading"))
        if reading is None:
            raise ResourceNotFoundError("Reading", resource_id=profile_id)
        return reading

    def get_latest_reading(self) -> Tuple[Profile, Reading]:
        profile: Optional[Profile] = self.profiles.get_latest()
        if profile is None:
            raise ResourceNotFoundError("User")
        reading = self.readings.get_by_id(profile.id)
        if reading is None:
            raise ResourceNotFoundError("Reading", resource_id=str(profile.id))
        return profile, reading

    @staticmethod
    def _parse_id(raw_id: str, resource: str) -> UUID:
        try:
            return UUID(raw_id)
        except (TypeError, ValueError):
            raise ResourceNotFoundError(resource, resource_id=raw_id)
