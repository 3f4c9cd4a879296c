"""
Request and response models for the profile and reading endpoints.

All models serialise to camelCase to match the web client.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.db.models import Profile, Reading

REQUIRED_FIELDS: List[str] = ["name", "dateOfBirth", "time", "gender", "state", "city"]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserCreateRequest(CamelModel):
    """
    Signup form body.

    Every field is optional here so that incomplete submissions reach the
    workflow, which reports exactly which fields are missing.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: Optional[str] = None
    date_of_birth: Optional[str] = None
    time: Optional[str] = None
    gender: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None

    def received(self) -> Dict[str, Any]:
        """Submitted values keyed by their wire names."""
        return self.model_dump(by_alias=True)


class ProfileResponse(CamelModel):
    id: UUID
    name: str
    date_of_birth: date
    time_of_birth: str
    gender: str
    state: str
    city: str
    created_at: datetime


class ReadingSectionsResponse(CamelModel):
    kundali_insights: str
    recommendations: str
    spiritual_guidance: str

    @classmethod
    def from_record(cls, reading: Reading) -> "ReadingSectionsResponse":
        return cls(
            kundali_insights=reading.kundali_section,
            recommendations=reading.recommendations_section,
            spiritual_guidance=reading.practice_section,
        )


class StoredReadingResponse(ReadingSectionsResponse):
    created_at: datetime

    @classmethod
    def from_record(cls, reading: Reading) -> "StoredReadingResponse":
        return cls(
            kundali_insights=reading.kundali_section,
            recommendations=reading.recommendations_section,
            spiritual_guidance=reading.practice_section,
            created_at=reading.created_at,
        )


class ReadingResponse(StoredReadingResponse):
    user_id: UUID

    @classmethod
    def from_record(cls, reading: Reading) -> "ReadingResponse":
        return cls(
            user_id=reading.profile_id,
            kundali_insights=reading.kundali_section,
            recommendations=reading.recommendations_section,
            spiritual_guidance=reading.practice_section,
            created_at=reading.created_at,
        )


class UserCreatedData(CamelModel):
    user_id: UUID
    redirect_url: str
    user: ProfileResponse
    reading: ReadingSectionsResponse


class UserCreatedResponse(CamelModel):
    message: str
    data: UserCreatedData


class LatestReadingResponse(CamelModel):
    user: ProfileResponse
    reading: StoredReadingResponse


def profile_to_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse.model_validate(profile)
