from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.db.base import get_db
from app.interfaces.text_generation import TextGenerator
from app.readings.generator import ReadingGenerator
from app.readings.models import (
    LatestReadingResponse,
    ProfileResponse,
    ReadingResponse,
    ReadingSectionsResponse,
    StoredReadingResponse,
    UserCreatedData,
    UserCreatedResponse,
    UserCreateRequest,
    profile_to_response,
)
from app.readings.workflow import ReadingWorkflow

router = APIRouter(prefix="/api", tags=["readings"])


def get_text_generator(request: Request) -> TextGenerator:
    return request.app.state.text_generator


def get_reading_workflow(
    db: Session = Depends(get_db),
    text_generator: TextGenerator = Depends(get_text_generator),
) -> ReadingWorkflow:
    return ReadingWorkflow(db, ReadingGenerator(text_generator))


@router.get("/test")
async def api_test():
    """Liveness probe for the web client."""
    return {"message": "API is working"}


@router.post(
    "/users",
    response_model=UserCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a profile and its spiritual reading",
    responses={
        400: {
            "description": "Missing or malformed fields",
            "content": {
                "application/json": {
                    "example": {
                        "error": "All fields are required",
                        "code": "VALIDATION_ERROR",
                        "missing": ["city"],
                        "received": {
                            "name": "Asha",
                            "dateOfBirth": "1990-04-12",
                            "time": "14:30",
                            "gender": "female",
                            "state": "Karnataka",
                            "city": None,
                        },
                    }
                }
            },
        },
        500: {"description": "Records could not be stored"},
    },
)
async def create_user(
    body: UserCreateRequest,
    workflow: ReadingWorkflow = Depends(get_reading_workflow),
    settings: Settings = Depends(get_settings),
) -> UserCreatedResponse:
    """
    Store the submitted birth details and generate a reading for them.

    The reading comes from the text generation provider when it answers,
    otherwise from the built-in reading, so a valid submission always
    receives all three sections.
    """
    created = await workflow.create_profile_with_reading(body)
    user_id = created.profile.id
    return UserCreatedResponse(
        message="User profile created successfully",
        data=UserCreatedData(
            user_id=user_id,
            redirect_url=f"{settings.reading_redirect_base.rstrip('/')}/{user_id}",
            user=profile_to_response(created.profile),
            reading=ReadingSectionsResponse.from_record(created.reading),
        ),
    )


@router.get("/users", response_model=List[ProfileResponse])
async def list_users(workflow: ReadingWorkflow = Depends(get_reading_workflow)):
    return [profile_to_response(profile) for profile in workflow.list_profiles()]


@router.get("/users/{user_id}", response_model=ProfileResponse)
async def get_user(user_id: str, workflow: ReadingWorkflow = Depends(get_reading_workflow)):
    return profile_to_response(workflow.get_profile(user_id))


@router.get("/readings/{user_id}", response_model=ReadingResponse)
async def get_reading(user_id: str, workflow: ReadingWorkflow = Depends(get_reading_workflow)):
    return ReadingResponse.from_record(workflow.get_reading(user_id))


@router.get("/latest-reading", response_model=LatestReadingResponse)
async def get_latest_reading(workflow: ReadingWorkflow = Depends(get_reading_workflow)):
    """Reading of the most recently created profile."""
    profile, reading = workflow.get_latest_reading()
    return LatestReadingResponse(
        user=profile_to_response(profile),
        reading=StoredReadingResponse.from_record(reading),
    )
