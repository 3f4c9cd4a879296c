"""
Profile schemas used between the workflow and the stores.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field


class ProfileCreate(BaseModel):
    """Validated birth details for a new profile."""

    name: str = Field(..., min_length=1)
    date_of_birth: date
    time_of_birth: str = Field(..., min_length=1)
    gender: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
