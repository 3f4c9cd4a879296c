"""
Services module - persistence for profiles and readings

Contains:
- Profiles: profile_service.py
- Readings: reading_service.py
"""

from app.services.profile_service import ProfileStore
from app.services.reading_service import ReadingStore

__all__ = [
    "ProfileStore",
    "ReadingStore",
]
