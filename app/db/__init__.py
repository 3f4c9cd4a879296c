from app.db.base import Base, build_engine, build_session_factory, get_db
from app.db.models import Profile, Reading

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "get_db",
    "Profile",
    "Reading",
]
