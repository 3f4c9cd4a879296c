from app.schemas.profile import ProfileCreate
from app.schemas.reading import ReadingSections

__all__ = ["ProfileCreate", "ReadingSections"]
