from app.readings.router import router as readings_router

__all__ = ["readings_router"]
