from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.db.base import Base, build_engine, build_session_factory
from app.exceptions import SoulBuddyException
from app.logger import configure_logging, logger
from app.middleware.correlation import CorrelationIdMiddleware
from app.readings import readings_router
from app.utils.llm import ChatLLMTextGenerator

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the database engine and provider client, release them on shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)

    engine = build_engine(settings)
    Base.metadata.create_all(bind=engine)
    logger.info("database_tables_created")

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.text_generator = ChatLLMTextGenerator(settings)

    logger.info("app_startup", version=VERSION, environment=settings.environment)

    yield

    await app.state.text_generator.aclose()
    engine.dispose()
    logger.info("app_shutdown")


app = FastAPI(
    title="SoulBuddy API",
    description="""
# SoulBuddy API

Collects birth details, generates an AI spiritual reading for them and serves
stored readings back to the web client.

## Readings

Each reading has three sections: kundali insights, recommendations and
spiritual guidance. When the text generation provider is unavailable a
built-in reading personalised with the submitted details is returned instead.
    """,
    version=VERSION,
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "readings",
            "description": "Profile signup and spiritual readings",
        },
        {
            "name": "health",
            "description": "Health check endpoints",
        },
    ],
)


def _show_error_details() -> bool:
    return not get_settings().is_production


@app.exception_handler(SoulBuddyException)
async def soulbuddy_exception_handler(request: Request, exc: SoulBuddyException):
    """Handle all custom SoulBuddy exceptions."""
    logger.warning(
        "soulbuddy_exception",
        error_code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
    )
    include_details = exc.status_code < 500 or _show_error_details()
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(include_details=include_details),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors with user-friendly messages."""
    field_errors = []
    for error in exc.errors():
        loc = error.get("loc", [])
        field = ".".join(str(part) for part in loc if part != "body")
        field_errors.append({"field": field, "message": error.get("msg", "Invalid value")})

    logger.warning("validation_error", path=request.url.path, errors=field_errors)

    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request data",
            "code": "VALIDATION_ERROR",
            "details": {"errors": field_errors},
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle standard HTTP exceptions with consistent format."""
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail) if exc.detail else "An error occurred"},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions without leaking stack traces."""
    logger.exception(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        error_message=str(exc),
    )
    content = {"error": "Internal server error"}
    if _show_error_details():
        content["details"] = str(exc)
    return JSONResponse(status_code=500, content=content)


_settings = get_settings()

# Last added = first executed
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Correlation-ID"],
)

app.include_router(readings_router)


@app.get("/health", tags=["health"])
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.get("/health/live", tags=["health"])
async def liveness_check():
    """Returns 200 while the process is running."""
    return {"status": "alive"}


@app.get("/health/ready", tags=["health"])
async def readiness_check(request: Request):
    """
    Readiness probe.

    Returns 200 when the database answers a trivial query, 503 otherwise.
    """
    checks = {"database": False, "status": "not_ready"}

    try:
        with request.app.state.session_factory() as db:
            db.execute(text("SELECT 1"))
        checks["database"] = True
    except Exception as e:  # noqa: BLE001
        logger.warning("readiness_check_db_failed", error=str(e))
        if _show_error_details():
            checks["database_error"] = str(e)

    if checks["database"]:
        checks["status"] = "ready"
        return checks
    return JSONResponse(status_code=503, content=checks)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=5000, reload=True)
