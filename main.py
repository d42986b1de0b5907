"""
RescueLink Backend - FastAPI Application Entry Point

Disaster-relief coordination: emergency intake, volunteer assignment,
notifications and relief providers.
"""

from contextlib import asynccontextmanager
from typing import Any
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.logging import setup_logging, log_request_middleware
from core.database import engine, Base
from core.exceptions import RescueLinkError
from schemas.responses import StandardErrorResponse
from api.routes import emergency, volunteer, assignments, notifications, relief
import models  # noqa: F401  registers every table on Base.metadata

# Setup logging
logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting RescueLink Backend application...")

    # Create database tables (for development)
    if settings.ENV == "development":
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created (development mode)")

    yield

    logger.info("Shutting down RescueLink Backend application...")
    await engine.dispose()


# Create FastAPI application
app = FastAPI(
    title="RescueLink Backend API",
    description="Disaster-relief coordination backend",
    version=settings.VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan
)


# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.ENABLE_REQUEST_LOGGING:
    app.middleware("http")(log_request_middleware)


def error_response(status_code: int, message: str, detail: Any = None, headers: dict = None) -> JSONResponse:
    body = StandardErrorResponse(message=message, detail=detail if settings.DEBUG else None)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True), headers=headers
    )


def _client(request: Request) -> str:
    return request.client.host if request.client else "unknown"


@app.exception_handler(RescueLinkError)
async def rescuelink_exception_handler(request: Request, exc: RescueLinkError):
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message} | "
        f"Path: {request.url.path} | "
        f"Method: {request.method} | "
        f"Client: {_client(request)}"
    )
    cause = exc.__cause__
    return error_response(exc.status_code, exc.message, str(cause) if cause else None)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation exceptions."""
    errors = exc.errors()
    logger.warning(
        f"Validation Exception: {errors} | "
        f"Path: {request.url.path} | "
        f"Method: {request.method} | "
        f"Client: {_client(request)}"
    )
    user_message = errors[0].get("msg", "Invalid input data") if errors else "Invalid input data"

    return error_response(
        status.HTTP_400_BAD_REQUEST,
        user_message,
        [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors],
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"HTTP Exception: {exc.detail} | "
        f"Path: {request.url.path} | "
        f"Method: {request.method} | "
        f"Client: {_client(request)}"
    )
    return error_response(exc.status_code, str(exc.detail), str(exc), getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Server Exception: {exc} | "
        f"Path: {request.url.path} | "
        f"Method: {request.method} | "
        f"Client: {_client(request)}"
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", str(exc)
    )


# Include API routers
app.include_router(emergency.router, prefix="/api/emergency", tags=["Emergency Requests"])
app.include_router(volunteer.router, prefix="/api/volunteer", tags=["Volunteers"])
app.include_router(assignments.router, prefix="/api/assignments", tags=["Assignments"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])
app.include_router(relief.router, prefix="/api/relief", tags=["Relief Providers"])


@app.get("/")
async def root():
    return {
        "success": True,
        "message": f"{settings.APP_NAME} is running",
        "data": {"version": settings.VERSION},
    }


@app.get("/health")
async def health_check():
    database = "ok"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        database = "unavailable"

    return {
        "success": True,
        "message": "Health check",
        "data": {"backend": "ok", "database": database},
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
