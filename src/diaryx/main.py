# Main application entry point
import re
from contextlib import asynccontextmanager
from typing import Iterable, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import health_router, notes_router, sharing_router
from .config import get_settings
from .core.logging import LoggingMiddleware, get_logger, setup_logging
from .core.schemas.common import ErrorDetail, ErrorResponse
from .database import create_tables, dispose_engine

# Setup logging first
setup_logging()
logger = get_logger("main")

settings = get_settings()

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:4321",
    "http://127.0.0.1:4321",
    "https://app.diaryx.net",
]


def build_origin_regex(patterns: Iterable[str]) -> Optional[str]:
    """Turn origin patterns such as ``https://*.example.app`` into one regex."""
    parts: List[str] = []
    for pattern in patterns:
        if pattern == "*":
            return ".*"
        parts.append(re.escape(pattern).replace(r"\*", ".*"))
    if not parts:
        return None
    return "^(?:" + "|".join(parts) + ")$"


def cors_origins() -> List[str]:
    """Configured trusted origins followed by the defaults, without duplicates."""
    return list(dict.fromkeys([*settings.trusted_origins, *DEFAULT_CORS_ORIGINS]))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(
        "Starting Diaryx application",
        extra={
            "version": settings.app_version,
            "environment": settings.environment,
            "debug": settings.debug,
        },
    )

    if settings.skip_lifespan_db:
        logger.info("Skipping DB table creation due to SKIP_LIFESPAN_DB=1")
    else:
        try:
            await create_tables()
            logger.info("Database tables created/verified")
        except Exception as e:
            logger.error("Failed to create database tables", exc_info=e)
            raise

    yield

    # Shutdown
    logger.info("Shutting down Diaryx application")
    await dispose_engine()


app = FastAPI(
    title="Diaryx",
    description="Note sync and sharing API",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=build_origin_regex(cors_origins()),
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as ``{"error": <code>}``."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures and return the error envelope."""
    logger.error(f"Failed to handle {request.method} {request.url.path}", exc_info=exc)
    body = ErrorResponse(error=ErrorDetail(message=str(exc) or "Unexpected error."))
    return JSONResponse(status_code=500, content=body.model_dump())


# Include routers
app.include_router(notes_router, prefix="/api")
app.include_router(sharing_router, prefix="/api")
app.include_router(health_router, prefix="/api")


# Root endpoint
@app.get("/", response_class=HTMLResponse)
async def root():
    return (
        "<h1>Welcome to the Diaryx API!</h1><p>All systems are working!</p>"
        "<p>If you want to use the app, please visit "
        "<a href='https://app.diaryx.net'>app.diaryx.net</a></p>"
    )


# Plain liveness probe
@app.get("/health", response_class=PlainTextResponse)
async def basic_health():
    return "ok"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("diaryx.main:app", host=settings.host, port=settings.port, reload=settings.reload)
