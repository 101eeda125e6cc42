"""
FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance.
It handles:
1. Application initialization
2. Router registration
3. Middleware configuration (request ids, CORS and audit logging)
4. Exception handlers (ThoughtlogError, request validation, uncaught errors)
5. Startup/shutdown events

Run with: uvicorn thoughtlog.api.main:app --reload
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from thoughtlog import __version__
from thoughtlog.core.audit import AuditMiddleware, CORSHeadersMiddleware, RequestIdMiddleware
from thoughtlog.core.config import get_settings
from thoughtlog.core.exceptions import ErrorKind, ThoughtlogError
from thoughtlog.core.logging_config import get_logger, setup_logging
from thoughtlog.api.routes import (
    categories_router,
    entries_router,
    health_router,
    insights_router,
    tasks_router,
)


# Initialize logging before anything else
settings = get_settings()
setup_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: create missing tables
    - Shutdown: dispose the connection pool
    """
    logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
    logger.info(f"OpenAI configured: {bool(settings.openai_api_key)}")
    logger.info(f"Claude configured: {bool(settings.claude_api_key)}")
    logger.info(f"Audit Logging: {settings.enable_audit_logging}")

    from thoughtlog.database.init_db import init_tables
    try:
        init_tables()
        logger.info("Checked/Initialized tables.")
    except Exception as e:
        logger.error(f"Failed to auto-init tables: {e}")

    yield

    logger.info(f"Shutting down {settings.app_name}")

    from thoughtlog.database.connection import get_database
    try:
        get_database().close()
    except Exception as e:
        logger.error(f"Error closing database: {e}")


app = FastAPI(
    title="Thoughtlog API",
    description="""
    Thought journal backend with LLM categorization and insights.

    ## Features

    - **Categorize**: suggest a broad category for a thought
    - **Entries**: log thoughts, auto-filed into categories
    - **Insights**: patterns, actions and habits over recent entries
    - **Provider fallback**: OpenAI first, Claude when OpenAI is not configured
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ============================================================
# Middleware Configuration (last added runs first)
# ============================================================

if settings.enable_audit_logging:
    app.add_middleware(AuditMiddleware)
    logger.info("Audit logging middleware enabled")

app.add_middleware(CORSHeadersMiddleware)
app.add_middleware(RequestIdMiddleware)


# ============================================================
# Exception Handlers
# ============================================================

@app.exception_handler(ThoughtlogError)
async def thoughtlog_exception_handler(request: Request, exc: ThoughtlogError):
    """Render application errors as {error, kind, retryable}."""
    if exc.http_status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: [{exc.kind.value}] {exc.message}")
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and parameters are validation errors (400)."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    if location:
        message = f"{location}: {message}"

    return JSONResponse(
        status_code=400,
        content={"error": message, "kind": ErrorKind.VALIDATION.value, "retryable": False},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Handle uncaught exceptions globally.

    The message is only exposed in development mode.
    """
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content={
            "error": str(exc) if settings.is_development() else "An unexpected error occurred",
            "kind": ErrorKind.INTERNAL.value,
            "retryable": False,
        },
    )


# ============================================================
# Routers
# ============================================================

app.include_router(health_router)
app.include_router(tasks_router)
app.include_router(entries_router)
app.include_router(categories_router)
app.include_router(insights_router)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "message": "Thoughtlog API",
        "version": __version__,
        "documentation": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "thoughtlog.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development()
    )
