"""FastAPI application: the main entrypoint for Threadboard."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy import text
from starlette.middleware.sessions import SessionMiddleware

from backend.app.api.channels import router as channels_router
from backend.app.api.thread_pages import router as thread_pages_router
from backend.app.api.threads import router as threads_router
from backend.app.api.users import router as users_router
from backend.app.config import settings
from backend.app.db import engine, init_db
from backend.app.errors import AppError, ValidationError, field_errors

logger = logging.getLogger(__name__)

# Configure logging for our app modules so INFO/DEBUG logs are visible.
# Uvicorn's log_level="info" only affects its own logger, not ours.
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(levelname)s:%(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    await init_db()
    yield
    await engine.dispose()


app = FastAPI(
    title="Threadboard",
    description="Discussion threads within channels",
    version="0.1.0",
    lifespan=lifespan,
)

# Flash messages for the HTML pages live in the signed session cookie.
app.add_middleware(SessionMiddleware, secret_key=settings.secret_key)


# --- Exception handlers ---


@app.exception_handler(AppError)
async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reshape FastAPI's validation errors into the same body as ValidationError."""
    error = ValidationError(field_errors(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_body())


@app.exception_handler(Exception)
async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch unhandled exceptions and return a clean JSON 500 instead of a stack trace."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Include routers
app.include_router(users_router, prefix="/api")
app.include_router(channels_router, prefix="/api")
app.include_router(threads_router, prefix="/api")
app.include_router(thread_pages_router)  # HTML pages (no /api prefix)


@app.get("/", include_in_schema=False)
async def home() -> RedirectResponse:
    return RedirectResponse("/threads")


# --- Health check ---


@app.get("/api/health")
async def health() -> dict[str, str]:
    """Health check with DB connectivity verification."""
    db_ok = "ok"
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        db_ok = "error"
        logger.exception("Health check: database connectivity failed")

    return {
        "status": "ok" if db_ok == "ok" else "degraded",
        "database": db_ok,
    }
