"""
Scribe - FastAPI Application
============================

FastAPI application factory and configuration.
"""

from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.logger import logger
from src.api.errors import APIError, ErrorCode, error_response
from src.api.dependencies import set_bot, set_transcript_service
from src.api.routers import health_router, transcripts_router
from src.services.transcripts import TranscriptService


# =============================================================================
# OpenAPI Documentation
# =============================================================================

API_DESCRIPTION = """
## Scribe Transcript API

Serves rendered ticket transcripts at the links the bot hands out:

```
GET /tickets/transcript-{ticket_id}.{ext}
```

### Error Responses

All errors follow a consistent format:
```json
{
    "success": false,
    "error_code": "TICKET_NOT_FOUND",
    "message": "Support ticket not found",
    "details": null
}
```
"""

OPENAPI_TAGS = [
    {
        "name": "Health",
        "description": "Health check endpoint",
    },
    {
        "name": "Transcripts",
        "description": "Rendered ticket transcripts",
    },
]


# =============================================================================
# Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.tree("API Starting", [
        ("Version", app.version),
    ], emoji="🚀")

    yield

    logger.tree("API Stopping", [], emoji="🛑")


# =============================================================================
# Application Factory
# =============================================================================

def create_app(
    bot: Optional[Any] = None,
    service: Optional[TranscriptService] = None,
    debug: bool = False,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        bot: Optional Discord bot instance for dependency injection
        service: Transcript service the routes render with
        debug: Expose the interactive docs

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Scribe API",
        description=API_DESCRIPTION,
        version="1.0.0",
        docs_url="/docs" if debug else None,
        redoc_url=None,
        openapi_url="/openapi.json" if debug else None,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    if bot is not None:
        set_bot(bot)
    if service is not None:
        set_transcript_service(service)

    # ==========================================================================
    # Exception Handlers
    # ==========================================================================

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        return JSONResponse(status_code=exc.status_code, content=exc.detail, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(
            ErrorCode.VALIDATION_ERROR,
            details={"errors": [str(err.get("msg", "")) for err in exc.errors()]},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions with consistent error format."""
        logger.error("Unhandled API Error", [
            ("Path", str(request.url.path)[:50]),
            ("Method", request.method),
            ("Error Type", type(exc).__name__),
            ("Error", str(exc)[:100]),
        ])
        return error_response(ErrorCode.SERVER_ERROR)

    # ==========================================================================
    # Routers
    # ==========================================================================

    app.include_router(health_router)
    app.include_router(transcripts_router)

    return app


__all__ = ["create_app"]
