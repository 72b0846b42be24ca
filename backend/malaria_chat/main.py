import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from malaria_chat.api.middleware import cors_headers, cors_middleware
from malaria_chat.api.router import api_router
from malaria_chat.config import get_settings
from malaria_chat.constants import APOLOGY_MESSAGE, INVALID_REQUEST_MESSAGE
from malaria_chat.schemas.chat import ErrorResponse
from malaria_chat.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Malaria chat relay starting up...")
    if not settings.gateway_configured:
        logger.warning("AI_GATEWAY_API_KEY is not configured; chat requests will fail")
    yield
    logger.info("Malaria chat relay shutting down...")


app = FastAPI(
    title="Malaria Chat",
    description="Malaria education chat relay to a hosted AI gateway",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS: preflight short-circuit + headers on every response
app.middleware("http")(cors_middleware)

# Include API routes
app.include_router(api_router)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Invalid request: " + "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "error": _format_validation_errors(exc),
            "message": INVALID_REQUEST_MESSAGE,
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Unparseable bodies, unknown routes and wrong methods."""
    message = INVALID_REQUEST_MESSAGE if exc.status_code < 500 else APOLOGY_MESSAGE
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=str(exc.detail), message=message).model_dump(),
        headers=exc.headers,
    )


@app.exception_handler(Exception)
async def internal_error_handler(request: Request, exc: Exception):
    logger.exception("Internal server error")
    return JSONResponse(
        status_code=500,
        content={
            "error": str(exc) or "An unexpected error occurred",
            "message": APOLOGY_MESSAGE,
        },
        headers=cors_headers(),
    )
