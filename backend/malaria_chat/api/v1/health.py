"""Health check endpoint."""
from fastapi import APIRouter

from malaria_chat.config import get_settings

router = APIRouter()

SERVICE_NAME = "malaria-chat"
SERVICE_VERSION = "1.0.0"


@router.get("/health")
async def health_check():
    """Report service status and whether the AI gateway key is configured.

    Always 200: a missing key only degrades the relay, it does not take the
    process down.
    """
    configured = get_settings().gateway_configured
    return {
        "status": "ok" if configured else "degraded",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "gateway_configured": configured,
    }
