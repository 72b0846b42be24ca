"""Cross-origin handling for the browser chat UI.

Preflight requests are answered here, before routing, body parsing or any
configuration check. Every other response gets the same CORS headers.
"""
from fastapi import Request, Response

from malaria_chat.config import get_settings

ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type"
ALLOWED_METHODS = "POST, GET, OPTIONS"


def cors_headers() -> dict[str, str]:
    """Permissive CORS headers attached to every response."""
    settings = get_settings()
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
    }


async def cors_middleware(request: Request, call_next):
    """Short-circuit OPTIONS and add CORS headers to all other responses."""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=cors_headers())

    response = await call_next(request)
    response.headers.update(cors_headers())
    return response
