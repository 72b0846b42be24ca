"""Malaria chat relay endpoint."""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from malaria_chat.constants import (
    APOLOGY_MESSAGE,
    PAYMENT_REQUIRED_MESSAGE,
    RATE_LIMIT_MESSAGE,
)
from malaria_chat.schemas.chat import (
    ChatRequest,
    ErrorResponse,
    MessageResponse,
    SuggestionsResponse,
)
from malaria_chat.services.chat import MalariaChatService, SuggestionFormatError
from malaria_chat.services.gateway import (
    GatewayClient,
    GatewayError,
    GatewayPaymentRequired,
    GatewayRateLimited,
    get_gateway_client,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def error_response(status_code: int, error: str, message: str = APOLOGY_MESSAGE) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


@router.post(
    "/malaria-chat",
    response_model=MessageResponse | SuggestionsResponse,
    responses={
        400: {"model": ErrorResponse},
        402: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def malaria_chat(
    chat_request: ChatRequest,
    gateway: GatewayClient = Depends(get_gateway_client),
):
    """Relay a conversation to the AI gateway.

    ``type="chat"`` returns ``{"message": ...}``; ``type="suggest"`` returns
    ``{"suggestions": [...]}`` with 3-5 FAQ entries.
    """
    service = MalariaChatService(gateway)

    try:
        result = await service.reply(chat_request)
    except GatewayRateLimited as e:
        return error_response(429, e.message, RATE_LIMIT_MESSAGE)
    except GatewayPaymentRequired as e:
        return error_response(402, e.message, PAYMENT_REQUIRED_MESSAGE)
    except (GatewayError, SuggestionFormatError) as e:
        logger.error(f"Malaria chat failed: {e.message}")
        return error_response(500, e.message)
    except Exception as e:
        logger.exception("Unexpected error in malaria chat")
        return error_response(500, str(e) or "An unexpected error occurred")

    return result
