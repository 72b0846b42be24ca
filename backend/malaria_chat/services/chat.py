"""Malaria chat relay.

Assembles the upstream conversation (system prompt first), picks the request
shape for the mode, calls the AI gateway once and normalizes its answer.
"""
import json
import logging
from collections.abc import Iterable

from pydantic import ValidationError

from malaria_chat.config import Settings, get_settings
from malaria_chat.schemas.chat import (
    FAQ_CATEGORIES,
    MAX_SUGGESTIONS,
    MIN_SUGGESTIONS,
    ChatMessage,
    ChatMode,
    ChatRequest,
    MessageResponse,
    SuggestionsResponse,
)
from malaria_chat.services.gateway import GatewayClient
from malaria_chat.services.prompts import system_message

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "I'm here to help! Please ask me anything about malaria."

SUGGEST_FAQS_TOOL = {
    "type": "function",
    "function": {
        "name": "suggest_faqs",
        "description": "Return 3-5 helpful FAQ suggestions based on the conversation.",
        "parameters": {
            "type": "object",
            "properties": {
                "suggestions": {
                    "type": "array",
                    "minItems": MIN_SUGGESTIONS,
                    "maxItems": MAX_SUGGESTIONS,
                    "items": {
                        "type": "object",
                        "properties": {
                            "question": {"type": "string"},
                            "category": {"type": "string", "enum": list(FAQ_CATEGORIES)},
                        },
                        "required": ["question", "category"],
                        "additionalProperties": False,
                    },
                }
            },
            "required": ["suggestions"],
            "additionalProperties": False,
        },
    },
}

SUGGEST_FAQS_CHOICE = {"type": "function", "function": {"name": "suggest_faqs"}}


class SuggestionFormatError(Exception):
    """Raised when the gateway's suggest_faqs tool call cannot be used."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def build_messages(messages: Iterable[ChatMessage]) -> list[dict]:
    """Prepend the system prompt to the conversation, keeping its order."""
    return [system_message()] + [m.model_dump() for m in messages]


def build_completion_request(
    messages: Iterable[ChatMessage],
    mode: ChatMode = "chat",
    settings: Settings | None = None,
) -> dict:
    """Build the chat completions request body for the given mode."""
    settings = settings or get_settings()
    body = {
        "model": settings.ai_gateway_model,
        "messages": build_messages(messages),
        "temperature": settings.chat_temperature,
        "max_tokens": settings.chat_max_tokens,
    }

    # Suggestions are forced through the tool; no free-text answer allowed
    if mode == "suggest":
        body["tools"] = [SUGGEST_FAQS_TOOL]
        body["tool_choice"] = SUGGEST_FAQS_CHOICE

    return body


def _first_message(data: dict) -> dict:
    choices = data.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return {}
    return choices[0].get("message") or {}


def _parse_suggestions(tool_call: dict) -> SuggestionsResponse:
    try:
        arguments = tool_call["function"]["arguments"]
    except (KeyError, TypeError):
        raise SuggestionFormatError("suggest_faqs tool call has no arguments")

    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments)
        except json.JSONDecodeError as e:
            raise SuggestionFormatError(f"suggest_faqs arguments are not valid JSON: {e}")

    try:
        return SuggestionsResponse.model_validate(arguments)
    except ValidationError as e:
        raise SuggestionFormatError(
            f"suggest_faqs arguments do not match the schema: {e.error_count()} error(s)"
        )


def parse_completion(
    data: dict, mode: ChatMode = "chat"
) -> MessageResponse | SuggestionsResponse:
    """Turn a gateway completion into the relay's response model.

    In suggest mode the first tool call wins. Without a tool call (or in
    chat mode) the text content is returned, or FALLBACK_MESSAGE if empty.
    """
    message = _first_message(data)

    tool_calls = message.get("tool_calls")
    if mode == "suggest" and tool_calls:
        return _parse_suggestions(tool_calls[0])

    if mode == "suggest":
        logger.warning("No tool call in suggest response, falling back to text")

    return MessageResponse(message=message.get("content") or FALLBACK_MESSAGE)


class MalariaChatService:
    """Relays one conversation turn to the AI gateway."""

    def __init__(self, gateway: GatewayClient, settings: Settings | None = None):
        self.gateway = gateway
        self.settings = settings or get_settings()

    async def reply(
        self, request: ChatRequest
    ) -> MessageResponse | SuggestionsResponse:
        logger.info(
            f"Processing {request.mode} request with {len(request.messages)} messages"
        )

        body = build_completion_request(request.messages, request.mode, self.settings)
        data = await self.gateway.create_chat_completion(body)
        logger.info("AI response received successfully")

        return parse_completion(data, request.mode)
