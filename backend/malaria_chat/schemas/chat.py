from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

ChatMode = Literal["chat", "suggest"]
FAQCategory = Literal["prevention", "symptoms", "treatment", "medication", "general"]

FAQ_CATEGORIES: tuple[str, ...] = get_args(FAQCategory)
MIN_SUGGESTIONS = 3
MAX_SUGGESTIONS = 5


class ChatMessage(BaseModel):
    """A single turn in the conversation."""

    role: Literal["user", "assistant", "system"]
    content: str


class ChatRequest(BaseModel):
    """Request body for the malaria chat relay.

    The wire field is ``type``; it is exposed as ``mode`` in Python and
    ``type`` is the only accepted spelling on input.
    """

    messages: list[ChatMessage]
    mode: ChatMode = Field(default="chat", alias="type")


class MessageResponse(BaseModel):
    """Plain chat reply."""

    message: str


class FAQSuggestion(BaseModel):
    model_config = ConfigDict(extra="forbid")

    question: str
    category: FAQCategory


class SuggestionsResponse(BaseModel):
    """Structured FAQ suggestions returned by the ``suggest_faqs`` tool."""

    model_config = ConfigDict(extra="forbid")

    suggestions: list[FAQSuggestion] = Field(
        ..., min_length=MIN_SUGGESTIONS, max_length=MAX_SUGGESTIONS
    )


class ErrorResponse(BaseModel):
    error: str
    message: str
