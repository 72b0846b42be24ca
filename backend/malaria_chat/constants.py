"""User-facing texts shared by the routes and app-level error handlers."""

APOLOGY_MESSAGE = (
    "I apologize for the technical difficulty. "
    "Please try again or contact support if the issue persists."
)
INVALID_REQUEST_MESSAGE = "Please send your conversation as a POST with a 'messages' array."
RATE_LIMIT_MESSAGE = "Too many requests right now. Please try again shortly."
PAYMENT_REQUIRED_MESSAGE = "The assistant is currently unavailable. Please contact support."
