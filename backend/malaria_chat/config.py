from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PLACEHOLDER_KEYS = ("placeholder", "your-api-key-here", "your-gateway-api-key-here")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # AI gateway (OpenAI-compatible chat completions)
    ai_gateway_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("ai_gateway_api_key", "lovable_api_key"),
    )
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    ai_gateway_model: str = "google/gemini-2.5-flash"
    ai_gateway_timeout: float = 60.0  # seconds

    # Sampling
    chat_temperature: float = 0.7
    chat_max_tokens: int = 1000

    # CORS
    cors_allow_origin: str = "*"

    # Logging
    log_level: str = "INFO"

    @property
    def gateway_configured(self) -> bool:
        """True when a usable gateway API key is set."""
        key = self.ai_gateway_api_key.strip()
        return bool(key) and key not in PLACEHOLDER_KEYS


@lru_cache
def get_settings() -> Settings:
    return Settings()
