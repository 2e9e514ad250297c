from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()

DEFAULT_DIRECTORY_URL = (
    "https://gateway.pinata.cloud/ipfs/QmeaS5X6M8i2MGUMrtWKXn9DRfXU2T9o8HE82MvsUzdb7Z"
)


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. Values are read when
    the instance is built, so tests can change the environment and call
    ``get_settings.cache_clear()``.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.groq_api_key: Optional[str] = os.getenv("GROQ_API_KEY") or None
        self.groq_model: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
        self.temperature: float = float(os.getenv("MODEL_TEMPERATURE", "0.7"))
        self.max_tokens: int = int(os.getenv("MODEL_MAX_TOKENS", "1000"))
        self.provider_timeout: float = float(os.getenv("PROVIDER_TIMEOUT", "30"))

        self.model_directory_url: str = os.getenv(
            "MODEL_DIRECTORY_URL", DEFAULT_DIRECTORY_URL
        )
        self.directory_timeout: float = float(os.getenv("DIRECTORY_TIMEOUT", "10"))
        self.relay_url: str = os.getenv(
            "RELAY_URL", "http://127.0.0.1:8000/chat-relay"
        )
        self.relay_timeout: float = float(os.getenv("RELAY_TIMEOUT", "60"))

        self.host: str = os.getenv("HOST", "127.0.0.1")
        self.port: int = int(os.getenv("PORT", "8000"))


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
