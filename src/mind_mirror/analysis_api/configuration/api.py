from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FALLBACK_MODELS = [
    "gemini-1.5-flash-latest",
    "gemini-1.5-flash",
    "gemini-1.5-pro",
]


class ApiConfiguration(BaseSettings):
    """
    Configuration for the API.

    Gemini settings are read from ``GEMINI_*`` environment variables, the
    server settings from ``HOST``, ``PORT`` and ``LOG_LEVEL``.
    """

    # Gemini Configuration
    api_key: Optional[str] = None
    base_url: str = "https://generativelanguage.googleapis.com"
    api_version: str = "v1beta"
    model: str = "gemma-3-27b-it"
    fallback_models: List[str] = Field(default_factory=lambda: list(DEFAULT_FALLBACK_MODELS))

    # Retry Configuration
    max_retries: int = Field(default=3, ge=0)
    default_retry_delay: int = Field(default=30, ge=0)
    request_timeout: float = 60.0

    # Request Configuration
    max_text_length: int = 10000
    startup_diagnostics: bool = True

    # Server Configuration
    host: str = Field(default="0.0.0.0", validation_alias="HOST")
    port: int = Field(default=3000, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        populate_by_name=True,
        protected_namespaces=(),
    )

    @property
    def api_key_set(self) -> bool:
        return bool(self.api_key)


@lru_cache(maxsize=1)
def get_api_configuration() -> ApiConfiguration:
    """
    Get the API configuration.
    """
    return ApiConfiguration()
