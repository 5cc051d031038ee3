"""Application settings."""

import os
from typing import Optional
from pydantic import BaseModel, Field

ENV_PREFIX = "OBJECTION_HANDLER_"


class Settings(BaseModel):
    """Application configuration settings."""

    # LLM Provider settings
    llm_provider: str = "anthropic"  # "anthropic" or "openai"
    llm_model: Optional[str] = None  # Override the provider's default model
    assessor_model: Optional[str] = None  # Lighter model for quality scoring

    # API Keys
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    # Upstream call settings
    request_timeout: float = Field(30.0, gt=0)  # Seconds per model call
    upstream_retries: int = Field(0, ge=0)  # Extra attempts per stage call

    # Memory settings
    history_capacity: int = Field(10, ge=1)
    context_window: int = Field(3, ge=0)  # Recent turns shown to the generator

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Logging
    log_level: str = "INFO"
    verbose: bool = False

    def __init__(self, **data):
        # Auto-load API keys from environment if not provided
        if data.get("anthropic_api_key") is None:
            data["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")

        if data.get("openai_api_key") is None:
            data["openai_api_key"] = os.environ.get("OPENAI_API_KEY")

        super().__init__(**data)

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """
        Build settings from OBJECTION_HANDLER_* environment variables.

        Explicit keyword overrides win over the environment. Values that are
        None are ignored so CLI flags left unset fall through.
        """
        data = {}
        for name in cls.model_fields:
            value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
            if value is not None:
                data[name] = value
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)

    def get_llm_api_key(self) -> Optional[str]:
        """Get the API key for the configured LLM provider."""
        if self.llm_provider == "openai":
            return self.openai_api_key
        elif self.llm_provider == "anthropic":
            return self.anthropic_api_key
        return None
