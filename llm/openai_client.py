"""OpenAI LLM client implementation."""

import os
import logging
from typing import Optional, List

from errors import UpstreamError
from .base_client import BaseLLMClient, Message, LLMResponse

logger = logging.getLogger(__name__)


class OpenAIClient(BaseLLMClient):
    """OpenAI GPT client implementation."""

    DEFAULT_MODEL = "gpt-4o"
    LIGHT_MODEL = "gpt-4o-mini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 30.0
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (falls back to OPENAI_API_KEY env var)
            model: Model to use (default: gpt-4o)
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout
        self.client = None

        if self.api_key:
            from openai import OpenAI
            self.client = OpenAI(api_key=self.api_key, timeout=timeout, max_retries=0)
            logger.info(f"OpenAI client initialized with model: {self.model}")
        else:
            logger.warning("No OpenAI API key provided")

    def chat(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 300,
        model: Optional[str] = None
    ) -> LLMResponse:
        """Send chat completion request to OpenAI."""
        if not self.client:
            raise UpstreamError(
                "OpenAI client not initialized. Check API key.",
                provider="openai"
            )

        kwargs = {
            "model": model or self.model,
            "messages": [{"role": msg.role, "content": msg.content} for msg in messages],
            "temperature": temperature,
            "max_completion_tokens": max_tokens,
        }

        try:
            response = self.client.chat.completions.create(**kwargs)
        except Exception as e:
            logger.error(f"OpenAI API error: {e}")
            raise UpstreamError(
                f"OpenAI request failed: {e}",
                cause=e,
                provider="openai"
            ) from e

        choice = response.choices[0]

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        return LLMResponse(
            content=choice.message.content or "",
            model=response.model,
            usage=usage,
            finish_reason=choice.finish_reason
        )

    def get_provider_name(self) -> str:
        """Get the provider name."""
        return "openai"

    def get_model_name(self) -> str:
        """Get the model name."""
        return self.model
