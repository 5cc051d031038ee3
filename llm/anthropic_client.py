"""Anthropic Claude LLM client implementation."""

import os
import logging
from typing import Optional, List

from errors import UpstreamError
from .base_client import BaseLLMClient, Message, LLMResponse

logger = logging.getLogger(__name__)


class AnthropicClient(BaseLLMClient):
    """Anthropic Claude client implementation."""

    DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
    LIGHT_MODEL = "claude-3-5-haiku-20241022"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 30.0
    ):
        """
        Initialize Anthropic client.

        Args:
            api_key: Anthropic API key (falls back to ANTHROPIC_API_KEY env var)
            model: Model to use (default: claude-3-5-sonnet-20241022)
            timeout: Per-request timeout in seconds
        """
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.model = model or self.DEFAULT_MODEL
        self.timeout = timeout
        self.client = None

        if self.api_key:
            import anthropic
            # Retries belong to the orchestrator
            self.client = anthropic.Anthropic(
                api_key=self.api_key,
                timeout=timeout,
                max_retries=0
            )
            logger.info(f"Anthropic client initialized with model: {self.model}")
        else:
            logger.warning("No Anthropic API key provided")

    def chat(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 300,
        model: Optional[str] = None
    ) -> LLMResponse:
        """Send chat completion request to Anthropic."""
        if not self.client:
            raise UpstreamError(
                "Anthropic client not initialized. Check API key.",
                provider="anthropic"
            )

        # Separate system message from conversation
        system_content = ""
        conversation_messages = []

        for msg in messages:
            if msg.role == "system":
                system_content += msg.content + "\n"
            else:
                conversation_messages.append({
                    "role": msg.role,
                    "content": msg.content
                })

        kwargs = {
            "model": model or self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": conversation_messages,
        }

        if system_content:
            kwargs["system"] = system_content.strip()

        try:
            response = self.client.messages.create(**kwargs)
        except Exception as e:
            logger.error(f"Anthropic API error: {e}")
            raise UpstreamError(
                f"Anthropic request failed: {e}",
                cause=e,
                provider="anthropic"
            ) from e

        content = "".join(
            block.text for block in response.content if block.type == "text"
        )

        usage = None
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.input_tokens,
                "completion_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens,
            }

        return LLMResponse(
            content=content,
            model=response.model,
            usage=usage,
            finish_reason=response.stop_reason
        )

    def get_provider_name(self) -> str:
        """Get the provider name."""
        return "anthropic"

    def get_model_name(self) -> str:
        """Get the model name."""
        return self.model
