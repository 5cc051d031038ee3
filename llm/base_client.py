"""Base LLM client interface."""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict
from pydantic import BaseModel, Field


class Message(BaseModel):
    """Chat message."""
    role: str  # "system", "user", "assistant"
    content: str


class LLMResponse(BaseModel):
    """Response from LLM."""
    content: str
    model: Optional[str] = None
    usage: Optional[Dict[str, int]] = None
    finish_reason: Optional[str] = None


class CompletionOptions(BaseModel):
    """Sampling parameters for a single completion."""
    model: Optional[str] = None  # None means the client's default model
    max_tokens: int = Field(300, gt=0)
    temperature: float = Field(0.7, ge=0.0, le=1.0)


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    def chat(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 300,
        model: Optional[str] = None
    ) -> LLMResponse:
        """
        Send chat completion request.

        Args:
            messages: List of messages in conversation
            temperature: Sampling temperature (0-1)
            max_tokens: Maximum tokens in response
            model: Optional per-call model override

        Returns:
            LLMResponse with content

        Raises:
            UpstreamError: If the request fails or times out
        """
        pass

    def complete(self, prompt: str, options: Optional[CompletionOptions] = None) -> str:
        """
        Send a single user prompt and return the raw response text.

        Args:
            prompt: Prompt text, sent as one user message
            options: Model and sampling parameters

        Returns:
            Raw text returned by the model
        """
        options = options or CompletionOptions()
        response = self.chat(
            messages=[Message(role="user", content=prompt)],
            temperature=options.temperature,
            max_tokens=options.max_tokens,
            model=options.model
        )
        return response.content

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the name of the LLM provider."""
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """Get the name of the default model being used."""
        pass
