"""LLM client abstraction layer."""

from .base_client import BaseLLMClient, Message, LLMResponse, CompletionOptions
from .factory import create_llm_client, light_model_for, LLMProvider
from .structured_output import parse_json, StructuredOutputParser, ParseResult

__all__ = [
    "BaseLLMClient",
    "Message",
    "LLMResponse",
    "CompletionOptions",
    "create_llm_client",
    "light_model_for",
    "LLMProvider",
    "parse_json",
    "StructuredOutputParser",
    "ParseResult",
]
