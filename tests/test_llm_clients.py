"""Tests for the provider clients."""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest
from errors import UpstreamError
from llm.anthropic_client import AnthropicClient
from llm.base_client import CompletionOptions
from llm.factory import create_llm_client, light_model_for, LLMProvider
from llm.openai_client import OpenAIClient


def _anthropic_response(text):
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text)],
        usage=SimpleNamespace(input_tokens=12, output_tokens=5),
        model="claude-3-5-sonnet-20241022",
        stop_reason="end_turn",
    )


def _openai_response(text):
    return SimpleNamespace(
        choices=[SimpleNamespace(
            message=SimpleNamespace(content=text),
            finish_reason="stop",
        )],
        usage=SimpleNamespace(prompt_tokens=12, completion_tokens=5, total_tokens=17),
        model="gpt-4o",
    )


class TestAnthropicClient:
    """Test Anthropic client wrapping."""

    @patch("anthropic.Anthropic")
    def test_complete_sends_prompt_and_options(self, mock_sdk):
        sdk = mock_sdk.return_value
        sdk.messages.create.return_value = _anthropic_response("hello")
        client = AnthropicClient(api_key="test-key", timeout=5)

        text = client.complete(
            "Say hello",
            CompletionOptions(model="claude-3-5-haiku-20241022", max_tokens=50, temperature=0.1)
        )

        assert text == "hello"
        mock_sdk.assert_called_once_with(api_key="test-key", timeout=5, max_retries=0)
        kwargs = sdk.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-3-5-haiku-20241022"
        assert kwargs["max_tokens"] == 50
        assert kwargs["temperature"] == 0.1
        assert kwargs["messages"] == [{"role": "user", "content": "Say hello"}]

    @patch("anthropic.Anthropic")
    def test_sdk_error_becomes_upstream_error(self, mock_sdk):
        cause = TimeoutError("read timed out")
        mock_sdk.return_value.messages.create.side_effect = cause
        client = AnthropicClient(api_key="test-key")

        with pytest.raises(UpstreamError) as exc_info:
            client.complete("Say hello")

        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause
        assert exc_info.value.provider == "anthropic"

    def test_missing_key_raises_on_use(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        client = AnthropicClient()

        with pytest.raises(UpstreamError):
            client.complete("Say hello")


class TestOpenAIClient:
    """Test OpenAI client wrapping."""

    @patch("openai.OpenAI")
    def test_complete(self, mock_sdk):
        sdk = mock_sdk.return_value
        sdk.chat.completions.create.return_value = _openai_response("hi there")
        client = OpenAIClient(api_key="test-key")

        assert client.complete("Say hi") == "hi there"
        kwargs = sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["max_completion_tokens"] == 300

    @patch("openai.OpenAI")
    def test_sdk_error_becomes_upstream_error(self, mock_sdk):
        mock_sdk.return_value.chat.completions.create.side_effect = ConnectionError("reset")
        client = OpenAIClient(api_key="test-key")

        with pytest.raises(UpstreamError) as exc_info:
            client.complete("Say hi")
        assert exc_info.value.provider == "openai"


class TestFactory:
    """Test client construction."""

    def test_creates_requested_provider(self):
        assert isinstance(
            create_llm_client(LLMProvider.ANTHROPIC, api_key="test-key"), AnthropicClient
        )
        assert isinstance(
            create_llm_client(LLMProvider.OPENAI, api_key="test-key", model="gpt-4.1"), OpenAIClient
        )

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            create_llm_client(Mock())

    def test_light_models(self):
        assert light_model_for(LLMProvider.ANTHROPIC) == AnthropicClient.LIGHT_MODEL
        assert light_model_for(LLMProvider.OPENAI) == OpenAIClient.LIGHT_MODEL
