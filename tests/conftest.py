"""Shared test fixtures."""

import json
from typing import List, Optional, Union

import pytest

from config.settings import Settings
from llm.base_client import BaseLLMClient, Message, LLMResponse
from memory.context_manager import ConversationContextManager
from orchestrator import ObjectionHandlerOrchestrator


ANALYSIS_JSON = json.dumps({
    "sentiment": "negative",
    "intent": "objection",
    "emotionalTone": "skeptical",
    "keyTopics": ["price", "value"],
    "urgencyLevel": "medium",
    "contextualCues": ["too expensive"],
    "recommendedResponseTone": "reassuring",
})

REPLY_TEXT = (
    "  I hear you, budget matters. Most teams recover the cost within the first "
    "quarter through time saved. Could we look at which features matter most to you?  "
)

QUALITY_JSON = json.dumps({
    "overallScore": 8.5,
    "relevanceScore": 9,
    "emotionalScore": 8,
    "strategicScore": 8,
    "naturalScore": 9,
    "professionalScore": 9,
    "improvements": ["Mention a concrete customer example"],
    "strengths": ["Acknowledges the concern"],
})


class ScriptedLLMClient(BaseLLMClient):
    """Returns queued responses in order; queued exceptions are raised."""

    def __init__(self, responses: Optional[List[Union[str, Exception]]] = None):
        self.responses = list(responses or [])
        self.calls: List[dict] = []

    def queue(self, *responses: Union[str, Exception]):
        self.responses.extend(responses)

    def chat(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 300,
        model: Optional[str] = None
    ) -> LLMResponse:
        self.calls.append({
            "prompt": messages[-1].content,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "model": model,
        })
        if not self.responses:
            raise AssertionError("ScriptedLLMClient ran out of responses")
        next_response = self.responses.pop(0)
        if isinstance(next_response, Exception):
            raise next_response
        return LLMResponse(content=next_response, model=model or "fake-model")

    @property
    def prompts(self) -> List[str]:
        return [call["prompt"] for call in self.calls]

    def get_provider_name(self) -> str:
        return "fake"

    def get_model_name(self) -> str:
        return "fake-model"


@pytest.fixture
def llm_client():
    return ScriptedLLMClient()


@pytest.fixture
def settings():
    return Settings(anthropic_api_key="test-key", openai_api_key="test-key")


@pytest.fixture
def orchestrator(settings, llm_client):
    return ObjectionHandlerOrchestrator(
        settings=settings,
        llm_client=llm_client,
        context_manager=ConversationContextManager(capacity=settings.history_capacity)
    )


def queue_happy_path(client: ScriptedLLMClient):
    client.queue(ANALYSIS_JSON, REPLY_TEXT, QUALITY_JSON)
