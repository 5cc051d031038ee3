"""Conversation analyzer stage."""

import json
from typing import Optional

from llm.base_client import BaseLLMClient, CompletionOptions
from llm.structured_output import StructuredOutputParser
from schemas.context import Analysis
from .stage import LLMStage

NAME = "ConversationAnalyzer"

ANALYSIS_DEFAULT = {
    "sentiment": "neutral",
    "intent": "question",
    "emotionalTone": "calm",
    "keyTopics": [],
    "urgencyLevel": "medium",
    "contextualCues": [],
    "recommendedResponseTone": "professional",
}

ANALYSIS_SCHEMA = {
    "sentiment": "positive|neutral|negative",
    "intent": "question|objection|interest|complaint|compliment",
    "emotionalTone": "calm|frustrated|excited|confused|skeptical",
    "keyTopics": ["topic1", "topic2", "topic3"],
    "urgencyLevel": "low|medium|high",
    "contextualCues": ["cue1", "cue2"],
    "recommendedResponseTone": "empathetic|professional|enthusiastic|reassuring",
}

PROMPT_TEMPLATE = """You are a conversation analysis specialist. Analyze the following conversation input and provide structured insights.

Input: "{conversation_input}"

Provide analysis in this JSON format:
{schema}

Respond with valid JSON only. Be precise and analytical in your assessment."""


def build_analysis_prompt(conversation_input: str) -> str:
    """Embed the utterance verbatim in the analysis template."""
    return PROMPT_TEMPLATE.format(
        conversation_input=conversation_input,
        schema=json.dumps(ANALYSIS_SCHEMA, indent=2)
    )


def build_analyzer(
    llm_client: BaseLLMClient,
    model: Optional[str] = None
) -> LLMStage[Analysis]:
    """Create the analyzer stage. Low temperature for consistent labels."""
    parser = StructuredOutputParser(Analysis, ANALYSIS_DEFAULT, label=NAME)
    return LLMStage(
        name=NAME,
        llm_client=llm_client,
        prompt_builder=build_analysis_prompt,
        options=CompletionOptions(model=model, max_tokens=300, temperature=0.1),
        parser=parser.parse
    )
