"""Response generator stage."""

import json
import logging
from typing import Optional, Sequence

from errors import UpstreamError
from llm.base_client import BaseLLMClient, CompletionOptions
from llm.structured_output import ParseResult
from memory.models import HistoryItem
from schemas.context import Analysis
from .stage import LLMStage

logger = logging.getLogger(__name__)

NAME = "ResponseGenerator"

PROMPT_TEMPLATE = """You are an expert conversation strategist. Generate a strategic response based on:

Conversation Input: "{conversation_input}"
Strategy Context: "{conversation_strategy}"
Analysis: {analysis}
{recent_context}
Create a response that:
1. Acknowledges the person's perspective with empathy
2. Addresses their specific concerns or interests
3. Provides value and builds trust
4. Guides toward a positive outcome
5. Matches the recommended tone: {tone}

Generate a natural, conversational response (2-4 sentences) that demonstrates understanding while strategically advancing the conversation. Be authentic and avoid sounding scripted."""


def _format_recent_context(recent_context: Sequence[HistoryItem]) -> str:
    if not recent_context:
        return ""
    lines = ["", "Recent conversation (oldest first):"]
    for item in recent_context:
        lines.append(f'- They said: "{item.input}"')
        lines.append(f'  You replied: "{item.response}"')
    lines.append("")
    return "\n".join(lines)


def build_response_prompt(
    conversation_input: str,
    conversation_strategy: str,
    analysis: Analysis,
    recent_context: Sequence[HistoryItem] = ()
) -> str:
    """Embed utterance, strategy, analysis and recent turns in the template."""
    return PROMPT_TEMPLATE.format(
        conversation_input=conversation_input,
        conversation_strategy=conversation_strategy,
        analysis=json.dumps(analysis.to_wire()),
        recent_context=_format_recent_context(recent_context),
        tone=analysis.recommended_response_tone.value
    )


def parse_reply(text: str) -> ParseResult[str]:
    """
    Trim the reply. There is no synthetic reply to fall back to.

    Raises:
        UpstreamError: If the model returned nothing displayable
    """
    reply = (text or "").strip()
    if not reply:
        raise UpstreamError("Model returned an empty reply")
    return ParseResult(reply, fallback_used=False)


def build_generator(
    llm_client: BaseLLMClient,
    model: Optional[str] = None
) -> LLMStage[str]:
    """Create the generator stage. Higher temperature for varied phrasing."""
    return LLMStage(
        name=NAME,
        llm_client=llm_client,
        prompt_builder=build_response_prompt,
        options=CompletionOptions(model=model, max_tokens=200, temperature=0.7),
        parser=parse_reply
    )
