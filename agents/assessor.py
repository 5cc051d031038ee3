"""Quality assessor stage."""

import json
from typing import Optional

from llm.base_client import BaseLLMClient, CompletionOptions
from llm.structured_output import StructuredOutputParser
from schemas.context import Analysis
from schemas.responses import QualityAssessment
from .stage import LLMStage

NAME = "QualityAssessor"

# Scoring is advisory; a failed assessment must not hold back the reply.
QUALITY_DEFAULT = {
    "overallScore": 7,
    "relevanceScore": 7,
    "emotionalScore": 7,
    "strategicScore": 7,
    "naturalScore": 7,
    "professionalScore": 7,
    "improvements": ["Consider more specific examples"],
    "strengths": ["Professional tone", "Clear communication"],
}

PROMPT_TEMPLATE = """Evaluate the quality of this conversation response:

Original Input: "{conversation_input}"
Generated Response: "{reply}"
Context Analysis: {analysis}

Assess the response on:
1. Relevance to the original input (0-10)
2. Emotional appropriateness (0-10)
3. Strategic value (0-10)
4. Natural flow (0-10)
5. Professional tone (0-10)

Provide assessment in JSON format:
{{
  "overallScore": 0-10,
  "relevanceScore": 0-10,
  "emotionalScore": 0-10,
  "strategicScore": 0-10,
  "naturalScore": 0-10,
  "professionalScore": 0-10,
  "improvements": ["suggestion1", "suggestion2"],
  "strengths": ["strength1", "strength2"]
}}

Respond with valid JSON only."""


def build_assessment_prompt(
    conversation_input: str,
    reply: str,
    analysis: Analysis
) -> str:
    return PROMPT_TEMPLATE.format(
        conversation_input=conversation_input,
        reply=reply,
        analysis=json.dumps(analysis.to_wire())
    )


def build_assessor(
    llm_client: BaseLLMClient,
    model: Optional[str] = None
) -> LLMStage[QualityAssessment]:
    """Create the assessor stage. Low temperature for stable scores."""
    parser = StructuredOutputParser(QualityAssessment, QUALITY_DEFAULT, label=NAME)
    return LLMStage(
        name=NAME,
        llm_client=llm_client,
        prompt_builder=build_assessment_prompt,
        options=CompletionOptions(model=model, max_tokens=250, temperature=0.1),
        parser=parser.parse,
        fallback=parser.default_value
    )
