"""Pydantic schemas for the objection handler."""

from .base import Payload
from .context import (
    Analysis,
    Sentiment,
    Intent,
    EmotionalTone,
    UrgencyLevel,
    ResponseTone,
)
from .responses import (
    QualityAssessment,
    PipelineState,
    ResponseMetadata,
    PipelineResult,
    ConversationRequest,
)

__all__ = [
    "Payload",
    "Analysis",
    "Sentiment",
    "Intent",
    "EmotionalTone",
    "UrgencyLevel",
    "ResponseTone",
    "QualityAssessment",
    "PipelineState",
    "ResponseMetadata",
    "PipelineResult",
    "ConversationRequest",
]
