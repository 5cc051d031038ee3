"""Stage output and pipeline result schemas."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import Field

from .base import Payload
from .context import Analysis


class QualityAssessment(Payload):
    """Self-assessment of a generated reply."""
    overall_score: float = Field(ge=0.0, le=10.0)
    relevance_score: float = Field(ge=0.0, le=10.0)
    emotional_score: float = Field(ge=0.0, le=10.0)
    strategic_score: float = Field(ge=0.0, le=10.0)
    natural_score: float = Field(ge=0.0, le=10.0)
    professional_score: float = Field(ge=0.0, le=10.0)
    improvements: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)


class PipelineState(str, Enum):
    """Lifecycle of a single request through the pipeline."""
    RECEIVED = "received"
    ANALYZING = "analyzing"
    GENERATING = "generating"
    ASSESSING = "assessing"
    RECORDING = "recording"
    COMPLETED = "completed"
    FAILED = "failed"


class ResponseMetadata(Payload):
    """Bookkeeping returned alongside a completed reply."""
    model: str
    timestamp: datetime
    processing_time: float  # milliseconds
    session_id: str
    subagents_used: list[str] = Field(default_factory=list)
    fallbacks: list[str] = Field(default_factory=list)


class PipelineResult(Payload):
    """Outcome of one orchestrator run, completed or failed."""
    state: PipelineState
    response: Optional[str] = None
    analysis: Optional[Analysis] = None
    quality: Optional[QualityAssessment] = None
    metadata: Optional[ResponseMetadata] = None
    error: Optional[str] = None
    details: Optional[str] = None
    fallback_response: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state == PipelineState.COMPLETED

    def to_wire(self) -> dict:
        """Render the HTTP body for this result."""
        if self.succeeded:
            return {
                "success": True,
                "response": self.response,
                "analysis": self.analysis.to_wire(),
                "quality": self.quality.to_wire(),
                "metadata": self.metadata.to_wire(),
            }
        return {
            "success": False,
            "error": self.error,
            "details": self.details,
            "fallbackResponse": self.fallback_response,
        }


class ConversationRequest(Payload):
    """POST body for the conversation processor."""
    conversation_input: Optional[str] = None
    conversation_strategy: Optional[str] = None
