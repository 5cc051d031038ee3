"""Memory data models."""

from datetime import datetime, timezone

from pydantic import Field

from schemas.base import Payload
from schemas.context import Analysis
from schemas.responses import QualityAssessment


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HistoryItem(Payload):
    """One completed turn: the utterance, the reply, and how it was judged."""
    timestamp: datetime = Field(default_factory=_utcnow)
    input: str
    response: str
    analysis: Analysis
    quality: QualityAssessment
    session_id: str
