"""Conversation analysis schemas."""

from enum import Enum
from pydantic import Field, field_validator

from .base import Payload

MAX_KEY_TOPICS = 5


class Sentiment(str, Enum):
    """Overall sentiment of the utterance."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class Intent(str, Enum):
    """What the speaker is trying to do."""
    QUESTION = "question"
    OBJECTION = "objection"
    INTEREST = "interest"
    COMPLAINT = "complaint"
    COMPLIMENT = "compliment"


class EmotionalTone(str, Enum):
    """Emotional register of the speaker."""
    CALM = "calm"
    FRUSTRATED = "frustrated"
    EXCITED = "excited"
    CONFUSED = "confused"
    SKEPTICAL = "skeptical"


class UrgencyLevel(str, Enum):
    """How pressing the speaker's concern is."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ResponseTone(str, Enum):
    """Tone the reply should adopt."""
    EMPATHETIC = "empathetic"
    PROFESSIONAL = "professional"
    ENTHUSIASTIC = "enthusiastic"
    REASSURING = "reassuring"


class Analysis(Payload):
    """Classification of a single utterance."""
    sentiment: Sentiment
    intent: Intent
    emotional_tone: EmotionalTone
    key_topics: list[str] = Field(default_factory=list)
    urgency_level: UrgencyLevel
    contextual_cues: list[str] = Field(default_factory=list)
    recommended_response_tone: ResponseTone

    @field_validator(
        "sentiment",
        "intent",
        "emotional_tone",
        "urgency_level",
        "recommended_response_tone",
        mode="before",
    )
    @classmethod
    def _normalize_enum(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("key_topics")
    @classmethod
    def _limit_topics(cls, value: list[str]) -> list[str]:
        return value[:MAX_KEY_TOPICS]
