"""In-memory conversation history."""

from .models import HistoryItem
from .context_manager import ConversationContextManager, generate_session_id

__all__ = [
    "HistoryItem",
    "ConversationContextManager",
    "generate_session_id",
]
