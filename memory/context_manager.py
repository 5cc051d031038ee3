"""Bounded rolling conversation history."""

import logging
import secrets
import threading
import time
from collections import deque
from typing import Deque, List

from schemas.context import Analysis
from schemas.responses import QualityAssessment
from .models import HistoryItem

logger = logging.getLogger(__name__)

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_session_id() -> str:
    """Millisecond clock in base36 followed by 64 random bits in base36."""
    clock = _to_base36(int(time.time() * 1000))
    noise = _to_base36(secrets.randbits(64))
    return f"{clock}{noise}"


class ConversationContextManager:
    """
    In-memory FIFO history of completed turns.

    Owned by the orchestrator; lives exactly as long as the serving process
    keeps that orchestrator. Appending and evicting happen under one lock so
    concurrent requests cannot push the history past capacity.
    """

    DEFAULT_CAPACITY = 10
    DEFAULT_WINDOW = 3

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        """
        Initialize context manager.

        Args:
            capacity: Maximum number of turns retained
        """
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self._capacity = capacity
        self._items: Deque[HistoryItem] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def record(
        self,
        utterance: str,
        response: str,
        analysis: Analysis,
        quality: QualityAssessment
    ) -> HistoryItem:
        """
        Stamp and append a completed turn, evicting the oldest when full.

        Returns:
            The stored HistoryItem
        """
        with self._lock:
            # Stamped under the lock so append order matches timestamp order
            item = HistoryItem(
                input=utterance,
                response=response,
                analysis=analysis,
                quality=quality,
                session_id=generate_session_id()
            )
            self._items.append(item)
            if len(self._items) > self._capacity:
                evicted = self._items.popleft()
                logger.debug(f"Evicted history item {evicted.session_id}")
            size = len(self._items)

        logger.info(f"Recorded turn {item.session_id} ({size}/{self._capacity})")
        return item

    def recent_window(self, limit: int = DEFAULT_WINDOW) -> List[HistoryItem]:
        """Return the last ``limit`` turns, oldest first."""
        if limit <= 0:
            return []
        with self._lock:
            return list(self._items)[-limit:]

    @property
    def history(self) -> List[HistoryItem]:
        """Snapshot of the full history, oldest first."""
        with self._lock:
            return list(self._items)

    def clear(self):
        """Drop all recorded turns."""
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
