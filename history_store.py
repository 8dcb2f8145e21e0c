"""
Recommendation history store.
In-memory stand-in for the persistence layer: records each recommendation
with the user and the symptom text that produced it.
"""

import threading
from datetime import datetime, timezone
from typing import Dict, List

from loguru import logger

from schemas import HistoryEntry, Recommendation


class InMemoryHistoryStore:
    """
    Thread-safe history of recommendations keyed by user id.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, List[HistoryEntry]] = {}
        self._next_id = 1

    def record(self, user_id: str, symptoms: str, recommendation: Recommendation) -> HistoryEntry:
        """
        Store a recommendation for a user.

        Args:
            user_id: Authenticated user id
            symptoms: Symptom text as submitted
            recommendation: Analyzer output

        Returns:
            The stored history entry
        """
        with self._lock:
            entry = HistoryEntry(
                id=self._next_id,
                user_id=user_id,
                symptoms=symptoms,
                recommendation=recommendation.model_dump_json(by_alias=True),
                recommended_herbs=[herb.herb_id for herb in recommendation.recommendations],
                created_at=datetime.now(timezone.utc),
            )
            self._next_id += 1
            self._entries.setdefault(user_id, []).append(entry)

        logger.debug("Recorded history entry {} for user {}", entry.id, user_id)
        return entry

    def list_for_user(self, user_id: str) -> List[HistoryEntry]:
        """
        Return a user's history, newest first.
        """
        with self._lock:
            entries = list(self._entries.get(user_id, []))
        return sorted(entries, key=lambda e: (e.created_at, e.id), reverse=True)
