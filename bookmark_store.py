"""
Herb bookmark store.
In-memory stand-in for the persistence layer: remembers which catalog
herbs each user has bookmarked.
"""

import threading
from datetime import datetime, timezone
from typing import Dict, List

from loguru import logger

from schemas import Bookmark


class InMemoryBookmarkStore:
    """
    Thread-safe bookmarks keyed by user id, at most one per herb.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._bookmarks: Dict[str, Dict[int, Bookmark]] = {}
        self._next_id = 1

    def add(self, user_id: str, herb_id: int) -> Bookmark:
        """
        Bookmark a herb for a user.

        Args:
            user_id: Authenticated user id
            herb_id: Catalog herb id, already checked by the caller

        Returns:
            The new bookmark, or the existing one if the herb was already bookmarked
        """
        with self._lock:
            user_bookmarks = self._bookmarks.setdefault(user_id, {})
            existing = user_bookmarks.get(herb_id)
            if existing is not None:
                return existing

            bookmark = Bookmark(
                id=self._next_id,
                user_id=user_id,
                herb_id=herb_id,
                created_at=datetime.now(timezone.utc),
            )
            self._next_id += 1
            user_bookmarks[herb_id] = bookmark

        logger.debug("User {} bookmarked herb {}", user_id, herb_id)
        return bookmark

    def remove(self, user_id: str, herb_id: int) -> bool:
        """
        Remove a user's bookmark for a herb.

        Returns:
            True if a bookmark was removed
        """
        with self._lock:
            removed = self._bookmarks.get(user_id, {}).pop(herb_id, None)
        if removed is not None:
            logger.debug("User {} removed bookmark for herb {}", user_id, herb_id)
        return removed is not None

    def list_for_user(self, user_id: str) -> List[Bookmark]:
        """
        Return a user's bookmarks, newest first.
        """
        with self._lock:
            bookmarks = list(self._bookmarks.get(user_id, {}).values())
        return sorted(bookmarks, key=lambda b: (b.created_at, b.id), reverse=True)
