"""
Feed Store: Merge, Dedup, Trim
==============================

CONCEPT: One Feed Per Language, One Lock For All
------------------------------------------------
Every tracked language owns a LanguageFeed. A refresh worker writes to
its own language only, but the HTTP side serializes the very same lists
the workers mutate. So every merge and every serialization takes the
same lock for its whole duration. Merges happen every few minutes and
rendering ten items is cheap, so plain mutual exclusion is enough.

CONCEPT: The Merge Algorithm
----------------------------
1. Dedup-append: a candidate is appended unless its id is already in the
   feed. The entry we saw first wins, later copies are ignored.
2. Sort: newest first. Python's sort is stable, so equal timestamps keep
   their previous relative order.
3. Trim: keep the ten newest. Anything cut is gone for good; if the same
   release shows up again in a later batch it is simply added back.
4. Watermark: last_updated_at follows the newest retained entry.

Entries newer than both the recency threshold and the previous
watermark are logged. Logging only, the stored state is not touched.
"""

import copy
import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterable, Optional

from src.feed.models import MAX_ENTRIES, FeedEntry, LanguageFeed
from src.feed.rss import render_rss

logger = logging.getLogger(__name__)

RECENT_WINDOW = timedelta(days=1)


class FeedStore:
    """
    Language name -> LanguageFeed, guarded by a single lock.

    Keys are fixed at construction. Build the store once at startup and
    hand the same object to every worker and to the HTTP app.
    """

    def __init__(
        self,
        languages: Iterable[str],
        max_entries: int = MAX_ENTRIES,
        recent_since: Optional[datetime] = None,
    ):
        self.max_entries = max_entries
        self.recent_since = recent_since or datetime.now(timezone.utc) - RECENT_WINDOW
        self._lock = threading.Lock()
        self._feeds: dict[str, LanguageFeed] = {}
        for language in languages:
            feed = LanguageFeed.for_language(language)
            self._feeds.setdefault(feed.language, feed)

    def __contains__(self, language: str) -> bool:
        return language.lower() in self._feeds

    def languages(self) -> list[str]:
        return list(self._feeds)

    def merge(self, language: str, candidates: Iterable[FeedEntry]) -> int:
        """
        Merge a batch of candidate entries into a language's feed.

        Returns how many candidates were appended (before trimming).
        Raises KeyError if the language is not tracked.
        """
        with self._lock:
            feed = self._feeds[language.lower()]
            previous_watermark = feed.last_updated_at

            added = 0
            for entry in candidates:
                if not feed.has_entry(entry.id):
                    feed.entries.append(entry)
                    added += 1

            feed.entries.sort(key=lambda e: e.updated_at, reverse=True)
            if len(feed.entries) > self.max_entries:
                del feed.entries[self.max_entries:]

            self._log_notable(feed, previous_watermark)

            if feed.entries:
                feed.last_updated_at = feed.entries[0].updated_at
            return added

    def _log_notable(self, feed: LanguageFeed, previous_watermark: Optional[datetime]) -> None:
        # oldest first, so the log reads chronologically
        for entry in reversed(feed.entries):
            if entry.updated_at <= self.recent_since:
                continue
            if previous_watermark is not None and entry.updated_at <= previous_watermark:
                continue
            logger.info("[%s] %s at %s", feed.language, entry.title, entry.updated_at.isoformat())

    def render(
        self,
        language: str,
        renderer: Callable[[LanguageFeed], str] = render_rss,
    ) -> str:
        """Serialize a language's feed while holding the lock."""
        with self._lock:
            return renderer(self._feeds[language.lower()])

    def snapshot(self, language: str) -> LanguageFeed:
        with self._lock:
            return copy.deepcopy(self._feeds[language.lower()])
