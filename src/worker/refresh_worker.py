"""
Refresh Worker
==============

CONCEPT: One Loop Per Language
------------------------------
Each tracked language gets its own worker thread. A worker alternates
between two states, forever:

    Querying  search GitHub, list releases of every hit, merge
    Idle      wait for the refresh interval (5 minutes by default)

The first query happens immediately on start.

CONCEPT: All Or Nothing Cycles
------------------------------
A cycle makes one search call plus one releases call per repository.
If any of them fails, the whole cycle is dropped: nothing gathered so
far is merged, the feed keeps what it had, and the next cycle tries
again. The feed never ends up with half of a cycle's results.

CONCEPT: Supervision
--------------------
GitHubError is the expected failure. Anything else raised inside a
cycle is a bug, but it must not silently stop one language's updates
for the rest of the process' life. run() logs it with the traceback and
carries on with the next cycle.
"""

import logging
import threading
from typing import Optional, Protocol

from src.feed.store import FeedStore
from src.ingestion.github_client import GitHubError
from src.ingestion.markdown_renderer import MarkdownRenderer
from src.ingestion.release_normalizer import Renderer, normalize_releases

logger = logging.getLogger(__name__)

REFRESH_INTERVAL = 5 * 60


class SourceClient(Protocol):
    def search_repositories(self, query: str) -> list[dict]:
        ...

    def list_releases(self, owner: str, repo: str) -> list[dict]:
        ...


class LanguageLogAdapter(logging.LoggerAdapter):
    """Prefix every message with the worker's language."""

    def process(self, msg, kwargs):
        return f"[{self.extra['language']}] {msg}", kwargs


class RefreshWorker:

    def __init__(
        self,
        language: str,
        store: FeedStore,
        client: SourceClient,
        renderer: Optional[Renderer] = None,
        min_stars: int = 1,
        interval: float = REFRESH_INTERVAL,
        stop_event: Optional[threading.Event] = None,
    ):
        self.language = language.lower()
        if self.language not in store:
            raise KeyError(f"language {self.language} is not tracked by the store")
        self.store = store
        self.client = client
        self.renderer = renderer or MarkdownRenderer()
        self.min_stars = min_stars
        self.interval = interval
        self.stop_event = stop_event or threading.Event()
        self.log = LanguageLogAdapter(logger, {"language": self.language})

    @property
    def query(self) -> str:
        return f"language:{self.language} stars:>{self.min_stars}"

    def fetch_entries(self) -> list:
        """
        Search, then list releases for every repository found.
        Raises GitHubError on the first failed call.
        """
        entries = []
        for repo in self.client.search_repositories(self.query):
            if not isinstance(repo, dict):
                self.log.warning(f"skipping malformed repository record: {repo!r}")
                continue
            owner = repo.get("owner")
            owner = owner.get("login") if isinstance(owner, dict) else None
            name = repo.get("name")
            if not isinstance(owner, str) or not isinstance(name, str) or not owner or not name:
                self.log.warning(f"skipping repository without owner/name: {repo.get('full_name')!r}")
                continue
            releases = self.client.list_releases(owner, name)
            entries.extend(normalize_releases(releases, repo, self.renderer))
        return entries

    def refresh(self) -> Optional[int]:
        """
        Run one cycle. Returns the number of entries added to the feed,
        or None if the source failed and nothing was merged.
        """
        try:
            entries = self.fetch_entries()
        except GitHubError as e:
            self.log.error(str(e))
            return None

        added = self.store.merge(self.language, entries)
        self.log.debug(f"cycle done: {len(entries)} candidates, {added} new")
        return added

    def run(self) -> None:
        self.log.info(f"refresh worker started, query {self.query!r}, every {self.interval:g}s")
        while not self.stop_event.is_set():
            try:
                self.refresh()
            except Exception:
                self.log.exception("refresh cycle crashed, retrying next cycle")
            self.stop_event.wait(self.interval)

    def start(self) -> threading.Thread:
        thread = threading.Thread(
            target=self.run, name=f"refresh-{self.language}", daemon=True
        )
        thread.start()
        return thread

    def stop(self) -> None:
        self.stop_event.set()
