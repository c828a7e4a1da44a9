"""Feed data model: one entry per release, one bounded feed per language."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


GITHUB_HOME = "https://github.com"
MAX_ENTRIES = 10


@dataclass(frozen=True)
class FeedEntry:
    id: str
    title: str
    link_url: str
    description: str
    author_name: str
    updated_at: datetime


@dataclass
class LanguageFeed:
    language: str
    title: str
    link_url: str = GITHUB_HOME
    entries: list[FeedEntry] = field(default_factory=list)
    last_updated_at: Optional[datetime] = None

    @classmethod
    def for_language(cls, language: str) -> "LanguageFeed":
        language = language.lower()
        return cls(
            language=language,
            title=f"GitHub {language.title()} releases feed",
        )

    def has_entry(self, entry_id: str) -> bool:
        return any(e.id == entry_id for e in self.entries)
