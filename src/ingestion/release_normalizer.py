"""
Release Normalizer
==================

CONCEPT: One GitHub Release -> One Feed Entry
---------------------------------------------
The releases API returns plenty of things we never want in a feed:
drafts, prereleases, releases without notes. This module decides what
becomes a FeedEntry and what it looks like.

- Drafts and prereleases are dropped.
- The text is the release body, or the release name when the body is
  empty. It goes through the Markdown renderer; if rendering fails we
  keep the trimmed raw text and log the failure.
- The repository description, when there is one, goes in front of the
  rendered notes followed by <br>.

CONCEPT: Defensive Parsing
--------------------------
API payloads are plain dicts and fields can be missing or null. Every
lookup goes through .get() with an empty default. The only releases we
cannot use are those without a URL (no id to dedup on) or without a
timestamp (nothing to order by); they are skipped with a warning.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Protocol

from src.feed.models import FeedEntry

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, text: str) -> str:
        ...


def _text(record: dict, key: str) -> str:
    """Field as a string; None and missing both become ""."""
    value = record.get(key)
    return value if isinstance(value, str) else ""


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse GitHub's ISO-8601 timestamps ("2024-05-01T12:00:00Z").
    Returns an aware UTC datetime, or None if the value is unusable.
    """
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def render_description(text: str, renderer: Renderer) -> str:
    text = text.strip()
    try:
        return renderer.render(text)
    except Exception as e:
        logger.error(f"md convert: {e}")
        return text


def normalize_release(release: dict, repo: dict, renderer: Renderer) -> Optional[FeedEntry]:
    """
    Turn one raw release into a FeedEntry, or None if it should not be
    published.
    """
    if release.get("prerelease") or release.get("draft"):
        return None

    url = _text(release, "html_url")
    updated_at = parse_timestamp(release.get("published_at")) or parse_timestamp(release.get("created_at"))
    if not url or updated_at is None:
        logger.warning(
            f"skipping release {_text(release, 'tag_name')!r} of "
            f"{_text(repo, 'full_name')!r}: missing url or timestamp"
        )
        return None

    body = _text(release, "body") or _text(release, "name")
    description = render_description(body, renderer)

    repo_description = _text(repo, "description")
    if repo_description:
        description = repo_description + "<br>" + description

    author = release.get("author")
    if not isinstance(author, dict):
        author = {}

    return FeedEntry(
        id=url,
        title=f"{_text(repo, 'full_name')} release {_text(release, 'tag_name')}",
        link_url=url,
        description=description,
        author_name=_text(author, "login"),
        updated_at=updated_at,
    )


def normalize_releases(releases: list[dict], repo: dict, renderer: Renderer) -> list[FeedEntry]:
    entries = []
    for release in releases:
        if not isinstance(release, dict):
            logger.warning(f"skipping malformed release record of {_text(repo, 'full_name')!r}: {release!r}")
            continue
        entry = normalize_release(release, repo, renderer)
        if entry is not None:
            entries.append(entry)
    return entries
