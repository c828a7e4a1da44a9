"""Tests for the HTTP surface."""
from datetime import datetime, timezone

from fastapi.testclient import TestClient

from src.feed.models import FeedEntry
from src.feed.store import FeedStore
from src.serving.feed_server import FAVICON_URL, create_app

store = FeedStore(["go", "rust"])
store.merge("rust", [FeedEntry(
    id="https://github.com/acme/crate/releases/tag/v1",
    title="acme/crate release v1",
    link_url="https://github.com/acme/crate/releases/tag/v1",
    description="<p>notes</p>",
    author_name="ferris",
    updated_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
)])
client = TestClient(create_app(store))


def test_untracked_language_is_not_found():
    response = client.get("/cobol")
    assert response.status_code == 404
    assert response.text == "language cobol not found"

def test_empty_feed_is_served():
    response = client.get("/go")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/xml"
    assert "<title>GitHub Go releases feed</title>" in response.text
    assert "<item>" not in response.text

def test_feed_with_entries():
    response = client.get("/rust")
    assert response.status_code == 200
    assert "<guid isPermaLink=\"true\">https://github.com/acme/crate/releases/tag/v1</guid>" in response.text

def test_language_is_case_insensitive():
    assert client.get("/RuSt").status_code == 200

def test_favicon_redirects():
    response = client.get("/favicon.ico", follow_redirects=False)
    assert response.status_code == 301
    assert response.headers["location"] == FAVICON_URL

def test_render_failure_is_500():
    def broken(feed):
        raise ValueError("cannot serialize")

    broken_client = TestClient(create_app(store, renderer=broken))
    response = broken_client.get("/go")
    assert response.status_code == 500
    assert response.text == "cannot serialize"
