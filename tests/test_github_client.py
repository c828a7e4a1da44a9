"""Tests for the GitHub client, with a fake requests session."""
import pytest
import requests

from src.ingestion.github_client import GitHubClient, GitHubError


class FakeResponse:
    def __init__(self, payload=None, status_code=200, bad_json=False):
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def json(self):
        if self.bad_json:
            raise ValueError("Expecting value")
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        if self.error:
            raise self.error
        return self.response


def test_search_repositories():
    session = FakeSession(FakeResponse({"total_count": 1, "items": [{"name": "tool"}]}))
    client = GitHubClient(timeout=3, session=session)
    assert client.search_repositories("language:go stars:>1") == [{"name": "tool"}]
    url, params, timeout = session.calls[0]
    assert url == "https://api.github.com/search/repositories"
    assert params == {"q": "language:go stars:>1", "sort": "updated", "per_page": 50}
    assert timeout == 3

def test_list_releases():
    session = FakeSession(FakeResponse([{"tag_name": "v1"}]))
    client = GitHubClient(session=session)
    assert client.list_releases("acme", "tool") == [{"tag_name": "v1"}]
    url, params, _ = session.calls[0]
    assert url == "https://api.github.com/repos/acme/tool/releases"
    assert params == {"per_page": 10}

def test_token_sets_authorization_header():
    session = FakeSession()
    GitHubClient(token="secret", session=session)
    assert session.headers["Authorization"] == "Bearer secret"
    assert session.headers["Accept"] == "application/vnd.github+json"

def test_no_token_means_no_authorization_header():
    session = FakeSession()
    GitHubClient(session=session)
    assert "Authorization" not in session.headers

def test_http_error_becomes_github_error():
    client = GitHubClient(session=FakeSession(FakeResponse(status_code=403)))
    with pytest.raises(GitHubError, match="Search.Repositories returned error: 403"):
        client.search_repositories("language:go stars:>1")

def test_connection_error_becomes_github_error():
    client = GitHubClient(session=FakeSession(error=requests.ConnectionError("refused")))
    with pytest.raises(GitHubError, match="Repositories.ListReleases returned error: refused"):
        client.list_releases("acme", "tool")

def test_bad_json_becomes_github_error():
    client = GitHubClient(session=FakeSession(FakeResponse(bad_json=True)))
    with pytest.raises(GitHubError):
        client.list_releases("acme", "tool")

def test_unexpected_payload_shapes_give_empty_lists():
    client = GitHubClient(session=FakeSession(FakeResponse({"message": "odd"})))
    assert client.list_releases("acme", "tool") == []
    assert client.search_repositories("q") == []
