"""
GitHub REST client: the two calls a refresh cycle needs.

    search_repositories(query)      GET /search/repositories
    list_releases(owner, repo)      GET /repos/{owner}/{repo}/releases

Any transport failure or non-2xx answer is raised as GitHubError so the
worker has exactly one exception type to treat as "this cycle failed".
"""

from typing import Optional

import requests

GITHUB_API_URL = "https://api.github.com"
SEARCH_PAGE_SIZE = 50
RELEASES_PAGE_SIZE = 10


class GitHubError(RuntimeError):
    """A GitHub API call failed; the caller should retry later."""


class GitHubClient:

    def __init__(
        self,
        token: Optional[str] = None,
        timeout: float = 10.0,
        base_url: str = GITHUB_API_URL,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _get(self, path: str, params: dict, operation: str):
        try:
            response = self.session.get(
                f"{self.base_url}{path}", params=params, timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise GitHubError(f"{operation} returned error: {e}") from e

    def search_repositories(self, query: str, per_page: int = SEARCH_PAGE_SIZE) -> list[dict]:
        """Repositories matching the query, most recently updated first."""
        data = self._get(
            "/search/repositories",
            {"q": query, "sort": "updated", "per_page": per_page},
            "Search.Repositories",
        )
        return data.get("items", []) if isinstance(data, dict) else []

    def list_releases(self, owner: str, repo: str, per_page: int = RELEASES_PAGE_SIZE) -> list[dict]:
        data = self._get(
            f"/repos/{owner}/{repo}/releases",
            {"per_page": per_page},
            "Repositories.ListReleases",
        )
        return data if isinstance(data, list) else []
