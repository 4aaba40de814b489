# remote/github.py
from __future__ import annotations

import threading
from typing import Any, Dict, Optional, Sequence

import requests

from repobatch.errors import RemoteError
from repobatch.responses import Gist, Issue, Label, Team

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30


class GitHubClient:
    """HTTP client for the GitHub REST API (the production remote capability)."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize API client.

        Args:
            token: Personal access token (scopes: repo, admin:org for teams, gist)
            base_url: Base URL of the API (e.g., "https://api.github.com")
            timeout: Per-request timeout in seconds
        """
        # Ensure base_url doesn't end with /
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "repobatch",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        # requests.Session is not thread-safe: one per worker thread
        self._local = threading.local()

    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            session.headers.update(self.headers)
            self._local.session = session
        return session

    def _request(self, method: str, path: str, data: Optional[dict] = None) -> Dict[str, Any]:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (e.g., "/gists")
            data: Optional JSON data to send in request body

        Returns:
            Parsed JSON response as dictionary

        Raises:
            RemoteError: If the request fails
        """
        url = f"{self.base_url}/{path.lstrip('/')}"

        try:
            response = self._session().request(method, url, json=data, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise RemoteError(f"Network error: {e}", details={"url": url}) from e

        if not response.ok:
            raise RemoteError(
                f"API request failed: {response.status_code} {_error_message(response)}",
                status=response.status_code,
                details={"method": method, "url": url},
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(f"Invalid JSON response: {e}", details={"url": url}) from e

    # ------------------------------------------------------------------
    # Capability
    # ------------------------------------------------------------------

    def authenticated_user(self) -> str:
        """Return the login behind the token (verifies authentication)."""
        return str(self._request("GET", "/user").get("login", ""))

    def create_label(self, owner: str, repo: str, name: str, color: str, description: str) -> Label:
        data = self._request(
            "POST",
            f"/repos/{owner}/{repo}/labels",
            data={"name": name, "color": color, "description": description},
        )
        return Label.from_dict(data)

    def create_issue(
        self,
        owner: str,
        repo: str,
        title: str,
        body: str,
        milestone: Optional[int] = None,
        assignees: Sequence[str] = (),
        labels: Sequence[str] = (),
    ) -> Issue:
        payload: Dict[str, Any] = {
            "title": title,
            "body": body,
            "assignees": list(assignees),
            "labels": list(labels),
        }
        if milestone is not None:
            payload["milestone"] = milestone
        data = self._request("POST", f"/repos/{owner}/{repo}/issues", data=payload)
        return Issue.from_dict(data)

    def create_team(
        self,
        org: str,
        name: str,
        description: Optional[str] = None,
        maintainers: Sequence[str] = (),
        repo_names: Sequence[str] = (),
    ) -> Team:
        data = self._request(
            "POST",
            f"/orgs/{org}/teams",
            data={
                "name": name,
                "description": description or "",
                "maintainers": list(maintainers),
                "repo_names": list(repo_names),
            },
        )
        return Team.from_dict(data)

    def create_gist(
        self,
        title: str,
        content: str,
        description: Optional[str] = None,
        public: bool = False,
    ) -> Gist:
        data = self._request(
            "POST",
            "/gists",
            data={
                "description": description or "",
                "public": public,
                "files": {title: {"content": content}},
            },
        )
        return Gist.from_dict(data)


def _error_message(response: requests.Response) -> str:
    # GitHub errors look like {"message": "...", "errors": [...]}
    try:
        body = response.json()
    except ValueError:
        return response.text[:500]
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason or ""
