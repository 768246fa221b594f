"""GitLab REST API v4 client."""

import logging
from urllib.parse import quote

import httpx

from pzt.exceptions import NotFoundError
from pzt.models import Commit, CreatedIssue, TrackerIssue
from pzt.providers.base import TrackerClient
from pzt.settings import PztSettings

logger = logging.getLogger("pzt.gitlab")


class GitLabClient(TrackerClient):
    def __init__(self, settings: PztSettings) -> None:
        if not settings.gitlab_token:
            raise RuntimeError("No GitLab credentials. Set PZT_GITLAB_TOKEN")
        self._base_url = f"{settings.gitlab_url.rstrip('/')}/api/v4"
        self._headers = {
            "PRIVATE-TOKEN": settings.gitlab_token.get_secret_value(),
            "Accept": "application/json",
        }

    @property
    def base_url(self) -> str:
        return self._base_url

    def _request(self, method: str, path: str, body: dict | None = None) -> httpx.Response:
        logger.debug("%s %s", method, path)
        response = httpx.request(
            method,
            f"{self._base_url}{path}",
            headers=self._headers,
            json=body,
            timeout=30,
        )
        if response.status_code == 401:
            raise RuntimeError("GitLab API returned 401. Check gitlab_token for the active profile.")
        if response.status_code == 404:
            raise NotFoundError(f"GitLab API returned 404 for {method} {path}")
        response.raise_for_status()
        return response

    def _get(self, path: str) -> dict | list:
        return self._request("GET", path).json()

    def _post(self, path: str, body: dict) -> dict:
        return self._request("POST", path, body).json()

    def _put(self, path: str, body: dict) -> dict:
        return self._request("PUT", path, body).json()

    @staticmethod
    def _project(repo: str) -> str:
        """URL-encode "owner/project" into a GitLab project id."""
        return quote(repo, safe="")

    def get_issue(self, repo: str, number: int) -> TrackerIssue:
        node = self._get(f"/projects/{self._project(repo)}/issues/{number}")
        return TrackerIssue(
            number=node["iid"],  # type: ignore[call-overload]
            state=node["state"],  # type: ignore[call-overload]
            author=node["author"]["username"],  # type: ignore[call-overload]
            url=node["web_url"],  # type: ignore[call-overload]
        )

    def create_issue(self, repo: str, title: str, body: str) -> CreatedIssue:
        node = self._post(
            f"/projects/{self._project(repo)}/issues",
            {"title": title, "description": body},
        )
        return CreatedIssue(number=node["iid"], title=node["title"], url=node["web_url"])

    def close_issue(self, repo: str, number: int) -> None:
        self._put(f"/projects/{self._project(repo)}/issues/{number}", {"state_event": "close"})

    def add_comment(self, repo: str, number: int, text: str) -> None:
        self._post(f"/projects/{self._project(repo)}/issues/{number}/notes", {"body": text})

    def list_commits(self, repo: str) -> list[Commit]:
        # NOTE: first page only; callers need just the most recent commit.
        nodes = self._get(f"/projects/{self._project(repo)}/repository/commits")
        return [Commit(sha=node["id"]) for node in nodes]  # type: ignore[index]
