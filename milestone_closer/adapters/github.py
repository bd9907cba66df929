"""GitHub API adapter."""

from datetime import datetime
from typing import Any, Dict, List

import requests

from milestone_closer.adapters.base import GitPlatformAdapter, GitPlatformError, MilestoneState
from milestone_closer.models import Milestone, PullRequest


def _parse_iso(s: str | None) -> datetime | None:
    if not s:
        return None
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _milestone_from_api(data: Dict[str, Any]) -> Milestone:
    return Milestone(
        id=data["id"],
        number=data["number"],
        title=data.get("title") or "",
        description=data.get("description") or "",
        updated_at=_parse_iso(data.get("updated_at")),
        open_issues=data.get("open_issues", 0),
        closed_issues=data.get("closed_issues", 0),
        state=data.get("state", "open"),
    )


def _pr_from_api(data: Dict[str, Any]) -> PullRequest:
    milestone = data.get("milestone")
    return PullRequest(
        number=data["number"],
        title=data.get("title") or "",
        state=data.get("state", "open"),
        milestone=_milestone_from_api(milestone) if milestone else None,
    )


class GitHubAdapter(GitPlatformAdapter):
    """GitHub API implementation."""

    def __init__(self, token: str, api_url: str = "https://api.github.com") -> None:
        self._api_url = api_url.rstrip("/")
        self._session = requests.Session()
        self._session.headers["Authorization"] = f"token {token}"
        self._session.headers["Accept"] = "application/vnd.github.v3+json"

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        resp = self._session.request(method, url, params=params, json=json, timeout=30)
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except ValueError:
                pass
            raise GitPlatformError(f"{resp.status_code}: {msg}")
        return resp

    def list_milestones(
        self,
        repo: str,
        state: MilestoneState,
        page: int = 1,
        per_page: int = 100,
    ) -> List[Milestone]:
        resp = self._request(
            "GET",
            f"/repos/{repo}/milestones",
            params={"state": state, "per_page": per_page, "page": page},
        )
        data = resp.json() or []
        return [_milestone_from_api(d) for d in data]

    def update_milestone_state(self, repo: str, milestone_number: int, state: MilestoneState) -> Milestone:
        resp = self._request(
            "PATCH",
            f"/repos/{repo}/milestones/{milestone_number}",
            json={"state": state},
        )
        return _milestone_from_api(resp.json())

    def list_pull_requests_for_commit(self, repo: str, sha: str) -> List[PullRequest]:
        resp = self._request("GET", f"/repos/{repo}/commits/{sha}/pulls")
        data = resp.json() or []
        return [_pr_from_api(d) for d in data]
