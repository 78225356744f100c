"""Tasks from GitHub issues."""

from __future__ import annotations

import json
from typing import Any

import aiohttp

from devdash.models import TaskItem, TasksStatus, TaskStatus

API_URL = "https://api.github.com"


def _value(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _text(obj: Any, key: str, default: str | None = None) -> str | None:
    value = _value(obj, key)
    return value if isinstance(value, str) else default


def _labels(issue: Any) -> list[str]:
    labels = _value(issue, "labels")
    if not isinstance(labels, list):
        return []
    return [name for label in labels if (name := _text(label, "name")) is not None]


def _status_of(issue: Any) -> TaskStatus:
    if _text(issue, "state", "open") == "closed":
        return TaskStatus.DONE
    labels = [label.lower() for label in _labels(issue)]
    if any("block" in label for label in labels):
        return TaskStatus.BLOCKED
    if any("progress" in label or "wip" in label for label in labels):
        return TaskStatus.IN_PROGRESS
    return TaskStatus.TODO


def _parse_issue(issue: Any) -> TaskItem:
    number = json.dumps(_value(issue, "number"), ensure_ascii=False, separators=(",", ":"))
    return TaskItem(
        id=f"#{number}",
        title=_text(issue, "title", ""),
        status=_status_of(issue),
        assignee=_text(_value(issue, "assignee"), "login"),
    )


def _is_pull_request(issue: Any) -> bool:
    return isinstance(issue, dict) and "pull_request" in issue


def parse_issues(payload: Any) -> TasksStatus:
    """Build a TasksStatus from an issues API response, skipping pull requests."""
    if not isinstance(payload, list):
        raise ValueError("expected a list of issues")
    return TasksStatus(
        tasks=[_parse_issue(issue) for issue in payload if not _is_pull_request(issue)]
    )


class GitHubIssuesProvider:
    """Fetches the most recently updated issues of one repository."""

    def __init__(self, owner: str, repo: str, token: str, api_url: str = API_URL) -> None:
        self.owner = owner
        self.repo = repo
        self.token = token
        self.api_url = api_url.rstrip("/")

    @property
    def url(self) -> str:
        return (
            f"{self.api_url}/repos/{self.owner}/{self.repo}"
            "/issues?state=all&per_page=15&sort=updated"
        )

    async def fetch_status(self) -> TasksStatus:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "User-Agent": "dev-dashboard",
            "Accept": "application/vnd.github+json",
        }
        async with aiohttp.ClientSession() as session:
            async with session.get(self.url, headers=headers) as response:
                payload = await response.json(content_type=None)
        return parse_issues(payload)