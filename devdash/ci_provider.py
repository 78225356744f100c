"""CI status from GitHub Actions."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import aiohttp

from devdash.models import CiStatus, PipelineRun, PipelineStatus

API_URL = "https://api.github.com"
_MAX_RUNS = 10
_CONCLUSIONS = {
    "success": PipelineStatus.SUCCESS,
    "failure": PipelineStatus.FAILURE,
    "cancelled": PipelineStatus.CANCELLED,
}


def _value(obj: Any, key: str) -> Any:
    return obj.get(key) if isinstance(obj, dict) else None


def _text(obj: Any, key: str, default: str | None = None) -> str | None:
    value = _value(obj, key)
    return value if isinstance(value, str) else default


def _json_text(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def _parse_timestamp(text: str | None) -> datetime | None:
    if text is None:
        return None
    candidate = text[:-1] + "+00:00" if text[-1:] in ("Z", "z") else text
    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed.astimezone(timezone.utc)


def _status_of(run: Any) -> PipelineStatus:
    conclusion = _text(run, "conclusion", "")
    if conclusion in _CONCLUSIONS:
        return _CONCLUSIONS[conclusion]
    if _text(run, "status", "") in ("in_progress", "queued"):
        return PipelineStatus.RUNNING
    return PipelineStatus.PENDING


def _parse_run(run: Any) -> PipelineRun:
    return PipelineRun(
        id=_json_text(_value(run, "id")),
        name=_text(run, "name", "Unknown"),
        status=_status_of(run),
        branch=_text(run, "head_branch", "unknown"),
        duration_secs=None,
        started_at=_parse_timestamp(_text(run, "created_at")),
    )


def parse_runs(payload: Any) -> CiStatus:
    """Build a CiStatus from a workflow-runs API response."""
    runs = _value(payload, "workflow_runs")
    if not isinstance(runs, list):
        runs = []
    return CiStatus(runs=[_parse_run(run) for run in runs[:_MAX_RUNS]])


class GitHubActionsProvider:
    """Fetches the latest workflow runs of one repository."""

    def __init__(self, owner: str, repo: str, token: str, api_url: str = API_URL) -> None:
        self.owner = owner
        self.repo = repo
        self.token = token
        self.api_url = api_url.rstrip("/")

    @property
    def url(self) -> str:
        return f"{self.api_url}/repos/{self.owner}/{self.repo}/actions/runs?per_page=10"

    async def fetch_status(self) -> CiStatus:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "User-Agent": "dev-dashboard",
            "Accept": "application/vnd.github+json",
        }
        async with aiohttp.ClientSession() as session:
            async with session.get(self.url, headers=headers) as response:
                payload = await response.json(content_type=None)
        return parse_runs(payload)