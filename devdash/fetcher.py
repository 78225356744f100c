"""Background tasks that keep the dashboard data current."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from devdash.ci_provider import GitHubActionsProvider
from devdash.git_provider import GitProvider
from devdash.models import CiStatus, GitStatus, QualityMetrics, TasksStatus
from devdash.quality_provider import LocalQualityProvider
from devdash.task_provider import GitHubIssuesProvider

# Quality checks are expensive, so they run this many times less often.
QUALITY_SLOWDOWN = 6


class DataKind(Enum):
    """Which part of the dashboard a message updates."""

    GIT = "git"
    CI = "ci"
    TASKS = "tasks"
    QUALITY = "quality"


@dataclass(frozen=True)
class DataMessage:
    """A fresh value for one panel; ``payload`` is None when fetching failed."""

    kind: DataKind
    payload: GitStatus | CiStatus | TasksStatus | QualityMetrics | None = None


async def _poll(
    queue: asyncio.Queue[DataMessage],
    kind: DataKind,
    fetch: Callable[[], Awaitable[Any]],
    interval: float,
) -> None:
    while True:
        try:
            payload = await fetch()
        except Exception:
            payload = None
        await queue.put(DataMessage(kind, payload))
        await asyncio.sleep(interval)


def spawn_git_fetcher(
    queue: asyncio.Queue[DataMessage], path: str | os.PathLike[str], refresh_secs: float
) -> asyncio.Task[None]:
    """Report the repository status every ``refresh_secs`` seconds."""
    provider = GitProvider(path)
    return asyncio.create_task(
        _poll(queue, DataKind.GIT, lambda: asyncio.to_thread(provider.fetch_status), refresh_secs)
    )


def spawn_ci_fetcher(
    queue: asyncio.Queue[DataMessage], owner: str, repo: str, token: str, refresh_secs: float
) -> asyncio.Task[None]:
    """Report the latest workflow runs every ``refresh_secs`` seconds."""
    provider = GitHubActionsProvider(owner, repo, token)
    return asyncio.create_task(_poll(queue, DataKind.CI, provider.fetch_status, refresh_secs))


def spawn_task_fetcher(
    queue: asyncio.Queue[DataMessage], owner: str, repo: str, token: str, refresh_secs: float
) -> asyncio.Task[None]:
    """Report the recently updated issues every ``refresh_secs`` seconds."""
    provider = GitHubIssuesProvider(owner, repo, token)
    return asyncio.create_task(_poll(queue, DataKind.TASKS, provider.fetch_status, refresh_secs))


def spawn_quality_fetcher(
    queue: asyncio.Queue[DataMessage], path: str | os.PathLike[str], refresh_secs: float
) -> asyncio.Task[None]:
    """Report quality metrics, six times less often than the other fetchers."""

    async def fetch() -> QualityMetrics:
        return await asyncio.to_thread(LocalQualityProvider(path).fetch_metrics)

    return asyncio.create_task(
        _poll(queue, DataKind.QUALITY, fetch, refresh_secs * QUALITY_SLOWDOWN)
    )