"""Data records shared by the providers, the terminal view and the web API."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


@dataclass
class CommitInfo:
    """One commit in the recent history of the repository."""

    hash: str
    message: str
    author: str
    timestamp: datetime


@dataclass
class BranchInfo:
    """A local branch and the short hash of its tip."""

    name: str
    is_head: bool
    last_commit: str


@dataclass
class GitStatus:
    """Snapshot of the working repository."""

    branch: str
    commits: list[CommitInfo] = field(default_factory=list)
    branches: list[BranchInfo] = field(default_factory=list)
    changed_files: int = 0
    staged_files: int = 0


class PipelineStatus(Enum):
    """Outcome of a CI pipeline run."""

    SUCCESS = "Success"
    FAILURE = "Failure"
    RUNNING = "Running"
    PENDING = "Pending"
    CANCELLED = "Cancelled"


@dataclass
class PipelineRun:
    """A single CI workflow run."""

    id: str
    name: str
    status: PipelineStatus
    branch: str
    duration_secs: int | None = None
    started_at: datetime | None = None


@dataclass
class CiStatus:
    """Recent CI workflow runs."""

    runs: list[PipelineRun] = field(default_factory=list)


class TaskStatus(Enum):
    """Progress state of an issue."""

    TODO = "Todo"
    IN_PROGRESS = "InProgress"
    DONE = "Done"
    BLOCKED = "Blocked"


@dataclass
class TaskItem:
    """An issue shown as a task."""

    id: str
    title: str
    status: TaskStatus
    assignee: str | None = None


@dataclass
class TasksStatus:
    """Recently updated tasks."""

    tasks: list[TaskItem] = field(default_factory=list)


@dataclass
class QualityMetrics:
    """Code quality figures; ``test_coverage`` runs from 0.0 to 100.0."""

    test_coverage: float
    lint_warnings: int
    lint_errors: int
    security_issues: int


def _format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.isoformat().replace("+00:00", "Z")


def to_json(value: Any) -> Any:
    """Turn records, enums and timestamps into JSON-compatible values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return _format_timestamp(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [to_json(item) for item in value]
    if isinstance(value, dict):
        return {key: to_json(item) for key, item in value.items()}
    return value