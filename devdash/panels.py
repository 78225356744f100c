"""Rich renderables for the four dashboard panels."""

from __future__ import annotations

import math

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from devdash.models import (
    CiStatus,
    GitStatus,
    PipelineStatus,
    QualityMetrics,
    TasksStatus,
    TaskStatus,
)

ACTIVE_BORDER = "cyan"
INACTIVE_BORDER = "bright_black"
MUTED = "bright_black"
PLACEHOLDER = "—"

_COMMITS_SHOWN = 10

_PIPELINE_ICONS = {
    PipelineStatus.SUCCESS: ("✓", "green"),
    PipelineStatus.FAILURE: ("✗", "red"),
    PipelineStatus.RUNNING: ("●", "yellow"),
    PipelineStatus.PENDING: ("○", "bright_black"),
    PipelineStatus.CANCELLED: ("—", "bright_black"),
}

_TASK_ICONS = {
    TaskStatus.TODO: ("○", "bright_black"),
    TaskStatus.IN_PROGRESS: ("●", "yellow"),
    TaskStatus.DONE: ("✓", "green"),
    TaskStatus.BLOCKED: ("✗", "red"),
}


def pipeline_icon(status: PipelineStatus) -> tuple[str, str]:
    """Icon and colour for a pipeline outcome."""
    return _PIPELINE_ICONS[status]


def task_icon(status: TaskStatus) -> tuple[str, str]:
    """Icon and colour for a task state."""
    return _TASK_ICONS[status]


def coverage_color(coverage: float) -> str:
    """Green above 80 %, yellow above 60 %, red otherwise."""
    if coverage > 80.0:
        return "green"
    if coverage > 60.0:
        return "yellow"
    return "red"


def _gauge_percent(coverage: float) -> int:
    if math.isnan(coverage):
        return 0
    return int(min(max(coverage, 0.0), 100.0))


def _frame(title: str, body: RenderableType, is_active: bool) -> Panel:
    return Panel(
        body,
        title=title,
        title_align="left",
        box=box.SQUARE,
        border_style=ACTIVE_BORDER if is_active else INACTIVE_BORDER,
    )


def _loading(title: str, message: str, is_active: bool) -> Panel:
    return _frame(title, Text(message, style=MUTED), is_active)


def _table() -> Table:
    return Table(box=None, expand=True, header_style=MUTED, show_edge=False, pad_edge=False)


def render_git_panel(status: GitStatus | None, is_active: bool) -> Panel:
    """Branch, working-tree counts and the latest commits."""
    if status is None:
        return _loading("Git", "Fetching git data...", is_active)

    branch_line = Text()
    branch_line.append("branch: ", style=MUTED)
    branch_line.append(status.branch, style="bold green")
    branch_line.append("  ")
    branch_line.append(f"{status.changed_files}M {status.staged_files}S", style="yellow")

    table = _table()
    table.add_column("Hash", width=8, no_wrap=True)
    table.add_column("Message", min_width=20, ratio=1, no_wrap=True)
    table.add_column("Author", width=12, no_wrap=True)
    for commit in status.commits[:_COMMITS_SHOWN]:
        table.add_row(
            Text(commit.hash, style="yellow"),
            Text(commit.message),
            Text(commit.author, style="blue"),
        )
    return _frame("Git", Group(branch_line, Text(""), table), is_active)


def render_ci_panel(status: CiStatus | None, is_active: bool) -> Panel:
    """Recent workflow runs with their outcome."""
    if status is None:
        return _loading("CI/CD", "Fetching CI/CD data...", is_active)

    table = _table()
    table.add_column("", width=2, no_wrap=True)
    table.add_column("Pipeline", min_width=15, ratio=1, no_wrap=True)
    table.add_column("Branch", width=12, no_wrap=True)
    table.add_column("Time", width=6, no_wrap=True)
    for run in status.runs:
        icon, color = pipeline_icon(run.status)
        duration = f"{run.duration_secs}s" if run.duration_secs is not None else PLACEHOLDER
        table.add_row(
            Text(icon, style=color),
            Text(run.name),
            Text(run.branch, style="blue"),
            Text(duration),
        )
    return _frame("CI/CD", table, is_active)


def render_task_panel(status: TasksStatus | None, is_active: bool) -> Panel:
    """Recently updated issues with their state and assignee."""
    if status is None:
        return _loading("Tasks", "Fetching tasks...", is_active)

    table = _table()
    table.add_column("", width=2, no_wrap=True)
    table.add_column("Task", min_width=20, ratio=1, no_wrap=True)
    table.add_column("Assignee", width=10, no_wrap=True)
    for task in status.tasks:
        icon, color = task_icon(task.status)
        table.add_row(
            Text(icon, style=color),
            Text(task.title),
            Text(task.assignee if task.assignee is not None else PLACEHOLDER, style="blue"),
        )
    return _frame("Tasks", table, is_active)


def render_quality_panel(metrics: QualityMetrics | None, is_active: bool) -> Panel:
    """Coverage gauge and lint and security counts."""
    if metrics is None:
        return _loading("Quality", "Fetching quality metrics...", is_active)

    color = coverage_color(metrics.test_coverage)
    gauge = Table.grid(expand=True, padding=(0, 1))
    gauge.add_column(ratio=1)
    gauge.add_column(no_wrap=True)
    gauge.add_row(
        ProgressBar(
            total=100,
            completed=_gauge_percent(metrics.test_coverage),
            complete_style=color,
            finished_style=color,
        ),
        Text(f"{metrics.test_coverage:.1f}%", style=color),
    )

    # Each count is green when zero, otherwise shown in its alert colour.
    stats = [
        ("Lint warnings: ", metrics.lint_warnings, "yellow"),
        ("Lint errors:   ", metrics.lint_errors, "red"),
        ("Security:      ", metrics.security_issues, "red"),
    ]
    lines = []
    for label, count, alert in stats:
        line = Text()
        line.append(label, style=MUTED)
        line.append(str(count), style=alert if count > 0 else "green")
        lines.append(line)

    return _frame(
        "Quality", Group(Text("Coverage"), gauge, Text(""), *lines), is_active
    )