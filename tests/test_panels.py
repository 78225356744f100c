import io
from datetime import datetime, timezone

import pytest
from rich.console import Console

from devdash.models import (
    CiStatus,
    CommitInfo,
    GitStatus,
    PipelineRun,
    PipelineStatus,
    QualityMetrics,
    TaskItem,
    TasksStatus,
    TaskStatus,
)
from devdash.panels import (
    ACTIVE_BORDER,
    INACTIVE_BORDER,
    coverage_color,
    pipeline_icon,
    render_ci_panel,
    render_git_panel,
    render_quality_panel,
    render_task_panel,
    task_icon,
)


def _render(renderable, width=100):
    console = Console(width=width, file=io.StringIO(), color_system=None, legacy_windows=False)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


def _commit(index):
    return CommitInfo(
        hash=f"h{index:06d}",
        message=f"msg-{index:02d}",
        author="dev",
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_pipeline_icons_are_distinct():
    icons = {pipeline_icon(status)[0] for status in PipelineStatus}
    assert len(icons) == len(PipelineStatus)
    assert pipeline_icon(PipelineStatus.SUCCESS)[0] == "✓"
    assert pipeline_icon(PipelineStatus.FAILURE)[0] == "✗"


def test_task_icons_are_distinct():
    icons = {task_icon(status)[0] for status in TaskStatus}
    assert len(icons) == len(TaskStatus)
    assert task_icon(TaskStatus.DONE)[0] == "✓"
    assert task_icon(TaskStatus.BLOCKED)[0] == "✗"


def test_success_and_done_share_colour():
    assert pipeline_icon(PipelineStatus.SUCCESS)[1] == task_icon(TaskStatus.DONE)[1]
    assert pipeline_icon(PipelineStatus.RUNNING)[1] == task_icon(TaskStatus.IN_PROGRESS)[1]


def test_coverage_colour_thresholds():
    assert coverage_color(85.5) == coverage_color(100.0)
    assert coverage_color(80.0) == coverage_color(61.0)
    assert coverage_color(60.0) == coverage_color(0.0)
    assert len({coverage_color(90.0), coverage_color(70.0), coverage_color(10.0)}) == 3


@pytest.mark.parametrize(
    "render, message",
    [
        (render_git_panel, "Fetching git data..."),
        (render_ci_panel, "Fetching CI/CD data..."),
        (render_task_panel, "Fetching tasks..."),
        (render_quality_panel, "Fetching quality metrics..."),
    ],
)
def test_loading_message_when_no_data(render, message):
    assert message in _render(render(None, False))


@pytest.mark.parametrize(
    "render", [render_git_panel, render_ci_panel, render_task_panel, render_quality_panel]
)
def test_border_follows_active_flag(render):
    assert render(None, True).border_style == ACTIVE_BORDER
    assert render(None, False).border_style == INACTIVE_BORDER


def test_git_panel_shows_branch_counts_and_ten_commits():
    status = GitStatus(
        branch="main",
        commits=[_commit(i) for i in range(12)],
        changed_files=2,
        staged_files=1,
    )
    output = _render(render_git_panel(status, True))
    assert "branch: main" in output
    assert "2M 1S" in output
    assert "Hash" in output and "Message" in output and "Author" in output
    assert "msg-09" in output
    assert "msg-10" not in output
    assert "h000000" in output


def test_ci_panel_rows():
    status = CiStatus(
        runs=[
            PipelineRun(
                id="123",
                name="CI",
                status=PipelineStatus.SUCCESS,
                branch="main",
                duration_secs=120,
            ),
            PipelineRun(id="124", name="Deploy", status=PipelineStatus.PENDING, branch="dev"),
        ]
    )
    output = _render(render_ci_panel(status, False))
    assert "Pipeline" in output and "Branch" in output
    assert "120s" in output
    assert "Deploy" in output
    assert "✓" in output and "○" in output
    assert "—" in output


def test_task_panel_rows():
    status = TasksStatus(
        tasks=[
            TaskItem(id="1", title="Test task", status=TaskStatus.IN_PROGRESS, assignee="Zen"),
            TaskItem(id="2", title="Other task", status=TaskStatus.TODO),
        ]
    )
    output = _render(render_task_panel(status, False))
    assert "Test task" in output and "Other task" in output
    assert "Zen" in output
    assert "—" in output
    assert "●" in output


def test_quality_panel_figures():
    metrics = QualityMetrics(test_coverage=85.5, lint_warnings=3, lint_errors=0, security_issues=0)
    output = _render(render_quality_panel(metrics, True))
    assert "Coverage" in output
    assert "85.5%" in output
    assert "Lint warnings: 3" in output
    assert "Lint errors:   0" in output
    assert "Security:      0" in output


def test_quality_panel_label_not_clamped():
    metrics = QualityMetrics(test_coverage=150.0, lint_warnings=0, lint_errors=0, security_issues=0)
    assert "150.0%" in _render(render_quality_panel(metrics, False))