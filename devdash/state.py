"""Dashboard application state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from devdash.models import CiStatus, GitStatus, QualityMetrics, TasksStatus


class ActivePanel(Enum):
    """The four dashboard panels, in tab order."""

    GIT = "Git"
    CI_CD = "CI/CD"
    TASKS = "Tasks"
    QUALITY = "Quality"

    def next(self) -> ActivePanel:
        panels = list(ActivePanel)
        return panels[(panels.index(self) + 1) % len(panels)]

    def prev(self) -> ActivePanel:
        panels = list(ActivePanel)
        return panels[(panels.index(self) - 1) % len(panels)]


@dataclass
class App:
    """What the terminal view shows and whether it should stop."""

    should_quit: bool = False
    active_panel: ActivePanel = ActivePanel.GIT
    git_status: GitStatus | None = None
    ci_status: CiStatus | None = None
    tasks_status: TasksStatus | None = None
    quality_metrics: QualityMetrics | None = None

    def quit(self) -> None:
        self.should_quit = True

    def next_panel(self) -> None:
        self.active_panel = self.active_panel.next()

    def prev_panel(self) -> None:
        self.active_panel = self.active_panel.prev()