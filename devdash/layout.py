"""Whole-screen layout of the terminal dashboard."""

from __future__ import annotations

from rich import box
from rich.layout import Layout
from rich.panel import Panel
from rich.text import Text

from devdash.panels import (
    MUTED,
    render_ci_panel,
    render_git_panel,
    render_quality_panel,
    render_task_panel,
)
from devdash.state import ActivePanel, App

TITLE = "dev-dashboard"
HIGHLIGHT_STYLE = "bold cyan"
FOOTER_HELP = " [1-4] Panel  [Tab] Next  [q] Quit"
_DIVIDER = "│"


def render_header(app: App) -> Panel:
    """Tab bar naming the panels, with the active one highlighted."""
    tabs = Text()
    for position, panel in enumerate(ActivePanel):
        if position:
            tabs.append(_DIVIDER)
        tabs.append(" ")
        tabs.append(panel.value, style=HIGHLIGHT_STYLE if panel is app.active_panel else "")
        tabs.append(" ")
    return Panel(tabs, title=TITLE, title_align="left", box=box.SQUARE)


def render_footer() -> Text:
    """One line of key help."""
    return Text(FOOTER_HELP, style=MUTED)


def render(app: App) -> Layout:
    """Header, a two-by-two grid of panels, and the footer."""
    root = Layout(name="root")
    root.split_column(
        Layout(render_header(app), name="header", size=3),
        Layout(name="main"),
        Layout(render_footer(), name="footer", size=1),
    )
    root["main"].split_row(Layout(name="left"), Layout(name="right"))
    root["left"].split_column(
        Layout(render_git_panel(app.git_status, app.active_panel is ActivePanel.GIT), name="git"),
        Layout(
            render_task_panel(app.tasks_status, app.active_panel is ActivePanel.TASKS),
            name="tasks",
        ),
    )
    root["right"].split_column(
        Layout(render_ci_panel(app.ci_status, app.active_panel is ActivePanel.CI_CD), name="ci"),
        Layout(
            render_quality_panel(app.quality_metrics, app.active_panel is ActivePanel.QUALITY),
            name="quality",
        ),
    )
    return root