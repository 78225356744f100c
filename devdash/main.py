"""Entry point: the terminal dashboard or the web API server."""

from __future__ import annotations

import argparse
import asyncio
from typing import Any, NamedTuple, Sequence

from rich.console import Console

from devdash.cli import parse_args
from devdash.event import handle_events, tui_session
from devdash.fetcher import (
    DataKind,
    DataMessage,
    spawn_ci_fetcher,
    spawn_git_fetcher,
    spawn_quality_fetcher,
    spawn_task_fetcher,
)
from devdash.layout import render
from devdash.state import App
from devdash.web import run_server

QUEUE_SIZE = 32

_TARGETS = {
    DataKind.GIT: "git_status",
    DataKind.CI: "ci_status",
    DataKind.TASKS: "tasks_status",
    DataKind.QUALITY: "quality_metrics",
}


class _GitHubConfig(NamedTuple):
    owner: str
    repo: str
    token: str


def _github_config(args: argparse.Namespace) -> _GitHubConfig | None:
    if args.owner is None or args.repo is None or args.token is None:
        return None
    return _GitHubConfig(args.owner, args.repo, args.token)


def apply_message(app: App, message: DataMessage) -> None:
    """Store a fetcher's fresh value in the matching part of the state."""
    setattr(app, _TARGETS[message.kind], message.payload)


def _drain(queue: asyncio.Queue[DataMessage], app: App) -> None:
    while True:
        try:
            message = queue.get_nowait()
        except asyncio.QueueEmpty:
            return
        apply_message(app, message)


def _draw(term: Any, app: App) -> None:
    console = Console(
        width=term.width,
        height=term.height,
        force_terminal=True,
        color_system="standard",
    )
    with console.capture() as capture:
        console.print(render(app), end="")
    screen = capture.get().rstrip("\n")
    term.stream.write(term.home + screen)
    term.stream.flush()


async def run_tui(args: argparse.Namespace) -> None:
    """Show the dashboard in the terminal until the user quits."""
    queue: asyncio.Queue[DataMessage] = asyncio.Queue(maxsize=QUEUE_SIZE)
    app = App()
    fetchers = [spawn_git_fetcher(queue, args.path, args.refresh)]
    config = _github_config(args)
    if config is not None:
        fetchers.append(
            spawn_ci_fetcher(queue, config.owner, config.repo, config.token, args.refresh)
        )
        fetchers.append(
            spawn_task_fetcher(queue, config.owner, config.repo, config.token, args.refresh)
        )
    fetchers.append(spawn_quality_fetcher(queue, args.path, args.refresh))
    try:
        with tui_session() as term:
            while not app.should_quit:
                _drain(queue, app)
                _draw(term, app)
                await asyncio.to_thread(handle_events, app, term)
    finally:
        for task in fetchers:
            task.cancel()
        await asyncio.gather(*fetchers, return_exceptions=True)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line and run the chosen mode."""
    args = parse_args(argv)
    if args.web:
        config = _github_config(args)
        owner, repo, token = config if config is not None else (None, None, None)
        try:
            asyncio.run(run_server(args.path, args.refresh, owner, repo, token))
        except KeyboardInterrupt:
            pass
    else:
        asyncio.run(run_tui(args))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())