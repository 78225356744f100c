"""HTTP API and static single-page app server."""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable

from aiohttp import web

from devdash.ci_provider import GitHubActionsProvider
from devdash.git_provider import GitProvider
from devdash.models import CiStatus, GitStatus, QualityMetrics, TasksStatus, to_json
from devdash.quality_provider import LocalQualityProvider
from devdash.task_provider import GitHubIssuesProvider

HOST = "0.0.0.0"
PORT = 3000
QUALITY_SLOWDOWN = 6
ENDPOINTS = ("/api/git", "/api/ci", "/api/tasks", "/api/quality", "/api/config")


@dataclass
class ConfigInfo:
    """Repository settings reported by ``/api/config``."""

    owner: str | None
    repo: str | None
    path: str


@dataclass
class AppState:
    """The latest data the server hands out."""

    config_info: ConfigInfo
    git_status: GitStatus | None = None
    ci_status: CiStatus | None = None
    tasks_status: TasksStatus | None = None
    quality_metrics: QualityMetrics | None = None


@web.middleware
async def _cors(request: web.Request, handler: Callable[..., Awaitable[web.StreamResponse]]):
    if request.method == "OPTIONS" and "Access-Control-Request-Method" in request.headers:
        response: web.StreamResponse = web.Response(status=200)
        response.headers["Access-Control-Allow-Methods"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "*"
    else:
        try:
            response = await handler(request)
        except web.HTTPException as exc:
            exc.headers["Access-Control-Allow-Origin"] = "*"
            raise
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Expose-Headers"] = "*"
    return response


def _static_file(root: Path, tail: str) -> Path | None:
    base = root.resolve()
    candidate = (base / tail).resolve()
    if candidate != base and base not in candidate.parents:
        return None
    if candidate.is_dir():
        candidate = candidate / "index.html"
    return candidate if candidate.is_file() else None


def create_app(state: AppState, static_dir: str | os.PathLike[str] | None = None) -> web.Application:
    """Build the web application serving the API and the static front end."""
    root = Path(static_dir) if static_dir is not None else Path("static")

    def status_handler(attribute: str):
        async def handler(request: web.Request) -> web.Response:
            return web.json_response(to_json(getattr(state, attribute)))

        return handler

    async def get_config(request: web.Request) -> web.Response:
        return web.json_response(to_json(state.config_info))

    async def serve_static(request: web.Request) -> web.StreamResponse:
        target = _static_file(root, request.match_info["tail"])
        if target is not None:
            return web.FileResponse(target)
        index = root / "index.html"
        if index.is_file():
            return web.FileResponse(index)
        raise web.HTTPNotFound()

    app = web.Application(middlewares=[_cors])
    app.router.add_get("/api/git", status_handler("git_status"))
    app.router.add_get("/api/ci", status_handler("ci_status"))
    app.router.add_get("/api/tasks", status_handler("tasks_status"))
    app.router.add_get("/api/quality", status_handler("quality_metrics"))
    app.router.add_get("/api/config", get_config)
    app.router.add_get("/{tail:.*}", serve_static)
    return app


async def _keep_updated(
    state: AppState, attribute: str, fetch: Callable[[], Awaitable[Any]], interval: float
) -> None:
    while True:
        try:
            value = await fetch()
        except Exception:
            value = None
        if value is not None:
            setattr(state, attribute, value)
        await asyncio.sleep(interval)


def spawn_web_fetchers(
    state: AppState,
    path: str | os.PathLike[str],
    refresh_secs: float,
    owner: str | None = None,
    repo: str | None = None,
    token: str | None = None,
) -> list[asyncio.Task[None]]:
    """Start the background tasks that fill ``state``; failed fetches keep old data."""
    git = GitProvider(path)

    async def fetch_quality() -> QualityMetrics:
        return await asyncio.to_thread(LocalQualityProvider(path).fetch_metrics)

    tasks = [
        asyncio.create_task(
            _keep_updated(
                state, "git_status", lambda: asyncio.to_thread(git.fetch_status), refresh_secs
            )
        )
    ]
    if owner is not None and repo is not None and token is not None:
        ci = GitHubActionsProvider(owner, repo, token)
        issues = GitHubIssuesProvider(owner, repo, token)
        tasks.append(
            asyncio.create_task(_keep_updated(state, "ci_status", ci.fetch_status, refresh_secs))
        )
        tasks.append(
            asyncio.create_task(
                _keep_updated(state, "tasks_status", issues.fetch_status, refresh_secs)
            )
        )
    tasks.append(
        asyncio.create_task(
            _keep_updated(
                state, "quality_metrics", fetch_quality, refresh_secs * QUALITY_SLOWDOWN
            )
        )
    )
    return tasks


async def run_server(
    path: str | os.PathLike[str],
    refresh_secs: float,
    owner: str | None = None,
    repo: str | None = None,
    token: str | None = None,
) -> None:
    """Serve the dashboard API until cancelled."""
    state = AppState(config_info=ConfigInfo(owner=owner, repo=repo, path=str(path)))
    fetchers = spawn_web_fetchers(state, path, refresh_secs, owner, repo, token)
    runner = web.AppRunner(create_app(state))
    await runner.setup()
    try:
        site = web.TCPSite(runner, HOST, PORT)
        await site.start()
        print(f"dev-dashboard web server running at http://localhost:{PORT}")
        print("API endpoints:")
        for endpoint in ENDPOINTS:
            print(f"  GET {endpoint}")
        await asyncio.Event().wait()
    finally:
        for task in fetchers:
            task.cancel()
        await asyncio.gather(*fetchers, return_exceptions=True)
        await runner.cleanup()