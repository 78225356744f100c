from datetime import datetime, timezone

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from devdash.ci_provider import GitHubActionsProvider, parse_runs
from devdash.models import PipelineStatus


def _run(**fields):
    base = {"id": 1, "name": "CI", "head_branch": "main", "status": "completed"}
    base.update(fields)
    return base


@pytest.mark.parametrize(
    "fields, expected",
    [
        ({"conclusion": "success"}, PipelineStatus.SUCCESS),
        ({"conclusion": "failure"}, PipelineStatus.FAILURE),
        ({"conclusion": "cancelled"}, PipelineStatus.CANCELLED),
        ({"conclusion": None, "status": "in_progress"}, PipelineStatus.RUNNING),
        ({"conclusion": None, "status": "queued"}, PipelineStatus.RUNNING),
        ({"conclusion": "skipped", "status": "completed"}, PipelineStatus.PENDING),
    ],
)
def test_status_mapping(fields, expected):
    status = parse_runs({"workflow_runs": [_run(**fields)]})
    assert status.runs[0].status is expected


def test_fields_are_copied():
    payload = {
        "workflow_runs": [
            _run(id=123, name="Build", head_branch="dev", created_at="2024-01-01T12:00:00Z")
        ]
    }
    run = parse_runs(payload).runs[0]
    assert run.id == "123"
    assert run.name == "Build"
    assert run.branch == "dev"
    assert run.duration_secs is None
    assert run.started_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_missing_fields_take_defaults():
    run = parse_runs({"workflow_runs": [{}]}).runs[0]
    assert run.name == "Unknown"
    assert run.branch == "unknown"
    assert run.id == "null"
    assert run.status is PipelineStatus.PENDING
    assert run.started_at is None


def test_offset_timestamp_converted_to_utc():
    run = parse_runs({"workflow_runs": [_run(created_at="2024-01-01T14:00:00+02:00")]}).runs[0]
    assert run.started_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_bad_timestamp_is_dropped():
    run = parse_runs({"workflow_runs": [_run(created_at="yesterday")]}).runs[0]
    assert run.started_at is None


def test_at_most_ten_runs():
    payload = {"workflow_runs": [_run(id=n) for n in range(25)]}
    runs = parse_runs(payload).runs
    assert len(runs) == 10
    assert [r.id for r in runs] == [str(n) for n in range(10)]


@pytest.mark.parametrize("payload", [{}, {"message": "Not Found"}, [], None, {"workflow_runs": 3}])
def test_unexpected_payload_gives_no_runs(payload):
    assert parse_runs(payload).runs == []


@pytest.mark.asyncio
async def test_fetch_status_against_local_server():
    seen = {}

    async def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        seen["agent"] = request.headers.get("User-Agent")
        seen["per_page"] = request.query.get("per_page")
        return web.json_response(
            {"workflow_runs": [_run(id=7, conclusion="success")]}
        )

    app = web.Application()
    app.router.add_get("/repos/acme/widget/actions/runs", handler)
    server = TestServer(app)
    await server.start_server()
    try:
        provider = GitHubActionsProvider(
            "acme", "widget", "token", api_url=f"http://{server.host}:{server.port}"
        )
        status = await provider.fetch_status()
    finally:
        await server.close()

    assert seen == {"auth": "Bearer token", "agent": "dev-dashboard", "per_page": "10"}
    assert [r.id for r in status.runs] == ["7"]
    assert status.runs[0].status is PipelineStatus.SUCCESS