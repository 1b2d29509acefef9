import httpx
import pytest

from agent_system.config import GitHubConfig, mask_token
from agent_system.errors import RemoteAPIError
from agent_system.github import GitHubClient

def _client(handler, token="ghp_secret1234"):
    config = GitHubConfig(token=token, base_url="https://api.example.test", timeout_seconds=5.0)
    return GitHubClient(config, transport=httpx.MockTransport(handler))

@pytest.mark.asyncio
async def test_list_workflow_runs_sends_headers_and_filters():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        seen["headers"] = request.headers
        return httpx.Response(200, json={"workflow_runs": [{"id": 1}]})

    async with _client(handler) as gh:
        data = await gh.list_workflow_runs("org", "repo", "ci.yml", status="completed", conclusion="failure")

    assert data == {"workflow_runs": [{"id": 1}]}
    assert seen["path"] == "/repos/org/repo/actions/workflows/ci.yml/runs"
    assert seen["params"] == {"per_page": "10", "page": "1", "status": "completed", "conclusion": "failure"}
    assert seen["headers"]["Authorization"] == "Bearer ghp_secret1234"
    assert seen["headers"]["Accept"] == "application/vnd.github+json"
    assert seen["headers"]["X-GitHub-Api-Version"] == "2022-11-28"

@pytest.mark.asyncio
async def test_empty_filters_are_left_out():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"workflow_runs": []})

    async with _client(handler, token="") as gh:
        await gh.list_workflow_runs("org", "repo", "ci.yml", status=None, conclusion="")

    assert seen["params"] == {"per_page": "10", "page": "1"}

@pytest.mark.asyncio
async def test_run_logs_follow_redirect_and_return_bytes():
    archive = b"PK\x03\x04rest-of-archive"

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "api.example.test":
            assert request.url.path == "/repos/org/repo/actions/runs/77/logs"
            return httpx.Response(302, headers={"Location": "https://blob.example.test/logs.zip"})
        return httpx.Response(200, content=archive)

    async with _client(handler) as gh:
        data = await gh.get_run_logs("org", "repo", 77)

    assert data == archive

@pytest.mark.asyncio
async def test_error_status_raises_remote_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Not Found"})

    async with _client(handler) as gh:
        with pytest.raises(RemoteAPIError) as exc:
            await gh.list_jobs_for_workflow_run("org", "repo", 1)

    assert exc.value.status_code == 404
    assert exc.value.payload == {"message": "Not Found"}

@pytest.mark.asyncio
async def test_server_error_is_not_retried():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(503, text="unavailable")

    async with _client(handler) as gh:
        with pytest.raises(RemoteAPIError) as exc:
            await gh.get_run_logs("org", "repo", 1)

    assert len(calls) == 1
    assert exc.value.status_code == 503
    assert exc.value.payload == "unavailable"

@pytest.mark.asyncio
async def test_transport_failure_raises_remote_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as gh:
        with pytest.raises(RemoteAPIError) as exc:
            await gh.list_jobs_for_workflow_run("org", "repo", 1)

    assert exc.value.status_code is None

def test_mask_token_hides_secret():
    assert mask_token("ghp_abcdefgh12345678") == "****5678"
    assert mask_token("short") == "****"
    assert mask_token("") == "<none>"

@pytest.mark.asyncio
async def test_per_call_timeout_reaches_transport():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.extensions["timeout"])
        return httpx.Response(200, json={"jobs": []})

    async with _client(handler) as gh:
        await gh.list_jobs_for_workflow_run("org", "repo", 1, timeout=2.5)
        await gh.list_jobs_for_workflow_run("org", "repo", 1)

    assert seen[0] == {"connect": 2.5, "read": 2.5, "write": 2.5, "pool": 2.5}
    assert seen[1] == {"connect": 5.0, "read": 5.0, "write": 5.0, "pool": 5.0}
