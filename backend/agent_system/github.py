import httpx
from typing import Any, Dict, Optional

from .config import GitHubConfig
from .errors import RemoteAPIError

API_VERSION = "2022-11-28"

def _error_payload(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text or None

class GitHubClient:
    """Thin async wrapper over the Actions REST endpoints.

    One attempt per call: a non-2xx answer or a transport failure becomes a
    RemoteAPIError and is left for the caller to handle.
    """

    def __init__(self, config: GitHubConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        }
        if config.token:
            headers["Authorization"] = f"Bearer {config.token}"

        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers=headers,
            timeout=httpx.Timeout(config.timeout_seconds),
            follow_redirects=True,
            transport=transport,
        )

    async def close(self):
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        kwargs: Dict[str, Any] = {"params": params}
        if timeout is not None:
            kwargs["timeout"] = timeout
        try:
            resp = await self._client.get(url, **kwargs)
        except httpx.HTTPError as e:
            print(f"[github] GET {url} failed: {type(e).__name__}")
            raise RemoteAPIError(f"GitHub request failed: {type(e).__name__}: {e}") from e

        if resp.is_success:
            return resp

        payload = _error_payload(resp)
        print(f"[github] GET {url} status={resp.status_code}")
        raise RemoteAPIError(
            f"GitHub API returned {resp.status_code} for {url}",
            status_code=resp.status_code,
            payload=payload,
        )

    async def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        resp = await self._get(url, params=params, timeout=timeout)
        try:
            return resp.json()
        except ValueError as e:
            raise RemoteAPIError(
                f"GitHub API returned a non-JSON body for {url}",
                status_code=resp.status_code,
                payload=resp.text,
            ) from e

    async def get_bytes(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        resp = await self._get(url, params=params, timeout=timeout)
        return resp.content

    async def list_workflow_runs(
        self,
        owner: str,
        repo: str,
        workflow_id: str,
        status: Optional[str] = None,
        conclusion: Optional[str] = None,
        per_page: int = 10,
        page: int = 1,
        timeout: Optional[float] = None,
    ):
        params: Dict[str, Any] = {"per_page": per_page, "page": page}
        if status:
            params["status"] = status
        if conclusion:
            params["conclusion"] = conclusion
        return await self.get_json(
            f"/repos/{owner}/{repo}/actions/workflows/{workflow_id}/runs",
            params=params,
            timeout=timeout,
        )

    async def list_jobs_for_workflow_run(self, owner: str, repo: str, run_id: int, timeout: Optional[float] = None):
        return await self.get_json(
            f"/repos/{owner}/{repo}/actions/runs/{run_id}/jobs",
            timeout=timeout,
        )

    async def get_run_logs(self, owner: str, repo: str, run_id: int, timeout: Optional[float] = None) -> bytes:
        return await self.get_bytes(
            f"/repos/{owner}/{repo}/actions/runs/{run_id}/logs",
            timeout=timeout,
        )
