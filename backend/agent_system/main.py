from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from .config import GitHubConfig, mask_token, settings
from .errors import RemoteAPIError, ValidationError
from .github import GitHubClient
from .services.error_extractor import extract_errors_from_logs
from .services.failure_pipeline import analyze_latest_failure, analyze_run, receive_failure_report

app = FastAPI(title="Agent System API")
agent = APIRouter()

_github: Optional[GitHubClient] = None

def get_github() -> GitHubClient:
    global _github
    if _github is None:
        _github = GitHubClient(GitHubConfig.from_settings(settings))
    return _github

@app.on_event("startup")
async def on_startup():
    print(f"[startup] GitHub API {settings.GITHUB_API_URL} token={mask_token(settings.GITHUB_TOKEN)}")

@app.on_event("shutdown")
async def on_shutdown():
    global _github
    if _github is not None:
        await _github.close()
        _github = None

@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc)})

@app.exception_handler(RemoteAPIError)
async def remote_api_error_handler(request: Request, exc: RemoteAPIError):
    print(f"[api] {request.url.path} GitHub error: {exc}")
    return JSONResponse(
        status_code=502,
        content={"error": exc.message, "status": exc.status_code, "detail": exc.payload},
    )

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    print(f"[api] {request.url.path} error: {type(exc).__name__}: {exc}")
    return JSONResponse(status_code=500, content={"error": "internal_server_error"})

@app.get("/")
async def root():
    return {"message": "Agent System API is running"}

@app.get("/health")
async def health():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

@agent.post("/analyze")
async def analyze(payload: Optional[Dict[str, Any]] = Body(None)):
    return receive_failure_report(payload or {})

@agent.get("/workflows/{owner}/{repo}/{workflow_id}/latest-failure")
async def latest_failure(
    owner: str,
    repo: str,
    workflow_id: str,
    timeout: Optional[float] = Query(None, gt=0, description="seconds allowed per GitHub call"),
    gh: GitHubClient = Depends(get_github),
):
    result = await analyze_latest_failure(gh, owner, repo, workflow_id, timeout=timeout)
    return result.to_dict()

@agent.get("/runs/{owner}/{repo}/{run_id}")
async def run_failure(
    owner: str,
    repo: str,
    run_id: int,
    timeout: Optional[float] = Query(None, gt=0),
    gh: GitHubClient = Depends(get_github),
):
    result = await analyze_run(gh, owner, repo, run_id, timeout=timeout)
    return result.to_dict()

@agent.post("/extract")
async def extract(request: Request):
    body = await request.body()
    return {"excerpt": extract_errors_from_logs(body)}

app.include_router(agent, prefix="/agent")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("agent_system.main:app", host="0.0.0.0", port=settings.PORT)
