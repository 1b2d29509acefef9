import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

from ..config import settings
from ..errors import ValidationError
from ..types.report import AnalysisResult, FailureNotification, WorkflowTarget
from ..types.workflow import Job, WorkflowRun
from .error_extractor import extract_errors_from_logs
from .failure_summary import list_run_jobs, summarize_failures
from .run_locator import find_most_recent_failing_run
from .run_logs import fetch_raw_logs, is_zip_archive

RECEIVED_MESSAGE = "Failure data logged. AI analysis not yet implemented."

def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

def parse_notification(payload: Dict[str, Any]) -> FailureNotification:
    payload = payload or {}
    error_log = payload.get("errorLog")
    if not error_log:
        raise ValidationError("errorLog")
    return FailureNotification(
        error_log=str(error_log),
        run_id=payload.get("runId"),
        run_url=payload.get("runUrl"),
        repository=payload.get("repository"),
        failed_jobs=payload.get("failedJobs"),
    )

def receive_failure_report(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Push mode: accept a failure report relayed by the CI job itself.

    Only errorLog is required. The report is logged and acknowledged; the
    log body is not analysed further here.
    """
    notification = parse_notification(payload)
    preview_chars = settings.LOG_PREVIEW_CHARS

    print("[analyze] --- failure report received ---")
    print(f"[analyze] repository: {notification.repository}")
    print(f"[analyze] run id: {notification.run_id}")
    print(f"[analyze] run url: {notification.run_url}")
    print(f"[analyze] failed jobs: {notification.failed_jobs}")
    print(f"[analyze] error log preview: {notification.error_log[:preview_chars]}...")

    return {
        "status": "received",
        "message": RECEIVED_MESSAGE,
        "timestamp": now_iso(),
        "metadata": notification.metadata(),
    }

async def fetch_logs_and_jobs(
    gh,
    owner: str,
    repo: str,
    run_id: int,
    timeout: Optional[float] = None,
) -> Tuple[bytes, List[Job]]:
    """Fetch the log archive and the job list side by side.

    If either call fails the other one is cancelled and awaited before the
    first error is raised, so no request outlives the analysis.
    """
    logs_task = asyncio.ensure_future(fetch_raw_logs(gh, owner, repo, run_id, timeout=timeout))
    jobs_task = asyncio.ensure_future(list_run_jobs(gh, owner, repo, run_id, timeout=timeout))
    tasks = (logs_task, jobs_task)
    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    if pending:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        print(f"[pipeline] {owner}/{repo} run {run_id}: fetch failed, cancelled sibling request")

    # reading every exception marks it retrieved, even when both calls failed
    errors = [t.exception() for t in tasks if t in done]
    for error in errors:
        if error is not None:
            raise error
    return logs_task.result(), jobs_task.result()

async def analyze_run(
    gh,
    owner: str,
    repo: str,
    run_id: int,
    run: Optional[WorkflowRun] = None,
    timeout: Optional[float] = None,
) -> AnalysisResult:
    log_data, jobs = await fetch_logs_and_jobs(gh, owner, repo, run_id, timeout=timeout)
    report = summarize_failures(jobs, run_id=run_id)
    excerpt = extract_errors_from_logs(log_data)
    print(f"[pipeline] {owner}/{repo} run {run_id}: {report.failed_jobs_count} failed jobs, excerpt {len(excerpt)} chars")

    return AnalysisResult(
        status="analyzed",
        owner=owner,
        repo=repo,
        run=run,
        failure_report=report,
        error_excerpt=excerpt,
        log_bytes=len(log_data),
        log_archive=is_zip_archive(log_data),
    )

async def analyze_latest_failure(
    gh,
    owner: str,
    repo: str,
    workflow_id: str,
    timeout: Optional[float] = None,
) -> AnalysisResult:
    """Pull mode: find the workflow's newest failed run and analyse it."""
    run = await find_most_recent_failing_run(gh, owner, repo, workflow_id, timeout=timeout)
    if run is None:
        return AnalysisResult(status="no_failing_run", owner=owner, repo=repo)
    return await analyze_run(gh, owner, repo, run.id, run=run, timeout=timeout)

async def analyze_failure(
    request: Union[Dict[str, Any], WorkflowTarget],
    gh=None,
) -> Union[Dict[str, Any], AnalysisResult]:
    if isinstance(request, WorkflowTarget):
        if gh is None:
            raise ValueError("pull mode needs a GitHub client")
        return await analyze_latest_failure(
            gh, request.owner, request.repo, request.workflow_id, timeout=request.timeout
        )
    return receive_failure_report(request)
