from typing import Iterable, List, Optional

from ..types.report import FailedJob, FailedStep, FailureReport
from ..types.workflow import Job

FAILURE = "failure"

def summarize_failures(jobs: Iterable[Job], run_id: Optional[int] = None) -> FailureReport:
    failed_jobs = []
    for job in jobs:
        if job.conclusion != FAILURE:
            continue
        failed_steps = tuple(
            FailedStep(
                name=step.name,
                number=step.number,
                conclusion=step.conclusion,
                started_at=step.started_at,
                completed_at=step.completed_at,
            )
            for step in job.steps
            if step.conclusion == FAILURE
        )
        failed_jobs.append(
            FailedJob(
                name=job.name,
                conclusion=job.conclusion,
                started_at=job.started_at,
                completed_at=job.completed_at,
                failed_steps=failed_steps,
            )
        )
    return FailureReport(run_id=run_id, failed_jobs=tuple(failed_jobs))

async def list_run_jobs(gh, owner: str, repo: str, run_id: int, timeout: Optional[float] = None) -> List[Job]:
    data = await gh.list_jobs_for_workflow_run(owner, repo, run_id, timeout=timeout)
    jobs = (data or {}).get("jobs") or []
    print(f"[jobs] {owner}/{repo} run {run_id}: {len(jobs)} jobs")
    return [Job.from_api(j) for j in jobs]
