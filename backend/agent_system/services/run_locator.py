from typing import Optional

from ..types.workflow import WorkflowRun

async def find_most_recent_failing_run(
    gh,
    owner: str,
    repo: str,
    workflow_id: str,
    status: Optional[str] = "completed",
    conclusion: Optional[str] = "failure",
    timeout: Optional[float] = None,
) -> Optional[WorkflowRun]:
    """Newest run of the workflow matching status/conclusion, or None.

    GitHub lists runs newest first; that order is trusted as-is.
    """
    data = await gh.list_workflow_runs(
        owner,
        repo,
        workflow_id,
        status=status,
        conclusion=conclusion,
        per_page=10,
        page=1,
        timeout=timeout,
    )
    runs = (data or {}).get("workflow_runs") or []
    if not runs:
        print(f"[locator] {owner}/{repo} workflow {workflow_id}: no {conclusion or 'matching'} runs")
        return None

    run = WorkflowRun.from_api(runs[0])
    print(f"[locator] {owner}/{repo} workflow {workflow_id}: run {run.id} from {run.created_at}")
    return run
