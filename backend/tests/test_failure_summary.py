import pytest

from agent_system.services.failure_summary import list_run_jobs, summarize_failures
from agent_system.types.workflow import Job

def _jobs():
    return [
        Job.from_api({
            "name": "build",
            "conclusion": "failure",
            "steps": [
                {"name": "compile", "number": 1, "conclusion": "failure"},
                {"name": "test", "number": 2, "conclusion": "success"},
            ],
        }),
        Job.from_api({"name": "lint", "conclusion": "success", "steps": []}),
    ]

def test_summarize_failures_scenario():
    report = summarize_failures(_jobs(), run_id=42)
    data = report.to_dict()
    assert data["runId"] == 42
    assert data["failedJobsCount"] == 1
    assert [j["name"] for j in data["failedJobs"]] == ["build"]
    steps = data["failedJobs"][0]["failedSteps"]
    assert [(s["name"], s["number"]) for s in steps] == [("compile", 1)]

def test_summarize_failures_is_idempotent():
    jobs = _jobs()
    first = summarize_failures(jobs, run_id=1)
    second = summarize_failures(jobs, run_id=1)
    assert first == second
    assert first.failed_jobs_count == len(first.failed_jobs)

def test_summarize_failures_preserves_order():
    jobs = [
        Job.from_api({
            "name": name,
            "conclusion": "failure",
            "steps": [
                {"name": "a", "number": 1, "conclusion": "failure"},
                {"name": "b", "number": 2, "conclusion": "skipped"},
                {"name": "c", "number": 3, "conclusion": "failure"},
            ],
        })
        for name in ("zeta", "alpha", "mid")
    ]
    report = summarize_failures(jobs)
    assert [j.name for j in report.failed_jobs] == ["zeta", "alpha", "mid"]
    assert [s.number for s in report.failed_jobs[0].failed_steps] == [1, 3]

def test_no_failed_jobs_is_an_empty_report():
    jobs = [Job.from_api({"name": "deploy", "conclusion": "cancelled", "steps": None})]
    report = summarize_failures(jobs, run_id=7)
    assert report.failed_jobs_count == 0
    assert report.to_dict() == {"runId": 7, "failedJobsCount": 0, "failedJobs": []}

class DummyGitHub:
    def __init__(self, jobs_data):
        self._jobs_data = jobs_data
        self.calls = []

    async def list_jobs_for_workflow_run(self, owner, repo, run_id, timeout=None):
        self.calls.append((owner, repo, run_id, timeout))
        return self._jobs_data

@pytest.mark.asyncio
async def test_list_run_jobs_parses_jobs():
    gh = DummyGitHub({"total_count": 1, "jobs": [{"id": 9, "name": "build", "conclusion": "failure", "steps": []}]})
    jobs = await list_run_jobs(gh, "org", "repo", 5, timeout=3.0)
    assert gh.calls == [("org", "repo", 5, 3.0)]
    assert jobs[0].id == 9
    assert jobs[0].steps == ()

@pytest.mark.asyncio
async def test_list_run_jobs_missing_key():
    jobs = await list_run_jobs(DummyGitHub({}), "org", "repo", 5)
    assert jobs == []
