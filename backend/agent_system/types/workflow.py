from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

@dataclass(frozen=True)
class WorkflowRun:
    id: int
    created_at: Optional[str]
    status: Optional[str]
    conclusion: Optional[str]
    name: Optional[str] = None
    html_url: Optional[str] = None
    run_number: Optional[int] = None
    head_branch: Optional[str] = None
    head_sha: Optional[str] = None

    @classmethod
    def from_api(cls, run: Dict[str, Any]) -> "WorkflowRun":
        return cls(
            id=int(run["id"]),
            created_at=run.get("created_at"),
            status=run.get("status"),
            conclusion=run.get("conclusion"),
            name=run.get("name"),
            html_url=run.get("html_url"),
            run_number=run.get("run_number"),
            head_branch=run.get("head_branch"),
            head_sha=run.get("head_sha"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "conclusion": self.conclusion,
            "createdAt": self.created_at,
            "htmlUrl": self.html_url,
            "runNumber": self.run_number,
            "headBranch": self.head_branch,
            "headSha": self.head_sha,
        }

@dataclass(frozen=True)
class Step:
    name: Optional[str]
    number: Optional[int]
    conclusion: Optional[str]
    started_at: Optional[str] = None
    completed_at: Optional[str] = None

    @classmethod
    def from_api(cls, step: Dict[str, Any]) -> "Step":
        return cls(
            name=step.get("name"),
            number=step.get("number"),
            conclusion=step.get("conclusion"),
            started_at=step.get("started_at"),
            completed_at=step.get("completed_at"),
        )

@dataclass(frozen=True)
class Job:
    name: Optional[str]
    conclusion: Optional[str]
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    steps: Tuple[Step, ...] = ()
    id: Optional[int] = None
    html_url: Optional[str] = None

    @classmethod
    def from_api(cls, job: Dict[str, Any]) -> "Job":
        # queued jobs come back with "steps": null
        steps = job.get("steps") or []
        return cls(
            name=job.get("name"),
            conclusion=job.get("conclusion"),
            started_at=job.get("started_at"),
            completed_at=job.get("completed_at"),
            steps=tuple(Step.from_api(s) for s in steps),
            id=job.get("id"),
            html_url=job.get("html_url"),
        )
