from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .workflow import WorkflowRun

@dataclass(frozen=True)
class FailedStep:
    name: Optional[str]
    number: Optional[int]
    conclusion: Optional[str]
    started_at: Optional[str] = None
    completed_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "number": self.number,
            "conclusion": self.conclusion,
            "startedAt": self.started_at,
            "completedAt": self.completed_at,
        }

@dataclass(frozen=True)
class FailedJob:
    name: Optional[str]
    conclusion: Optional[str]
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    failed_steps: Tuple[FailedStep, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "conclusion": self.conclusion,
            "startedAt": self.started_at,
            "completedAt": self.completed_at,
            "failedSteps": [s.to_dict() for s in self.failed_steps],
        }

@dataclass(frozen=True)
class FailureReport:
    run_id: Optional[int]
    failed_jobs: Tuple[FailedJob, ...] = ()

    @property
    def failed_jobs_count(self) -> int:
        return len(self.failed_jobs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "runId": self.run_id,
            "failedJobsCount": self.failed_jobs_count,
            "failedJobs": [j.to_dict() for j in self.failed_jobs],
        }

@dataclass(frozen=True)
class AnalysisResult:
    status: str
    owner: str
    repo: str
    run: Optional[WorkflowRun] = None
    failure_report: Optional[FailureReport] = None
    error_excerpt: Optional[str] = None
    log_bytes: int = 0
    log_archive: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "repository": f"{self.owner}/{self.repo}",
            "run": self.run.to_dict() if self.run else None,
            "failureReport": self.failure_report.to_dict() if self.failure_report else None,
            "errorExcerpt": self.error_excerpt,
            "logBytes": self.log_bytes,
            "logArchive": self.log_archive,
        }

@dataclass(frozen=True)
class FailureNotification:
    """Failure report pushed by a CI job, as posted to /agent/analyze."""

    error_log: str
    run_id: Any = None
    run_url: Optional[str] = None
    repository: Optional[str] = None
    failed_jobs: Any = None

    def metadata(self) -> Dict[str, Any]:
        return {
            "runId": self.run_id,
            "runUrl": self.run_url,
            "repository": self.repository,
            "failedJobs": self.failed_jobs,
        }

@dataclass(frozen=True)
class WorkflowTarget:
    owner: str
    repo: str
    workflow_id: str
    timeout: Optional[float] = None
