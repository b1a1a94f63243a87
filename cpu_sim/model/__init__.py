"""Model package exports."""

from .runtime import Job, JobPhase, JobSnapshot
from .spec import JobSpec, PlatformSpec, SchedulerParams, SchedulerSpec, SimSpec, WorkloadSpec

__all__ = [
    "Job",
    "JobPhase",
    "JobSnapshot",
    "JobSpec",
    "PlatformSpec",
    "SchedulerParams",
    "SchedulerSpec",
    "SimSpec",
    "WorkloadSpec",
]
