"""Runtime types shared across the dispatch engine and the trace driver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class JobPhase(str, Enum):
    WAITING = "waiting"
    RUNNING = "running"


@dataclass(slots=True)
class Job:
    """One unit of work and its timing history."""

    job_id: int
    arrival_time: int
    original_run_time: int
    priority: int
    remaining_run_time: int
    last_update_time: int
    first_run_time: Optional[int] = None

    @classmethod
    def arrive(cls, job_id: int, time: int, run_time: int, priority: int) -> "Job":
        return cls(
            job_id=job_id,
            arrival_time=time,
            original_run_time=run_time,
            priority=priority,
            remaining_run_time=run_time,
            last_update_time=time,
        )

    @property
    def executed_time(self) -> int:
        return self.original_run_time - self.remaining_run_time


@dataclass(slots=True)
class JobSnapshot:
    job_id: int
    phase: JobPhase
    core_index: Optional[int]
    remaining_run_time: int
