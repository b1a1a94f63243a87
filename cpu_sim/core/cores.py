"""Fixed-size bank of core occupancy slots."""

from __future__ import annotations

from typing import Iterator, Optional

from cpu_sim.model import Job

from .errors import ProtocolViolation


class CoreBank:
    """Core slots plus the simulated time the slots were last advanced to."""

    def __init__(self, core_count: int) -> None:
        if core_count < 1:
            raise ProtocolViolation(f"core count must be >= 1, got {core_count}")
        self._slots: list[Optional[Job]] = [None] * core_count
        self.now = 0

    def __len__(self) -> int:
        return len(self._slots)

    def occupant(self, index: int) -> Optional[Job]:
        self._check_index(index)
        return self._slots[index]

    def occupied(self) -> Iterator[tuple[int, Job]]:
        for index, job in enumerate(self._slots):
            if job is not None:
                yield index, job

    def first_idle_slot(self) -> Optional[int]:
        for index, job in enumerate(self._slots):
            if job is None:
                return index
        return None

    def assign(self, index: int, job: Job) -> None:
        self._check_index(index)
        current = self._slots[index]
        if current is not None:
            raise ProtocolViolation(
                f"core {index} already runs job {current.job_id}, cannot assign job {job.job_id}"
            )
        self._slots[index] = job
        job.last_update_time = self.now

    def evict(self, index: int, expected_job_id: Optional[int] = None) -> Job:
        self._check_index(index)
        job = self._slots[index]
        if job is None:
            raise ProtocolViolation(f"core {index} is idle")
        if expected_job_id is not None and job.job_id != expected_job_id:
            raise ProtocolViolation(
                f"core {index} runs job {job.job_id}, not job {expected_job_id}"
            )
        self._slots[index] = None
        job.last_update_time = self.now
        return job

    def advance_all_to(self, time: int) -> list[Job]:
        """Charge elapsed time to running jobs; return jobs that just started executing."""
        if time < self.now:
            raise ProtocolViolation(f"time moved backward from {self.now} to {time}")
        started: list[Job] = []
        for index, job in self.occupied():
            elapsed = time - job.last_update_time
            if elapsed > job.remaining_run_time:
                raise ProtocolViolation(
                    f"job {job.job_id} on core {index} overran: "
                    f"{job.remaining_run_time} remaining, {elapsed} elapsed"
                )
            if job.first_run_time is None and elapsed > 0:
                job.first_run_time = job.last_update_time
                started.append(job)
            job.remaining_run_time -= elapsed
            job.last_update_time = time
        self.now = time
        return started

    def clear(self) -> None:
        self._slots = [None] * len(self._slots)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._slots):
            raise ProtocolViolation(f"core index {index} out of range [0, {len(self._slots)})")
