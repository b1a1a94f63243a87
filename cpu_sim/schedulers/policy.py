"""Dispatch disciplines and the job ordering relation."""

from __future__ import annotations

from enum import Enum

from cpu_sim.model import Job


class Discipline(str, Enum):
    """Scheduling discipline fixed for a whole simulation run."""

    FCFS = "fcfs"
    SJF = "sjf"
    PSJF = "psjf"
    PRI = "pri"
    PPRI = "ppri"
    RR = "rr"

    @property
    def preemptive(self) -> bool:
        """Whether an arrival may evict a running job."""
        return self in (Discipline.PSJF, Discipline.PPRI)

    @property
    def uses_quantum(self) -> bool:
        return self is Discipline.RR


def order(job_a: Job, job_b: Job, discipline: Discipline) -> int:
    """Return <0 if ``job_a`` runs before ``job_b``, 0 if equivalent, >0 otherwise.

    The result is the raw key difference rather than a sign, since the
    preemption search ranks candidates by how negative the value is.
    """
    arrival_diff = job_a.arrival_time - job_b.arrival_time

    if discipline is Discipline.FCFS:
        return arrival_diff
    if discipline is Discipline.SJF:
        diff = job_a.original_run_time - job_b.original_run_time
    elif discipline is Discipline.PSJF:
        diff = job_a.remaining_run_time - job_b.remaining_run_time
    elif discipline in (Discipline.PRI, Discipline.PPRI):
        diff = job_a.priority - job_b.priority
    elif discipline is Discipline.RR:
        return 0
    else:
        raise ValueError(f"unknown discipline {discipline}")
    return diff if diff != 0 else arrival_diff


def comparator(discipline: Discipline):
    """Bind ``order`` to one discipline for use as a waitlist comparator."""

    def compare(job_a: Job, job_b: Job) -> int:
        return order(job_a, job_b, discipline)

    return compare
