from __future__ import annotations

import pytest

from cpu_sim.model import Job
from cpu_sim.schedulers import Discipline, available_schedulers, order, register_discipline, resolve_discipline


def _job(job_id: int, arrival: int, run_time: int, priority: int = 0, remaining: int | None = None) -> Job:
    job = Job.arrive(job_id, arrival, run_time, priority)
    if remaining is not None:
        job.remaining_run_time = remaining
    return job


def test_fcfs_orders_by_arrival() -> None:
    early = _job(1, 0, 9)
    late = _job(2, 3, 1)
    assert order(early, late, Discipline.FCFS) == -3
    assert order(late, early, Discipline.FCFS) == 3


def test_sjf_uses_original_run_time_then_arrival() -> None:
    long_job = _job(1, 0, 10, remaining=1)
    short_job = _job(2, 1, 4)
    assert order(short_job, long_job, Discipline.SJF) == -6
    same_a = _job(3, 2, 4)
    assert order(short_job, same_a, Discipline.SJF) == -1


def test_psjf_uses_remaining_time() -> None:
    running = _job(1, 0, 10, remaining=9)
    arriving = _job(2, 1, 2)
    assert order(arriving, running, Discipline.PSJF) == -7
    tied = _job(3, 4, 9)
    assert order(tied, running, Discipline.PSJF) == 4


@pytest.mark.parametrize("discipline", [Discipline.PRI, Discipline.PPRI])
def test_priority_disciplines_lower_number_first(discipline: Discipline) -> None:
    urgent = _job(1, 5, 3, priority=1)
    relaxed = _job(2, 0, 3, priority=4)
    assert order(urgent, relaxed, discipline) == -3
    same_priority = _job(3, 7, 3, priority=1)
    assert order(urgent, same_priority, discipline) == -2


def test_round_robin_is_always_equal() -> None:
    assert order(_job(1, 0, 1), _job(2, 9, 50, priority=-3), Discipline.RR) == 0


def test_order_is_antisymmetric() -> None:
    a = _job(1, 0, 5, priority=2)
    b = _job(2, 2, 3, priority=1)
    for discipline in Discipline:
        assert order(a, b, discipline) == -order(b, a, discipline)


def test_preemptive_flags() -> None:
    assert {d for d in Discipline if d.preemptive} == {Discipline.PSJF, Discipline.PPRI}
    assert Discipline.RR.uses_quantum
    assert not Discipline.FCFS.uses_quantum


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("FCFS", Discipline.FCFS),
        ("shortest_job_first", Discipline.SJF),
        ("srtf", Discipline.PSJF),
        ("priority", Discipline.PRI),
        ("ppri", Discipline.PPRI),
        (" round_robin ", Discipline.RR),
    ],
)
def test_resolve_discipline_aliases(name: str, expected: Discipline) -> None:
    assert resolve_discipline(name) is expected


def test_resolve_unknown_scheduler_raises() -> None:
    with pytest.raises(ValueError, match="unknown scheduler lottery"):
        resolve_discipline("lottery")


def test_register_discipline_alias() -> None:
    register_discipline("Shortest_Remaining", Discipline.PSJF)
    assert resolve_discipline("shortest_remaining") is Discipline.PSJF
    assert "shortest_remaining" in available_schedulers()
