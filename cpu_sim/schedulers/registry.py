"""Scheduler name registry."""

from __future__ import annotations

from .policy import Discipline


_REGISTRY: dict[str, Discipline] = {
    "fcfs": Discipline.FCFS,
    "first_come_first_served": Discipline.FCFS,
    "sjf": Discipline.SJF,
    "shortest_job_first": Discipline.SJF,
    "psjf": Discipline.PSJF,
    "srtf": Discipline.PSJF,
    "preemptive_sjf": Discipline.PSJF,
    "pri": Discipline.PRI,
    "priority": Discipline.PRI,
    "ppri": Discipline.PPRI,
    "preemptive_priority": Discipline.PPRI,
    "rr": Discipline.RR,
    "round_robin": Discipline.RR,
}


def register_discipline(name: str, discipline: Discipline) -> None:
    _REGISTRY[name.lower()] = discipline


def resolve_discipline(name: str | Discipline) -> Discipline:
    if isinstance(name, Discipline):
        return name
    key = name.lower().strip()
    if key not in _REGISTRY:
        raise ValueError(f"unknown scheduler {name}")
    return _REGISTRY[key]


def available_schedulers() -> list[str]:
    return sorted(_REGISTRY)
