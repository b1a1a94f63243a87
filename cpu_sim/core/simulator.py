"""SimPy-backed trace driver feeding workload events into the dispatch engine."""

from __future__ import annotations

from dataclasses import dataclass
import heapq
from typing import Callable, Optional

import simpy

from cpu_sim.events import EventBus, SimEvent
from cpu_sim.metrics import CoreMetrics, IMetric
from cpu_sim.model import JobSpec, WorkloadSpec
from cpu_sim.schedulers import Discipline, resolve_discipline

from .engine import DispatchEngine


@dataclass(slots=True)
class CoreRuntime:
    core_index: int
    job_id: Optional[int] = None
    finish_time: Optional[int] = None
    quantum_end: Optional[int] = None


class TraceSimulator:
    """Play a workload against a ``DispatchEngine`` on a SimPy clock.

    At each event instant completions are handled first (by core index), then
    arrivals (by arrival time and id), then quantum expiries.
    """

    def __init__(self, metrics: list[IMetric] | None = None) -> None:
        self._metrics = metrics or [CoreMetrics()]
        self._subscribers: list[Callable[[SimEvent], None]] = []

        self._env = simpy.Environment()
        self._event_bus = EventBus()
        self._events: list[SimEvent] = []
        self._setup_event_pipeline()
        self._engine = DispatchEngine(event_bus=self._event_bus)

        self._spec: WorkloadSpec | None = None
        self._discipline: Discipline | None = None
        self._quantum: int | None = None
        self._cores: list[CoreRuntime] = []
        self._arrival_heap: list[tuple[int, int, JobSpec]] = []

    def subscribe(self, handler: Callable[[SimEvent], None]) -> None:
        if handler in self._subscribers:
            return
        self._subscribers.append(handler)
        self._event_bus.subscribe(handler)

    def build(self, spec: WorkloadSpec) -> None:
        self.reset()
        discipline = resolve_discipline(spec.scheduler.name)
        quantum = spec.scheduler.params.quantum
        if discipline.uses_quantum and quantum is None:
            raise ValueError(f"scheduler {spec.scheduler.name} requires params.quantum")

        self._spec = spec
        self._discipline = discipline
        self._quantum = quantum if discipline.uses_quantum else None
        self._engine.start(spec.platform.core_count, discipline)
        self._cores = [CoreRuntime(core_index=index) for index in range(spec.platform.core_count)]
        for job in spec.jobs:
            heapq.heappush(self._arrival_heap, (job.arrival, job.id, job))

    def run(self, until: int | None = None) -> None:
        if self._spec is None:
            raise RuntimeError("build() must be called before run()")
        horizon = until if until is not None else self._spec.sim.until
        while self._advance_once(horizon):
            pass

    def step(self) -> bool:
        if self._spec is None:
            raise RuntimeError("build() must be called before step()")
        return self._advance_once(self._spec.sim.until)

    def reset(self) -> None:
        self._engine.shutdown()
        self._env = simpy.Environment()
        for metric in self._metrics:
            metric.reset()
        self._event_bus.reset()
        self._events = []
        self._setup_event_pipeline()

        self._spec = None
        self._discipline = None
        self._quantum = None
        self._cores = []
        self._arrival_heap = []

    @property
    def engine(self) -> DispatchEngine:
        return self._engine

    @property
    def events(self) -> list[SimEvent]:
        return list(self._events)

    @property
    def now(self) -> int:
        return int(self._env.now)

    @property
    def finished(self) -> bool:
        return self._next_event_time() is None

    def metric_report(self) -> dict:
        merged: dict = {}
        for metric in self._metrics:
            merged.update(metric.report())
        core_utilization = merged.get("core_utilization")
        if isinstance(core_utilization, dict):
            for core in self._cores:
                core_utilization.setdefault(str(core.core_index), 0.0)
        merged.update(self._engine.statistics.report())
        return merged

    def _setup_event_pipeline(self) -> None:
        self._event_bus.subscribe(self._events.append)
        for metric in self._metrics:
            self._event_bus.subscribe(metric.consume)
        for handler in self._subscribers:
            self._event_bus.subscribe(handler)

    def _next_event_time(self) -> int | None:
        next_times: list[int] = []
        if self._arrival_heap:
            next_times.append(self._arrival_heap[0][0])
        for core in self._cores:
            if core.finish_time is not None:
                next_times.append(core.finish_time)
            if core.quantum_end is not None:
                next_times.append(core.quantum_end)
        return min(next_times) if next_times else None

    def _advance_once(self, horizon: int | None) -> bool:
        next_time = self._next_event_time()
        if next_time is None:
            return False
        if horizon is not None and next_time > horizon:
            return False

        if next_time > self.now:
            timeout = self._env.timeout(next_time - self.now)
            self._env.run(until=timeout)

        now = self.now
        self._process_completions(now)
        self._process_arrivals(now)
        self._process_quantum_expiries(now)
        return True

    def _process_completions(self, now: int) -> None:
        for core in self._cores:
            if core.finish_time == now:
                next_job_id = self._engine.on_completion(core.core_index, core.job_id, now)
                self._track(core, next_job_id, now)

    def _process_arrivals(self, now: int) -> None:
        while self._arrival_heap and self._arrival_heap[0][0] <= now:
            _, _, job = heapq.heappop(self._arrival_heap)
            core_index = self._engine.on_arrival(job.id, now, job.run_time, job.priority)
            if core_index is not None:
                self._track(self._cores[core_index], job.id, now)

    def _process_quantum_expiries(self, now: int) -> None:
        if self._quantum is None:
            return
        for core in self._cores:
            if core.job_id is not None and core.quantum_end == now:
                next_job_id = self._engine.on_quantum_expired(core.core_index, now)
                self._track(core, next_job_id, now)

    def _track(self, core: CoreRuntime, job_id: int | None, now: int) -> None:
        if job_id is None:
            core.job_id = None
            core.finish_time = None
            core.quantum_end = None
            return
        job = self._engine.running_job(core.core_index)
        assert job is not None and job.job_id == job_id
        core.job_id = job_id
        core.finish_time = now + job.remaining_run_time
        core.quantum_end = now + self._quantum if self._quantum is not None else None
