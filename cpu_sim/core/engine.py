"""Event-driven dispatch engine for N cores and one waiting list."""

from __future__ import annotations

from typing import Optional

from cpu_sim.events import EventBus, EventType
from cpu_sim.metrics import RunningStatistics
from cpu_sim.model import Job, JobPhase, JobSnapshot
from cpu_sim.schedulers import Discipline, comparator, order

from .cores import CoreBank
from .errors import ProtocolViolation
from .interfaces import IDispatchEngine
from .waitlist import OrderedWaitlist


class DispatchEngine(IDispatchEngine):
    """Decides which job occupies which core at every arrival, completion and quantum expiry.

    The engine never advances time on its own. Each handler first charges the
    elapsed time to the running jobs, then mutates the core slots and the
    waiting list, and finally reports the placement back to the caller, who is
    responsible for actually simulating execution.
    """

    def __init__(self, event_bus: EventBus | None = None) -> None:
        self._event_bus = event_bus
        self._discipline: Discipline | None = None
        self._cores: CoreBank | None = None
        self._waitlist: OrderedWaitlist[Job] | None = None
        self._jobs: dict[int, Job] = {}
        self._statistics = RunningStatistics()

    def start(self, core_count: int, discipline: Discipline) -> None:
        self._discipline = discipline
        self._cores = CoreBank(core_count)
        self._waitlist = OrderedWaitlist(comparator(discipline))
        self._jobs = {}
        self._statistics = RunningStatistics()

    def shutdown(self) -> None:
        if self._cores is not None:
            self._cores.clear()
        if self._waitlist is not None:
            self._waitlist.clear()
        self._jobs = {}
        self._cores = None
        self._waitlist = None

    @property
    def started(self) -> bool:
        return self._cores is not None

    @property
    def discipline(self) -> Discipline | None:
        return self._discipline

    @property
    def core_count(self) -> int:
        return len(self._cores) if self._cores is not None else 0

    @property
    def now(self) -> int:
        return self._cores.now if self._cores is not None else 0

    @property
    def statistics(self) -> RunningStatistics:
        return self._statistics

    def running_job(self, core_index: int) -> Optional[Job]:
        cores, _ = self._require_started()
        return cores.occupant(core_index)

    def waiting_jobs(self) -> list[Job]:
        _, waitlist = self._require_started()
        return list(waitlist)

    def snapshot(self) -> list[JobSnapshot]:
        cores, waitlist = self._require_started()
        rows = [
            JobSnapshot(job.job_id, JobPhase.WAITING, None, job.remaining_run_time)
            for job in waitlist
        ]
        rows.extend(
            JobSnapshot(job.job_id, JobPhase.RUNNING, index, job.remaining_run_time)
            for index, job in cores.occupied()
        )
        return rows

    def on_arrival(self, job_id: int, time: int, run_time: int, priority: int) -> Optional[int]:
        cores, waitlist = self._require_started()
        if job_id in self._jobs:
            raise ProtocolViolation(f"job {job_id} is already live")
        if run_time < 0:
            raise ProtocolViolation(f"job {job_id} has negative run time {run_time}")
        self._advance(time)

        job = Job.arrive(job_id, time, run_time, priority)
        self._jobs[job_id] = job
        self._publish(EventType.JOB_ARRIVED, job, payload={"run_time": run_time, "priority": priority})

        core_index = cores.first_idle_slot()
        if core_index is not None:
            self._place(core_index, job)
            return core_index

        if self._discipline.preemptive:
            core_index = self._find_preemption_victim(job)
            if core_index is not None:
                victim = cores.evict(core_index)
                waitlist.insert(victim)
                self._publish(
                    EventType.JOB_PREEMPTED,
                    victim,
                    core_index=core_index,
                    payload={"by_job_id": job_id, "remaining_run_time": victim.remaining_run_time},
                )
                self._place(core_index, job)
                return core_index

        self._enqueue(job)
        return None

    def on_completion(self, core_index: int, job_id: int, time: int) -> Optional[int]:
        cores, waitlist = self._require_started()
        self._advance(time)

        job = cores.evict(core_index, expected_job_id=job_id)
        waitlist.remove_all(job)
        turnaround_time = time - job.arrival_time
        wait_time = turnaround_time - job.executed_time
        self._statistics.fold_completion(wait_time=wait_time, turnaround_time=turnaround_time)
        del self._jobs[job.job_id]
        self._publish(
            EventType.JOB_COMPLETED,
            job,
            core_index=core_index,
            payload={"turnaround_time": turnaround_time, "wait_time": wait_time},
        )
        return self._dispatch_head(core_index)

    def on_quantum_expired(self, core_index: int, time: int) -> Optional[int]:
        cores, waitlist = self._require_started()
        self._advance(time)

        job = cores.evict(core_index)
        waitlist.insert(job)
        self._publish(
            EventType.QUANTUM_EXPIRED,
            job,
            core_index=core_index,
            payload={"remaining_run_time": job.remaining_run_time},
        )
        return self._dispatch_head(core_index)

    def average_wait_time(self) -> float:
        return self._statistics.average_wait_time()

    def average_turnaround_time(self) -> float:
        return self._statistics.average_turnaround_time()

    def average_response_time(self) -> float:
        return self._statistics.average_response_time()

    def _require_started(self) -> tuple[CoreBank, OrderedWaitlist[Job]]:
        if self._cores is None or self._waitlist is None:
            raise ProtocolViolation("start() must be called before dispatching")
        return self._cores, self._waitlist

    def _advance(self, time: int) -> None:
        assert self._cores is not None
        for job in self._cores.advance_all_to(time):
            self._statistics.fold_response(job.first_run_time - job.arrival_time)

    def _find_preemption_victim(self, job: Job) -> Optional[int]:
        """Pick the core whose job the arrival outranks most decisively.

        Only a strictly negative comparison qualifies. Among cores tied at the
        lowest value seen so far the later-arrived running job is evicted.
        """
        assert self._cores is not None and self._discipline is not None
        best_value = 0
        best_index: Optional[int] = None
        for index, running in self._cores.occupied():
            value = order(job, running, self._discipline)
            if value < best_value:
                best_value = value
                best_index = index
            elif value == best_value and best_index is not None:
                incumbent = self._cores.occupant(best_index)
                if incumbent.arrival_time < running.arrival_time:
                    best_index = index
        return best_index

    def _place(self, core_index: int, job: Job) -> None:
        assert self._cores is not None
        self._cores.assign(core_index, job)
        self._publish(
            EventType.JOB_DISPATCHED,
            job,
            core_index=core_index,
            payload={"remaining_run_time": job.remaining_run_time},
        )

    def _enqueue(self, job: Job) -> None:
        assert self._waitlist is not None
        position = self._waitlist.insert(job)
        self._publish(EventType.JOB_QUEUED, job, payload={"position": position})

    def _dispatch_head(self, core_index: int) -> Optional[int]:
        assert self._waitlist is not None
        job = self._waitlist.poll()
        if job is None:
            self._publish(EventType.CORE_IDLE, None, core_index=core_index)
            return None
        self._place(core_index, job)
        return job.job_id

    def _publish(
        self,
        event_type: EventType,
        job: Job | None,
        *,
        core_index: int | None = None,
        payload: dict | None = None,
    ) -> None:
        if self._event_bus is None:
            return
        self._event_bus.publish(
            event_type=event_type,
            time=self.now,
            correlation_id=f"job-{job.job_id}" if job is not None else "engine",
            job_id=job.job_id if job is not None else None,
            core_index=core_index,
            payload=payload,
        )
