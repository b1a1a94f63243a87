"""Default event-stream metrics."""

from __future__ import annotations

from collections import defaultdict

from cpu_sim.events import EventType, SimEvent

from .base import IMetric


_SEGMENT_END_TYPES = {
    EventType.JOB_PREEMPTED,
    EventType.QUANTUM_EXPIRED,
    EventType.JOB_COMPLETED,
}


class CoreMetrics(IMetric):
    """Aggregate dispatch counters and core utilization from the event stream."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._arrived: set[int] = set()
        self._completed: set[int] = set()
        self._running: dict[int, tuple[int, int]] = {}
        self._core_busy: dict[int, int] = defaultdict(int)
        self._dispatch_count = 0
        self._preempt_count = 0
        self._quantum_expiry_count = 0
        self._event_count = 0
        self._max_time = 0

    def consume(self, event: SimEvent) -> None:
        self._event_count += 1
        self._max_time = max(self._max_time, event.time)

        if event.type == EventType.JOB_ARRIVED and event.job_id is not None:
            self._arrived.add(event.job_id)

        elif event.type == EventType.JOB_DISPATCHED and event.core_index is not None:
            self._dispatch_count += 1
            self._running[event.core_index] = (event.time, event.job_id)

        elif event.type in _SEGMENT_END_TYPES:
            if event.core_index is not None and event.core_index in self._running:
                start, _ = self._running.pop(event.core_index)
                self._core_busy[event.core_index] += max(0, event.time - start)
            if event.type == EventType.JOB_PREEMPTED:
                self._preempt_count += 1
            elif event.type == EventType.QUANTUM_EXPIRED:
                self._quantum_expiry_count += 1
            elif event.job_id is not None:
                self._completed.add(event.job_id)

    def report(self) -> dict:
        utilization = {
            str(core_index): (busy_time / self._max_time if self._max_time > 0 else 0.0)
            for core_index, busy_time in sorted(self._core_busy.items())
        }
        return {
            "jobs_arrived": len(self._arrived),
            "jobs_completed": len(self._completed),
            "dispatch_count": self._dispatch_count,
            "preempt_count": self._preempt_count,
            "quantum_expiry_count": self._quantum_expiry_count,
            "core_utilization": utilization,
            "event_count": self._event_count,
            "max_time": self._max_time,
        }
