from __future__ import annotations

import json

from cpu_sim.events import EventBus, EventType, SimEvent
from cpu_sim.metrics import CoreMetrics, RunningStatistics


def test_running_statistics_guard_zero_counts() -> None:
    stats = RunningStatistics()
    assert stats.average_wait_time() == 0.0
    assert stats.average_turnaround_time() == 0.0
    assert stats.average_response_time() == 0.0


def test_running_statistics_fold() -> None:
    stats = RunningStatistics()
    stats.fold_completion(wait_time=2, turnaround_time=5)
    stats.fold_completion(wait_time=1, turnaround_time=4)
    stats.fold_response(3)
    assert stats.average_wait_time() == 1.5
    assert stats.average_turnaround_time() == 4.5
    assert stats.report() == {
        "avg_wait_time": 1.5,
        "avg_turnaround_time": 4.5,
        "avg_response_time": 3.0,
    }


def test_event_bus_assigns_sequence_and_ids() -> None:
    bus = EventBus()
    seen: list[SimEvent] = []
    bus.subscribe(seen.append)
    first = bus.publish(event_type=EventType.JOB_ARRIVED, time=0, correlation_id="job-1", job_id=1)
    second = bus.publish(event_type=EventType.CORE_IDLE, time=4, correlation_id="engine", core_index=0)
    assert [first.seq, second.seq] == [0, 1]
    assert second.event_id == "evt-00000001"
    assert seen == [first, second]
    assert json.loads(second.to_json())["type"] == "CoreIdle"

    bus.reset()
    third = bus.publish(event_type=EventType.JOB_ARRIVED, time=5, correlation_id="job-2", job_id=2)
    assert third.seq == 0
    assert len(seen) == 2


def test_core_metrics_tracks_busy_time_per_core() -> None:
    bus = EventBus()
    metrics = CoreMetrics()
    bus.subscribe(metrics.consume)
    bus.publish(event_type=EventType.JOB_ARRIVED, time=0, correlation_id="job-0", job_id=0)
    bus.publish(event_type=EventType.JOB_DISPATCHED, time=0, correlation_id="job-0", job_id=0, core_index=0)
    bus.publish(event_type=EventType.JOB_ARRIVED, time=1, correlation_id="job-1", job_id=1)
    bus.publish(event_type=EventType.JOB_PREEMPTED, time=1, correlation_id="job-0", job_id=0, core_index=0)
    bus.publish(event_type=EventType.JOB_DISPATCHED, time=1, correlation_id="job-1", job_id=1, core_index=0)
    bus.publish(event_type=EventType.JOB_COMPLETED, time=3, correlation_id="job-1", job_id=1, core_index=0)
    bus.publish(event_type=EventType.JOB_DISPATCHED, time=3, correlation_id="job-0", job_id=0, core_index=0)
    bus.publish(event_type=EventType.QUANTUM_EXPIRED, time=4, correlation_id="job-0", job_id=0, core_index=0)

    report = metrics.report()
    assert report["jobs_arrived"] == 2
    assert report["jobs_completed"] == 1
    assert report["dispatch_count"] == 3
    assert report["preempt_count"] == 1
    assert report["quantum_expiry_count"] == 1
    assert report["core_utilization"] == {"0": 1.0}
    assert report["max_time"] == 4

    metrics.reset()
    assert metrics.report()["event_count"] == 0
