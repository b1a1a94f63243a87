"""Running wait/turnaround/response accumulators."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RunningStatistics:
    """Fold-only sums and counts, folded in by the dispatch engine."""

    wait_total: int = 0
    wait_count: int = 0
    turnaround_total: int = 0
    turnaround_count: int = 0
    response_total: int = 0
    response_count: int = 0

    def fold_completion(self, *, wait_time: int, turnaround_time: int) -> None:
        self.wait_total += wait_time
        self.wait_count += 1
        self.turnaround_total += turnaround_time
        self.turnaround_count += 1

    def fold_response(self, response_time: int) -> None:
        self.response_total += response_time
        self.response_count += 1

    def average_wait_time(self) -> float:
        return _average(self.wait_total, self.wait_count)

    def average_turnaround_time(self) -> float:
        return _average(self.turnaround_total, self.turnaround_count)

    def average_response_time(self) -> float:
        return _average(self.response_total, self.response_count)

    def report(self) -> dict:
        return {
            "avg_wait_time": self.average_wait_time(),
            "avg_turnaround_time": self.average_turnaround_time(),
            "avg_response_time": self.average_response_time(),
        }


def _average(total: int, count: int) -> float:
    if count == 0:
        return 0.0
    return total / count
