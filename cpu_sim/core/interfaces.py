"""Dispatch engine interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from cpu_sim.schedulers import Discipline


class IDispatchEngine(ABC):
    """Dispatch engine contract driven by an external event source."""

    @abstractmethod
    def start(self, core_count: int, discipline: Discipline) -> None:
        """Initialize cores, waiting list and statistics."""

    @abstractmethod
    def on_arrival(self, job_id: int, time: int, run_time: int, priority: int) -> Optional[int]:
        """Accept a new job; return the core it starts on or None."""

    @abstractmethod
    def on_completion(self, core_index: int, job_id: int, time: int) -> Optional[int]:
        """Retire a finished job; return the id of the job placed on the core or None."""

    @abstractmethod
    def on_quantum_expired(self, core_index: int, time: int) -> Optional[int]:
        """Rotate a core's occupant; return the id of the job now on the core or None."""

    @abstractmethod
    def shutdown(self) -> None:
        """Release all retained jobs."""

    @abstractmethod
    def average_wait_time(self) -> float:
        """Average wait time over completed jobs."""

    @abstractmethod
    def average_turnaround_time(self) -> float:
        """Average turnaround time over completed jobs."""

    @abstractmethod
    def average_response_time(self) -> float:
        """Average response time over started jobs."""
