"""Dispatch trace event definitions."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class EventType(str, Enum):
    JOB_ARRIVED = "JobArrived"
    JOB_QUEUED = "JobQueued"
    JOB_DISPATCHED = "JobDispatched"
    JOB_PREEMPTED = "JobPreempted"
    QUANTUM_EXPIRED = "QuantumExpired"
    JOB_COMPLETED = "JobCompleted"
    CORE_IDLE = "CoreIdle"


class SimEvent(BaseModel):
    """Normalized event envelope for tracing and metrics."""

    model_config = ConfigDict(extra="forbid")

    event_id: str
    seq: int = Field(ge=0)
    correlation_id: str
    time: int = Field(ge=0)
    type: EventType
    job_id: Optional[int] = None
    core_index: Optional[int] = None
    payload: dict[str, Any] = Field(default_factory=dict)

    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode="json"), ensure_ascii=False)
